"""HTTP interface and entry point of the ride service."""

from __future__ import annotations

import argparse
import json
import logging
import os
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from flask import Flask, Response, jsonify, request

from rideshare.database import get_database
from rideshare.messaging import RabbitMQAdapter
from rideshare.ride.account_gateway import AccountGateway
from rideshare.ride.repository import PositionRepositoryDatabase, RideRepositoryDatabase
from rideshare.ride.usecases import (
    AcceptRide,
    AcceptRideInput,
    FinishRide,
    FinishRideInput,
    GetRide,
    GetRideOutput,
    RequestRide,
    RequestRideInput,
    StartRide,
    StartRideInput,
)

logger = logging.getLogger(__name__)

_BODY_LIMIT = 1024 * 1024
_METRIC = "ride_requests_total"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


@dataclass
class RideService:
    """The ride use cases offered over HTTP."""

    get_ride: GetRide
    request_ride: RequestRide
    start_ride: StartRide
    accept_ride: AcceptRide
    finish_ride: FinishRide


def build_ride_service() -> RideService:
    """Wire the use cases to the database, the account service and the broker."""
    connection = get_database()
    rides = RideRepositoryDatabase(connection)
    positions = PositionRepositoryDatabase(connection)
    accounts = AccountGateway()
    queue = RabbitMQAdapter(os.environ.get("RABBITMQ_URI", ""))
    queue.connect()
    return RideService(
        get_ride=GetRide(rides, positions),
        request_ride=RequestRide(accounts, rides),
        start_ride=StartRide(rides),
        accept_ride=AcceptRide(accounts, rides),
        finish_ride=FinishRide(rides, positions, queue),
    )


def _rfc3339(date: datetime) -> str:
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    text = date.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def ride_to_json(output: GetRideOutput) -> dict[str, Any]:
    """Render a ride description as a response body."""
    return {
        "ride_id": output.ride_id,
        "passenger_id": output.passenger_id,
        "driver_id": output.driver_id,
        "status": output.status,
        "fare": output.fare,
        "distance": output.distance,
        "from_lat": output.from_lat,
        "date": _rfc3339(output.date),
    }


def _read_body() -> dict[str, Any]:
    raw = request.get_data()
    data = json.loads(raw) if raw.strip() else None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError("request body must be a JSON object")
    return data


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field {key} must be a string")
    return value


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"field {key} must be a number")
    return float(value)


def _message(err: Exception, status: int) -> tuple[Response, int]:
    return jsonify({"message": str(err)}), status


def create_app(ride_service: RideService) -> Flask:
    """Build the web application serving the ride API."""
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = _BODY_LIMIT
    request_counts: Counter[tuple[str, str, int]] = Counter()

    @app.after_request
    def record_request(response: Response) -> Response:
        route = request.url_rule.rule if request.url_rule is not None else request.path
        request_counts[(request.method, route, response.status_code)] += 1
        logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.get("/metrics")
    def metrics() -> Response:
        lines = [f"# TYPE {_METRIC} counter"]
        for (method, route, code), count in sorted(request_counts.items()):
            lines.append(
                f'{_METRIC}{{code="{code}",method="{method}",url="{route}"}} {count}'
            )
        return Response("\n".join(lines) + "\n", mimetype="text/plain")

    @app.post("/v1/ride/request")
    def request_ride() -> Any:
        try:
            data = _read_body()
            input_data = RequestRideInput(
                passenger_id=_text(data, "passenger_id"),
                from_lat=_number(data, "from_lat"),
                from_long=_number(data, "from_long"),
                to_lat=_number(data, "to_lat"),
                to_long=_number(data, "to_long"),
            )
        except (ValueError, TypeError) as err:
            return _message(err, 400)
        try:
            output = ride_service.request_ride.execute(input_data)
        except Exception as err:
            return _message(err, 400)
        return jsonify({"ride_id": output.ride_id}), 200

    @app.post("/v1/ride/accept")
    def accept_ride() -> Any:
        try:
            data = _read_body()
            input_data = AcceptRideInput(
                driver_id=_text(data, "driver_id"), ride_id=_text(data, "ride_id")
            )
        except (ValueError, TypeError) as err:
            return _message(err, 400)
        try:
            ride_service.accept_ride.execute(input_data)
        except Exception as err:
            return _message(err, 400)
        return Response(status=204)

    @app.post("/v1/ride/start")
    def start_ride() -> Any:
        try:
            input_data = StartRideInput(ride_id=_text(_read_body(), "ride_id"))
        except (ValueError, TypeError) as err:
            return _message(err, 400)
        try:
            ride_service.start_ride.execute(input_data)
        except Exception as err:
            return _message(err, 400)
        return Response(status=204)

    @app.post("/v1/ride/finish")
    def finish_ride() -> Any:
        try:
            input_data = FinishRideInput(ride_id=_text(_read_body(), "ride_id"))
        except (ValueError, TypeError) as err:
            return _message(err, 400)
        try:
            ride_service.finish_ride.execute(input_data)
        except Exception as err:
            return _message(err, 422)
        return Response(status=204)

    @app.get("/v1/ride/<ride_id>")
    def get_ride(ride_id: str) -> Any:
        try:
            output = ride_service.get_ride.execute(ride_id)
        except Exception as err:
            return _message(err, 404)
        return jsonify(ride_to_json(output)), 200

    return app


def main(argv: list[str] | None = None) -> None:
    """Serve the ride API."""
    parser = argparse.ArgumentParser(prog="ride-api", description="Ride service")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    app = create_app(build_ride_service())
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()