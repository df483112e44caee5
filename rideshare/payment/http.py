"""HTTP interface, queue consumer and entry point of the payment service."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from rideshare.database import get_database
from rideshare.messaging import Queue, RabbitMQAdapter
from rideshare.payment.fallback import build_payment_processor
from rideshare.payment.repository import TransactionRepositoryDatabase
from rideshare.payment.transaction import ProcessPaymentEvent
from rideshare.payment.usecases import ProcessPayment, ProcessPaymentInput

logger = logging.getLogger(__name__)

PROCESS_PAYMENT_QUEUE = "rideCompleted.processPayment"


def build_process_payment() -> ProcessPayment:
    """Wire the payment use case to the database and the gateway chain."""
    return ProcessPayment(
        TransactionRepositoryDatabase(get_database()), build_payment_processor()
    )


def _event_from_message(message: bytes) -> ProcessPaymentEvent:
    try:
        data = json.loads(message)
    except ValueError:
        data = None
    if not isinstance(data, dict):
        return ProcessPaymentEvent(ride_id="", fare=0.0)
    ride_id = data.get("ride_id")
    fare = data.get("fare")
    return ProcessPaymentEvent(
        ride_id=ride_id if isinstance(ride_id, str) else "",
        fare=float(fare)
        if isinstance(fare, (int, float)) and not isinstance(fare, bool)
        else 0.0,
    )


def handle_queue_message(process_payment: ProcessPayment, message: bytes) -> None:
    """Charge the fare of a completed ride read from a queue message."""
    event = _event_from_message(message)
    process_payment.execute(ProcessPaymentInput(ride_id=event.ride_id, amount=event.fare))


def register_queue_consumer(process_payment: ProcessPayment, queue: Queue) -> Any:
    """Process payments for every completed ride arriving on the queue."""
    return queue.consume(
        PROCESS_PAYMENT_QUEUE,
        lambda message: handle_queue_message(process_payment, message),
    )


def _input_from_json(data: Any) -> ProcessPaymentInput:
    if data is None:
        return ProcessPaymentInput()
    if not isinstance(data, dict):
        raise TypeError("request body must be a JSON object")
    ride_id = data.get("ride_id")
    if ride_id is None:
        ride_id = ""
    if not isinstance(ride_id, str):
        raise TypeError("field ride_id must be a string")
    amount = data.get("amount")
    if amount is None:
        amount = 0.0
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise TypeError("field amount must be a number")
    return ProcessPaymentInput(ride_id=ride_id, amount=float(amount))


def create_app(process_payment: ProcessPayment) -> Flask:
    """Build the web application serving the payment API."""
    app = Flask(__name__)

    @app.post("/process_payment")
    def process_payment_handler() -> Any:
        raw = request.get_data()
        try:
            data = json.loads(raw) if raw.strip() else None
            input_data = _input_from_json(data)
        except (ValueError, TypeError) as err:
            return jsonify({"message": str(err)}), 400
        if input_data == ProcessPaymentInput():
            return jsonify({"message": "Invalid request body"}), 400
        try:
            process_payment.execute(input_data)
        except Exception as err:
            return jsonify({"message": str(err)}), 500
        return jsonify({"message": "Payment processed successfully"}), 200

    return app


def _parse_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep:
        host, port = address, ""
    return host or "0.0.0.0", int(port) if port else 0


def main(argv: list[str] | None = None) -> None:
    """Load the environment, consume ride events and serve the payment API."""
    parser = argparse.ArgumentParser(prog="payment-api", description="Payment service")
    parser.add_argument("--env-file", default=".env", help="file of environment settings")
    args = parser.parse_args(argv)

    env_file = Path(args.env_file)
    if not env_file.is_file():
        raise SystemExit("Error loading .env file")
    load_dotenv(env_file)

    process_payment = build_process_payment()
    queue = RabbitMQAdapter(os.environ.get("RABBITMQ_URI", ""))
    queue.connect()
    register_queue_consumer(process_payment, queue)

    app = create_app(process_payment)
    host, port = _parse_address(os.environ.get("HOST", ""))
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()