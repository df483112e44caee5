"""HTTP interface and entry point of the account service."""

from __future__ import annotations

import argparse
import json
import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from rideshare.account.errors import AccountNotFoundError, all_domain_errors
from rideshare.account.mailer import MailerGatewayMemory
from rideshare.account.repository import AccountRepositoryDatabase
from rideshare.account.usecases import GetAccount, GetAccountOutput, SignUp, SignUpInput
from rideshare.database import get_database

_BODY_LIMIT = 1024 * 1024
_METRIC = "account_api_requests_total"

_STRING_FIELDS = {
    "name": "name",
    "email": "email",
    "cpf": "cpf",
    "carPlate": "car_plate",
    "password": "password",
}
_BOOL_FIELDS = {"isPassenger": "is_passenger", "isDriver": "is_driver"}


@dataclass
class AccountService:
    """The account use cases offered over HTTP."""

    sign_up: SignUp
    get_account: GetAccount


def build_account_service() -> AccountService:
    """Wire the use cases to the database and the mailer."""
    repository = AccountRepositoryDatabase(get_database())
    return AccountService(
        sign_up=SignUp(repository, MailerGatewayMemory()),
        get_account=GetAccount(repository),
    )


def sign_up_input_from_json(data: Any) -> SignUpInput:
    """Read a sign-up request body; absent or null fields take empty values."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TypeError("request body must be a JSON object")
    values: dict[str, Any] = {}
    for key, attr in _STRING_FIELDS.items():
        value = data.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise TypeError(f"field {key} must be a string")
        values[attr] = value
    for key, attr in _BOOL_FIELDS.items():
        value = data.get(key)
        if value is None:
            value = False
        if not isinstance(value, bool):
            raise TypeError(f"field {key} must be a boolean")
        values[attr] = value
    return SignUpInput(**values)


def account_to_json(output: GetAccountOutput) -> dict[str, Any]:
    """Render an account lookup result as a response body."""
    return {
        "id": output.id,
        "name": output.name,
        "email": output.email,
        "cpf": output.cpf,
        "carPlate": output.car_plate,
        "isPassenger": output.is_passenger,
        "isDriver": output.is_driver,
    }


def _error_response(err: Exception) -> tuple[Response, int]:
    if isinstance(err, AccountNotFoundError):
        status = 404
    elif isinstance(err, all_domain_errors()):
        status = 400
    else:
        status = 500
    return jsonify({"error": str(err)}), status


def create_app(account_service: AccountService) -> Flask:
    """Build the web application serving the account API."""
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = _BODY_LIMIT
    request_counts: Counter[tuple[str, str, int]] = Counter()

    @app.after_request
    def count_request(response: Response) -> Response:
        route = request.url_rule.rule if request.url_rule is not None else request.path
        request_counts[(request.method, route, response.status_code)] += 1
        return response

    @app.get("/metrics")
    def metrics() -> Response:
        lines = [f"# TYPE {_METRIC} counter"]
        for (method, route, code), count in sorted(request_counts.items()):
            lines.append(
                f'{_METRIC}{{code="{code}",method="{method}",url="{route}"}} {count}'
            )
        return Response("\n".join(lines) + "\n", mimetype="text/plain")

    @app.post("/v1/sign-up")
    def sign_up() -> Any:
        raw = request.get_data()
        try:
            data = json.loads(raw) if raw.strip() else {}
            input_data = sign_up_input_from_json(data)
        except (ValueError, TypeError) as err:
            return Response(str(err), status=400, mimetype="text/plain")
        try:
            output = account_service.sign_up.execute(input_data)
        except Exception as err:
            return _error_response(err)
        return jsonify({"account_id": output.account_id}), 201

    @app.get("/v1/accounts/<account_id>")
    def get_account(account_id: str) -> Any:
        try:
            output = account_service.get_account.execute(account_id)
        except Exception as err:
            return _error_response(err)
        return jsonify(account_to_json(output)), 200

    return app


def _parse_address(address: str) -> tuple[str, int]:
    host, _, port = address.rpartition(":")
    if not _:
        host, port = address, ""
    return host or "0.0.0.0", int(port) if port else 0


def main(argv: list[str] | None = None) -> None:
    """Load the environment and serve the account API at HOST."""
    parser = argparse.ArgumentParser(prog="account-api", description="Account service")
    parser.add_argument("--env-file", default=".env", help="file of environment settings")
    args = parser.parse_args(argv)

    env_file = Path(args.env_file)
    if not env_file.is_file():
        raise SystemExit(f"Error loading .env file: {env_file} not found")
    load_dotenv(env_file)

    app = create_app(build_account_service())
    host, port = _parse_address(os.environ.get("HOST", ""))
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()