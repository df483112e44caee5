"""Client of the account service's HTTP API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

DEFAULT_BASE_URL = "http://127.0.0.1:3001"
_TIMEOUT = 5.0


class AccountGatewayError(Exception):
    """The account service could not be reached or refused the request."""


@dataclass(frozen=True)
class Account:
    id: str = ""
    name: str = ""
    email: str = ""
    cpf: str = ""
    car_plate: str = ""
    is_passenger: bool = False
    is_driver: bool = False


@dataclass(frozen=True)
class SignUpInput:
    name: str
    email: str
    cpf: str
    car_plate: str
    is_passenger: bool
    is_driver: bool
    password: str = field(repr=False)

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "cpf": self.cpf,
            "carPlate": self.car_plate,
            "isPassenger": self.is_passenger,
            "isDriver": self.is_driver,
            "password": self.password,
        }


def _account_from_json(data: Any) -> Account:
    if not isinstance(data, dict):
        raise AccountGatewayError("unexpected account response")
    return Account(
        id=data.get("id") or "",
        name=data.get("name") or "",
        email=data.get("email") or "",
        cpf=data.get("cpf") or "",
        car_plate=data.get("carPlate") or "",
        is_passenger=bool(data.get("isPassenger", False)),
        is_driver=bool(data.get("isDriver", False)),
    )


def _status(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason}".strip()


class AccountGateway:
    """Fetches and creates accounts through the account service."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self._base_url = base_url.rstrip("/")

    def get_account(self, account_id: str) -> Account:
        try:
            response = requests.get(
                f"{self._base_url}/v1/accounts/{account_id}", timeout=_TIMEOUT
            )
        except requests.RequestException as err:
            raise AccountGatewayError(str(err)) from err
        if response.status_code != 200:
            raise AccountGatewayError(f"error fetching account: {_status(response)}")
        try:
            return _account_from_json(response.json())
        except ValueError as err:
            raise AccountGatewayError(str(err)) from err

    def sign_up(self, data: SignUpInput) -> str:
        """Create an account and return its id."""
        try:
            response = requests.post(
                f"{self._base_url}/sign-up", json=data.to_json(), timeout=_TIMEOUT
            )
        except requests.RequestException as err:
            raise AccountGatewayError(str(err)) from err
        if response.status_code != 201:
            raise AccountGatewayError(f"error signing up account: {_status(response)}")
        try:
            body = response.json()
        except ValueError as err:
            raise AccountGatewayError(str(err)) from err
        if not isinstance(body, dict):
            raise AccountGatewayError("unexpected sign-up response")
        return body.get("accountId") or ""