"""Storage of accounts in the relational database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from rideshare.account.entity import Account, new_account
from rideshare.account.errors import AccountNotFoundError
from rideshare.database import DatabaseConnection

_SELECT_BY_EMAIL = (
    "select account_id, password, name, email, cpf, car_plate, is_passenger, is_driver "
    "from gct.account where email = $1"
)
_SELECT_BY_ID = (
    "select account_id, password, name, email, cpf, car_plate, is_passenger, is_driver "
    "from gct.account where account_id = $1"
)
_INSERT = (
    "insert into gct.account "
    "(account_id, name, email, cpf, car_plate, is_passenger, is_driver, password) "
    "values ($1, $2, $3, $4, $5, $6, $7, $8)"
)


class AccountRepository(ABC):
    """Where accounts are kept."""

    @abstractmethod
    def get_account_by_email(self, email: str) -> Account:
        """Return the account with this e-mail or raise AccountNotFoundError."""

    @abstractmethod
    def get_account_by_id(self, account_id: str) -> Account:
        """Return the account with this id or raise AccountNotFoundError."""

    @abstractmethod
    def save_account(self, account: Account) -> None:
        """Store a new account."""


def account_from_row(row: Mapping[str, Any]) -> Account:
    """Rebuild an account from a database row, validating every field."""
    return new_account(
        row["account_id"],
        row["name"],
        row["email"],
        row["cpf"],
        row.get("car_plate") or "",
        row["password"],
        bool(row["is_passenger"]),
        bool(row["is_driver"]),
    )


class AccountRepositoryDatabase(AccountRepository):
    """Accounts stored in the ``gct.account`` table."""

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection = connection

    def get_account_by_email(self, email: str) -> Account:
        row = self._connection.query_one(_SELECT_BY_EMAIL, email)
        if row is None:
            raise AccountNotFoundError()
        return account_from_row(row)

    def get_account_by_id(self, account_id: str) -> Account:
        row = self._connection.query_one(_SELECT_BY_ID, account_id)
        if row is None:
            raise AccountNotFoundError()
        return account_from_row(row)

    def save_account(self, account: Account) -> None:
        self._connection.execute(
            _INSERT,
            account.id,
            account.name,
            account.email,
            account.cpf,
            account.car_plate,
            account.is_passenger,
            account.is_driver,
            account.password.value,
        )