"""Storage of payment transactions in the relational database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping

from rideshare.database import DatabaseConnection
from rideshare.payment.transaction import Transaction

_INSERT = (
    "insert into gct.transaction (transaction_id, ride_id, amount, status, date) "
    "values ($1, $2, $3, $4, $5)"
)
_SELECT_BY_ID = (
    "select transaction_id, ride_id, amount, status, date "
    "from gct.transaction where transaction_id = $1"
)

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class TransactionRepository(ABC):
    """Where transactions are kept."""

    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> None:
        """Store a transaction."""

    @abstractmethod
    def get_transaction_by_id(self, transaction_id: str) -> Transaction:
        """Return the transaction with this id or raise LookupError."""


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return _ZERO_TIME
        if parsed.tzinfo is None:
            return _ZERO_TIME
        return parsed
    return _ZERO_TIME


def transaction_from_row(row: Mapping[str, Any]) -> Transaction:
    """Rebuild a transaction from a database row; unreadable dates become year 1."""
    return Transaction(
        transaction_id=row["transaction_id"],
        ride_id=row["ride_id"],
        amount=float(row["amount"]),
        status=row["status"],
        date=_parse_date(row.get("date")),
    )


class TransactionRepositoryDatabase(TransactionRepository):
    """Transactions stored in the ``gct.transaction`` table."""

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection = connection

    def save_transaction(self, transaction: Transaction) -> None:
        self._connection.execute(
            _INSERT,
            transaction.transaction_id,
            transaction.ride_id,
            transaction.amount,
            transaction.status,
            transaction.date,
        )

    def get_transaction_by_id(self, transaction_id: str) -> Transaction:
        row = self._connection.query_one(_SELECT_BY_ID, transaction_id)
        if row is None:
            raise LookupError(f"transaction not found: {transaction_id}")
        return transaction_from_row(row)