"""Payment transactions and the event that asks for one."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar

WAITING_PAYMENT = "waiting_payment"
PAID = "paid"


@dataclass
class Transaction:
    """A charge made for a ride."""

    transaction_id: str
    ride_id: str
    amount: float
    status: str
    date: datetime

    @classmethod
    def create(cls, ride_id: str, amount: float) -> Transaction:
        """Start a new transaction for a ride, waiting for payment."""
        return cls(
            transaction_id=str(uuid.uuid4()),
            ride_id=ride_id,
            amount=amount,
            status=WAITING_PAYMENT,
            date=datetime.now(timezone.utc),
        )

    def pay(self) -> None:
        """Mark the transaction as paid."""
        self.status = PAID


@dataclass(frozen=True)
class ProcessPaymentEvent:
    """A completed ride whose fare is to be charged."""

    name: ClassVar[str] = "ride.completed"

    ride_id: str
    fare: float