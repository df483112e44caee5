"""Payment gateways that charge credit cards."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

APPROVED = "approved"


@dataclass(frozen=True)
class PaymentGatewayInput:
    card_holder: str = ""
    credit_card_number: str = field(default="", repr=False)
    exp_date: str = ""
    cvv: str = field(default="", repr=False)
    amount: float = 0.0


@dataclass(frozen=True)
class PaymentGatewayOutput:
    tid: str = ""
    authorization_code: str = ""
    status: str = ""


class PaymentFailedError(Exception):
    """The gateway refused the charge."""

    def __init__(self, message: str = "payment failed") -> None:
        super().__init__(message)


class PaymentGateway(ABC):
    """A provider that charges a card."""

    @abstractmethod
    def create_transaction(self, data: PaymentGatewayInput) -> PaymentGatewayOutput:
        """Charge the card or raise on failure."""


def _approved() -> PaymentGatewayOutput:
    return PaymentGatewayOutput(
        tid="1234567890", authorization_code="123456", status=APPROVED
    )


class CieloGateway(PaymentGateway):
    """A simulated gateway that refuses amounts whose whole part is even."""

    def create_transaction(self, data: PaymentGatewayInput) -> PaymentGatewayOutput:
        print(f"processing payment cielo: {data!r}")
        if int(data.amount) % 2 == 0:
            raise PaymentFailedError()
        return _approved()


class PjBankGateway(PaymentGateway):
    """A simulated gateway that refuses about half of all charges at random."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def create_transaction(self, data: PaymentGatewayInput) -> PaymentGatewayOutput:
        print(f"processing payment PJBank: {data!r}")
        if self._rng.getrandbits(63) % 2 == 0:
            raise PaymentFailedError()
        return _approved()