"""Chains of payment processors that fall back to the next on failure."""

from __future__ import annotations

from rideshare.payment.gateways import (
    CieloGateway,
    PaymentGateway,
    PaymentGatewayInput,
    PaymentGatewayOutput,
    PjBankGateway,
)


class PaymentProcessor:
    """Charges through one gateway, passing to the next processor if it fails."""

    def __init__(
        self, next_processor: PaymentProcessor | None, gateway: PaymentGateway
    ) -> None:
        self.next = next_processor
        self._gateway = gateway

    def process_payment(self, data: PaymentGatewayInput) -> PaymentGatewayOutput:
        try:
            return self._gateway.create_transaction(data)
        except Exception:
            if self.next is None:
                raise
        return self.next.process_payment(data)


class CieloPaymentProcessor(PaymentProcessor):
    """A processor in front of the Cielo gateway."""


class PjBankPaymentProcessor(PaymentProcessor):
    """A processor in front of the PJBank gateway."""


def build_payment_processor() -> PaymentProcessor:
    """Cielo first, then PJBank."""
    pjbank = PjBankPaymentProcessor(None, PjBankGateway())
    return CieloPaymentProcessor(pjbank, CieloGateway())