"""Payment use cases."""

from __future__ import annotations

from dataclasses import dataclass

from rideshare.payment.fallback import PaymentProcessor
from rideshare.payment.gateways import APPROVED, PaymentGatewayInput
from rideshare.payment.repository import TransactionRepository
from rideshare.payment.transaction import Transaction

_CARD_HOLDER = "Cliente Exemplo"
_CARD_NUMBER = "[card-number]"
_EXP_DATE = "05/2027"
_CVV = "123"


@dataclass(frozen=True)
class ProcessPaymentInput:
    ride_id: str = ""
    amount: float = 0.0


class ProcessPayment:
    """Charge a ride's fare and record the paid transaction."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        payment_processor: PaymentProcessor,
    ) -> None:
        self._transaction_repository = transaction_repository
        self._payment_processor = payment_processor

    def execute(self, input_data: ProcessPaymentInput) -> None:
        charge = PaymentGatewayInput(
            card_holder=_CARD_HOLDER,
            credit_card_number=_CARD_NUMBER,
            exp_date=_EXP_DATE,
            cvv=_CVV,
            amount=input_data.amount,
        )
        transaction = Transaction.create(input_data.ride_id, input_data.amount)
        output = self._payment_processor.process_payment(charge)
        if output.status == APPROVED:
            transaction.pay()
            self._transaction_repository.save_transaction(transaction)