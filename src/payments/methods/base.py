"""Shared behaviour of the payment method handlers."""

from abc import abstractmethod
from decimal import Decimal

import structlog

from dispatch.port import ExecutionResult, ExecutionStatus, Handler
from payments.payment import PaymentProcessingError, PaymentRequest

logger = structlog.get_logger(__name__)

INSUFFICIENT_FUNDS_MSG = "Insufficient funds"


class PaymentHandler(Handler):
    """Payment handler: simulate the provider call, charge the fee, return a receipt."""

    identifier_prefix = "TXN"
    processing_error = PaymentProcessingError

    def execute(self, request: PaymentRequest) -> ExecutionResult:
        logger.info(
            "Processing payment",
            method=self.discriminant.name,
            amount=str(request.amount),
            currency=request.currency.name,
        )
        self.simulate_processing(request)
        fee = self.calculate_fee(request.amount)

        result = ExecutionResult(
            status=ExecutionStatus.COMPLETED,
            identifier=self.new_identifier(),
            discriminant=self.discriminant.name,
            fee=fee,
            amount=request.amount,
            currency=request.currency.name,
        )
        logger.info("Payment completed", method=self.discriminant.name, transaction_id=result.identifier)
        return result

    def estimate_cost(self, request: PaymentRequest) -> Decimal:
        return self.calculate_fee(request.amount)

    @abstractmethod
    def calculate_fee(self, amount: Decimal) -> Decimal:
        """Processing fee for ``amount``."""
        ...

    @abstractmethod
    def simulate_processing(self, request: PaymentRequest) -> None:
        """Raise PaymentProcessingError when the simulated provider call fails."""
        ...
