"""Bank transfer payments. No processing fee."""

import re
from decimal import Decimal

from dispatch.port import matches
from dispatch.random_source import RandomSource
from payments.methods.base import INSUFFICIENT_FUNDS_MSG, PaymentHandler
from payments.payment import PaymentMethod, PaymentRequest

IBAN_PATTERN = re.compile(r"GR\d+", re.ASCII)
BIC_CODE_PATTERN = re.compile(r"\d{5}", re.ASCII)

IBAN_ERROR_MSG = "IBAN must be in format: GR[tokens]"
BIC_CODE_ERROR_MSG = "BIC Code is not supported"


class BankTransferHandler(PaymentHandler):
    discriminant = PaymentMethod.BANK_TRANSFER
    required_fields = ("iban", "bic_code", "account_holder_name")

    def __init__(self, random_source: RandomSource | None = None, failure_rate: float = 0.1) -> None:
        super().__init__(random_source)
        self.failure_rate = failure_rate

    def check_rules(self, request: PaymentRequest) -> list[str]:
        errors = []
        if not matches(IBAN_PATTERN, request.parameter("iban")):
            errors.append(IBAN_ERROR_MSG)
        if not matches(BIC_CODE_PATTERN, request.parameter("bic_code")):
            errors.append(BIC_CODE_ERROR_MSG)
        return errors

    def simulate_processing(self, request: PaymentRequest) -> None:
        self.simulate_failure(self.failure_rate, INSUFFICIENT_FUNDS_MSG)

    def calculate_fee(self, amount: Decimal) -> Decimal:
        return Decimal("0.00")
