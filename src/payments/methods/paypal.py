"""PayPal payments.

Only gmail.com account addresses are accepted, and the OAuth token must be a
``Bearer`` token of 10 hex characters.

Fee: 3.4% + €0.35 per transaction
"""

import re
from decimal import Decimal

from dispatch.money import round_half_up
from dispatch.port import matches
from dispatch.random_source import RandomSource
from payments.methods.base import INSUFFICIENT_FUNDS_MSG, PaymentHandler
from payments.payment import PaymentMethod, PaymentRequest

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@gmail\.com")
TOKEN_PATTERN = re.compile(r"Bearer [a-fA-F0-9]{10}")

EMAIL_ERROR_MSG = "Email must be in format: smth@gmail.com"
TOKEN_ERROR_MSG = "Token must be in format: Bearer [10 tokens]"

PERCENTAGE_FEE = Decimal("0.034")
FIXED_FEE = Decimal("0.35")


class PayPalHandler(PaymentHandler):
    discriminant = PaymentMethod.PAYPAL
    required_fields = ("email", "token")

    def __init__(self, random_source: RandomSource | None = None, failure_rate: float = 0.1) -> None:
        super().__init__(random_source)
        self.failure_rate = failure_rate

    def check_rules(self, request: PaymentRequest) -> list[str]:
        errors = []
        if not matches(EMAIL_PATTERN, request.parameter("email")):
            errors.append(EMAIL_ERROR_MSG)
        if not matches(TOKEN_PATTERN, request.parameter("token")):
            errors.append(TOKEN_ERROR_MSG)
        return errors

    def simulate_processing(self, request: PaymentRequest) -> None:
        self.simulate_failure(self.failure_rate, INSUFFICIENT_FUNDS_MSG)

    def calculate_fee(self, amount: Decimal) -> Decimal:
        return round_half_up(amount * PERCENTAGE_FEE + FIXED_FEE)
