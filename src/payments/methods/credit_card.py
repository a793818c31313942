"""Credit card payments.

Validation rules:
- CVV must be 3-4 digits
- Expiry date in MM/yyyy, valid through the last day of that month
- Card number must be 13-19 digits (spaces and dashes ignored) and pass Luhn
- Cardholder name required

Fee: 2.9% + €0.30 per transaction
"""

import calendar
import re
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from dispatch.money import round_half_up
from dispatch.port import matches
from dispatch.random_source import RandomSource
from payments.methods.base import INSUFFICIENT_FUNDS_MSG, PaymentHandler
from payments.payment import PaymentMethod, PaymentRequest

CVV_PATTERN = re.compile(r"\d{3,4}", re.ASCII)
CARD_NUMBER_CLEANUP_PATTERN = re.compile(r"[\s-]", re.ASCII)
CARD_NUMBER_LENGTH_PATTERN = re.compile(r"\d{13,19}", re.ASCII)
EXPIRY_DATE_PATTERN = re.compile(r"(0[1-9]|1[0-2])/(\d{4})", re.ASCII)

CVV_ERROR_MSG = "CVV must be 3-4 digits"
CARD_NUMBER_LENGTH_ERROR_MSG = "Card number must be 13-19 digits"
CARD_NUMBER_LUHN_ERROR_MSG = "Invalid card number - failed Luhn check"
EXPIRY_DATE_FORMAT_ERROR_MSG = "Expiry date must be in MM/yyyy format"
EXPIRY_DATE_EXPIRED_MSG = "Card has expired"

PERCENTAGE_FEE = Decimal("0.029")
FIXED_FEE = Decimal("0.30")


def passes_luhn_check(card_number: str) -> bool:
    """Luhn checksum: double every second digit from the right, subtract 9 above 9."""
    total = 0
    for position, char in enumerate(reversed(card_number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


class CreditCardHandler(PaymentHandler):
    discriminant = PaymentMethod.CREDIT_CARD
    required_fields = ("card_number", "cvv", "expiry_date", "cardholder_name")

    def __init__(
        self,
        random_source: RandomSource | None = None,
        failure_rate: float = 0.1,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(random_source)
        self.failure_rate = failure_rate
        self.today = today

    def check_rules(self, request: PaymentRequest) -> list[str]:
        errors = []
        if not matches(CVV_PATTERN, request.parameter("cvv")):
            errors.append(CVV_ERROR_MSG)

        expiry_error = self._check_expiry(request.parameter("expiry_date"))
        if expiry_error:
            errors.append(expiry_error)

        card_number = CARD_NUMBER_CLEANUP_PATTERN.sub("", request.parameter("card_number"))
        if not matches(CARD_NUMBER_LENGTH_PATTERN, card_number):
            errors.append(CARD_NUMBER_LENGTH_ERROR_MSG)
        elif not passes_luhn_check(card_number):
            errors.append(CARD_NUMBER_LUHN_ERROR_MSG)

        return errors

    def _check_expiry(self, expiry_date: str) -> str | None:
        match = EXPIRY_DATE_PATTERN.fullmatch(expiry_date)
        if match is None:
            return EXPIRY_DATE_FORMAT_ERROR_MSG

        month, year = int(match.group(1)), int(match.group(2))
        if year < 1:
            return EXPIRY_DATE_FORMAT_ERROR_MSG
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        if last_day < self.today():
            return EXPIRY_DATE_EXPIRED_MSG
        return None

    def simulate_processing(self, request: PaymentRequest) -> None:
        self.simulate_failure(self.failure_rate, INSUFFICIENT_FUNDS_MSG)

    def calculate_fee(self, amount: Decimal) -> Decimal:
        return round_half_up(amount * PERCENTAGE_FEE + FIXED_FEE)
