"""Payment request and the enums it is built from."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from dispatch.exceptions import ProcessingError
from dispatch.money import to_decimal
from dispatch.registry import parse_discriminant


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PaymentMethod(Enum):
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"
    CRYPTO = "Cryptocurrency"
    BANK_TRANSFER = "Bank Transfer"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "PaymentMethod":
        return parse_discriminant(cls, value, label="Payment method")


class Currency(Enum):
    EUR = ("Euro", "€")
    USD = ("US Dollar", "$")
    GBP = ("British Pound", "£")

    def __init__(self, display_name: str, symbol: str) -> None:
        self.display_name = display_name
        self.symbol = symbol


class CryptoNetwork(Enum):
    BITCOIN = "Bitcoin"
    ETHEREUM = "Ethereum"


class PaymentProcessingError(ProcessingError):
    """Simulated payment provider failure (declines, congestion)."""


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PaymentRequest:
    """A payment to run through the handler registered for ``method``.

    ``details`` holds the method-specific parameters (card number, wallet
    address, IBAN, ...). It is copied and frozen on construction.
    """

    amount: Decimal
    method: PaymentMethod
    details: Mapping[str, str] = field(default_factory=dict)
    currency: Currency = Currency.EUR

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        frozen = {key: (None if value is None else str(value)) for key, value in dict(self.details).items()}
        object.__setattr__(self, "details", MappingProxyType(frozen))

    @property
    def discriminant(self) -> PaymentMethod:
        return self.method

    def parameter(self, name: str) -> str | None:
        return self.details.get(name)
