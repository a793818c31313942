"""Handler port, the contract every payment and notification handler implements.

Defines the outcome value objects (ValidationResult, ExecutionResult) and the
abstract Handler. Concrete handlers live in ``payments.methods`` and
``notifications.channel``; the dispatching service only ever talks to this
interface.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from dispatch.exceptions import MissingFieldError, ProcessingError
from dispatch.random_source import RandomSource, SystemRandomSource


class ExecutionStatus(Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a handler's business-rule check."""

    valid: bool
    errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", tuple(self.errors))
        if self.valid and self.errors:
            raise ValueError("A valid result cannot carry errors")
        if not self.valid and not self.errors:
            raise ValueError("An invalid result needs at least one error")

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failure(cls, errors: Iterable[str]) -> "ValidationResult":
        return cls(valid=False, errors=tuple(errors))

    @classmethod
    def from_errors(cls, errors: Iterable[str]) -> "ValidationResult":
        """Success when ``errors`` is empty, failure otherwise."""
        errors = tuple(errors)
        return cls.failure(errors) if errors else cls.success()


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a single dispatched request."""

    status: ExecutionStatus
    identifier: str | None
    discriminant: str
    fee: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    amount: Decimal | None = None
    currency: str | None = None
    provider_reference: str | None = None
    error_message: str | None = None

    @property
    def gross_amount(self) -> Decimal | None:
        if self.amount is None:
            return None
        return self.amount + self.fee

    @property
    def succeeded(self) -> bool:
        return self.status is ExecutionStatus.COMPLETED

    @classmethod
    def failed(
        cls,
        discriminant: str,
        error_message: str,
        amount: Decimal | None = None,
        currency: str | None = None,
    ) -> "ExecutionResult":
        return cls(
            status=ExecutionStatus.FAILED,
            identifier=None,
            discriminant=discriminant,
            fee=Decimal("0.00"),
            amount=amount,
            currency=currency,
            error_message=error_message,
        )

    def to_dict(self) -> dict:
        data = {
            "status": self.status.value,
            "identifier": self.identifier,
            "discriminant": self.discriminant,
            "fee": str(self.fee),
            "timestamp": self.timestamp.isoformat(),
        }
        if self.amount is not None:
            data["amount"] = str(self.amount)
            data["gross_amount"] = str(self.gross_amount)
        optional = {
            "currency": self.currency,
            "provider_reference": self.provider_reference,
            "error_message": self.error_message,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


def generate_identifier(prefix: str) -> str:
    """Return ``PREFIX-`` followed by 8 upper-case hex characters."""
    return f"{prefix}-{uuid4().hex[:8].upper()}"


def require_field(value, name: str) -> str:
    """Return ``value`` as a string, or raise MissingFieldError when absent or blank."""
    if value is None or not str(value).strip():
        raise MissingFieldError(name)
    return str(value)


def matches(pattern: re.Pattern, value: str) -> bool:
    return pattern.fullmatch(value) is not None


class Handler(ABC):
    """Abstract handler for one discriminant value.

    Subclasses declare ``discriminant``, ``identifier_prefix`` and
    ``required_fields`` and implement the abstract hooks below. ``validate``
    is a template: required fields are checked first (raising
    MissingFieldError), then ``check_rules`` collects every rule violation
    in order.
    """

    discriminant: Enum
    identifier_prefix: str = "ID"
    required_fields: tuple[str, ...] = ()
    processing_error: type[ProcessingError] = ProcessingError

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self.random_source = random_source or SystemRandomSource()

    def validate(self, request) -> ValidationResult:
        """Check required fields, then apply this handler's business rules."""
        self.check_required(request)
        return ValidationResult.from_errors(self.check_rules(request))

    def check_required(self, request) -> None:
        """Raise MissingFieldError for the first absent required field."""
        for name in self.required_fields:
            require_field(request.parameter(name), name)

    @abstractmethod
    def check_rules(self, request) -> list[str]:
        """Return every rule violation for the request, in rule order."""
        ...

    @abstractmethod
    def execute(self, request) -> ExecutionResult:
        """Run the (simulated) operation. Assumes validation already passed."""
        ...

    @abstractmethod
    def estimate_cost(self, request) -> Decimal:
        """Return the fee this request would incur, without executing it."""
        ...

    def simulate_failure(self, failure_rate: float, message: str) -> None:
        """Raise the handler's processing error when a draw falls below the rate."""
        if self.random_source.random() < failure_rate:
            raise self.processing_error(message)

    def new_identifier(self) -> str:
        return generate_identifier(self.identifier_prefix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(discriminant={self.discriminant.name})"
