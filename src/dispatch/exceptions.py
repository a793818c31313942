"""Error taxonomy shared by every handler family."""

from collections.abc import Iterable


class DispatchError(Exception):
    """Base class for all dispatch errors."""


class MissingFieldError(DispatchError):
    """A required request parameter is absent or blank."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class ValidationError(DispatchError):
    """One or more business rules rejected the request."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__(", ".join(self.errors))


class UnsupportedDiscriminantError(DispatchError):
    """No handler is registered for the requested method or channel."""


class ProcessingError(DispatchError):
    """Simulated downstream failure while executing a request."""


class RegistryConfigurationError(DispatchError):
    """The handler registry was built from an invalid set of entries."""
