"""Handler registry: fixed mapping from a discriminant enum to handlers.

Built once at startup and read-only afterwards. Construction fails fast when
the entries do not line up with the enum, so a missing handler surfaces when
the service boots instead of on the first request that needs it.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

import structlog

from dispatch.exceptions import RegistryConfigurationError, UnsupportedDiscriminantError
from dispatch.port import Handler

logger = structlog.get_logger(__name__)


class HandlerRegistry:
    """Resolves a discriminant to the handler registered for it."""

    def __init__(
        self,
        discriminant_type: type[Enum],
        entries: Mapping[Enum, Handler] | Iterable[tuple[Enum, Handler]],
        label: str = "Discriminant",
        allow_partial: bool = False,
    ) -> None:
        self.discriminant_type = discriminant_type
        self.label = label

        pairs = entries.items() if isinstance(entries, Mapping) else entries
        handlers: dict[Enum, Handler] = {}
        for discriminant, handler in pairs:
            if not isinstance(discriminant, discriminant_type):
                raise RegistryConfigurationError(
                    f"{discriminant!r} is not a member of {discriminant_type.__name__}"
                )
            if discriminant in handlers:
                raise RegistryConfigurationError(f"{label} {discriminant.name} is registered twice")
            if not isinstance(handler, Handler):
                raise RegistryConfigurationError(f"{handler!r} does not implement the Handler contract")
            if handler.discriminant is not discriminant:
                raise RegistryConfigurationError(
                    f"{type(handler).__name__} handles {handler.discriminant.name}, "
                    f"not {discriminant.name}"
                )
            handlers[discriminant] = handler

        missing = [member.name for member in discriminant_type if member not in handlers]
        if missing and not allow_partial:
            raise RegistryConfigurationError(
                f"No handler registered for {discriminant_type.__name__}: {', '.join(missing)}"
            )

        self._handlers = MappingProxyType(handlers)
        logger.debug(
            "Handler registry built",
            discriminant_type=discriminant_type.__name__,
            registered=[member.name for member in handlers],
            missing=missing,
        )

    def resolve(self, discriminant) -> Handler:
        """Return the handler for ``discriminant``.

        Raises:
            UnsupportedDiscriminantError: when nothing is registered for it,
                including foreign values and None.
        """
        handler = self._handlers.get(discriminant) if isinstance(discriminant, self.discriminant_type) else None
        if handler is None:
            raise UnsupportedDiscriminantError(
                f"{self.label} {_display(discriminant)} is not currently supported"
            )
        return handler

    @property
    def discriminants(self) -> tuple[Enum, ...]:
        return tuple(self._handlers)

    def __contains__(self, discriminant) -> bool:
        return isinstance(discriminant, self.discriminant_type) and discriminant in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self):
        return iter(self._handlers.items())


def _display(discriminant) -> str:
    if isinstance(discriminant, Enum):
        return str(getattr(discriminant, "display_name", discriminant.name))
    return repr(discriminant)


def parse_discriminant(discriminant_type: type[Enum], value, label: str = "Discriminant") -> Enum:
    """Coerce a member, member name or member value (case-insensitive) to ``discriminant_type``.

    Raises:
        UnsupportedDiscriminantError: for None and anything that is not a member.
    """
    if isinstance(value, discriminant_type):
        return value
    if isinstance(value, str):
        wanted = value.strip().upper().replace(" ", "_").replace("-", "_")
        for member in discriminant_type:
            if wanted in (member.name, str(member.value).upper().replace(" ", "_")):
                return member
    raise UnsupportedDiscriminantError(f"{label} {value!r} is not currently supported")
