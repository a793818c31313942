"""Notification request and the enums it is built from."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from dispatch.exceptions import ProcessingError
from dispatch.registry import parse_discriminant


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationChannel(Enum):
    EMAIL = "Email"
    SMS = "SMS"
    PUSH = "Push"
    SLACK = "Slack"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "NotificationChannel":
        return parse_discriminant(cls, value, label="Channel")


class Priority(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    URGENT = "Urgent"


class NotificationProcessingError(ProcessingError):
    """Simulated delivery failure at the channel provider."""


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------
_FIELD_PARAMETERS = ("recipient", "subject", "message")


@dataclass(frozen=True)
class NotificationRequest:
    recipient: str
    message: str
    channel: NotificationChannel
    subject: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)
    priority: Priority = Priority.NORMAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def discriminant(self) -> NotificationChannel:
        return self.channel

    def parameter(self, name: str) -> str | None:
        """Look up a top-level field (recipient, subject, message) or a metadata entry."""
        if name in _FIELD_PARAMETERS:
            return getattr(self, name)
        return self.metadata.get(name)
