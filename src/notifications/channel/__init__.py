"""Channel handler registry and notification service factory.

One handler per NotificationChannel, built once from DispatchSettings.
get_notification_service() / set_notification_service() swap the active
service; tests install one over a ScriptedRandomSource.
"""

from dispatch.audit import AuditTrail
from dispatch.config import DispatchSettings, get_settings
from dispatch.random_source import RandomSource, SystemRandomSource
from dispatch.registry import HandlerRegistry
from dispatch.service import DispatchService
from notifications.channel.email import EmailHandler
from notifications.channel.push import PushHandler
from notifications.channel.slack import SlackHandler
from notifications.channel.sms import SmsHandler
from notifications.notification import NotificationChannel

_current_service: DispatchService | None = None


def build_channel_registry(
    settings: DispatchSettings | None = None,
    random_source: RandomSource | None = None,
) -> HandlerRegistry:
    settings = settings or get_settings()
    random_source = random_source or SystemRandomSource()
    failure_rate = settings.notification_failure_rate

    handlers = [
        EmailHandler(random_source, failure_rate=failure_rate),
        SmsHandler(random_source, failure_rate=failure_rate),
        PushHandler(random_source, failure_rate=failure_rate),
        SlackHandler(random_source, failure_rate=failure_rate),
    ]
    return HandlerRegistry(
        NotificationChannel,
        [(handler.discriminant, handler) for handler in handlers],
        label="Channel",
    )


def build_notification_service(
    settings: DispatchSettings | None = None,
    random_source: RandomSource | None = None,
    audit: AuditTrail | None = None,
) -> DispatchService:
    settings = settings or get_settings()
    audit = audit if audit is not None else AuditTrail(settings.audit_max_results)
    return DispatchService(build_channel_registry(settings, random_source), audit=audit)


def get_notification_service() -> DispatchService:
    """Return the current notification service, building the default on first use."""
    global _current_service
    if _current_service is None:
        _current_service = build_notification_service()
    return _current_service


def set_notification_service(service: DispatchService) -> None:
    """Override the active notification service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_notification_service() -> None:
    """Reset to the default service."""
    global _current_service
    _current_service = None
