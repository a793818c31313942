"""End-to-end tests for the notification service built by build_notification_service()."""

from decimal import Decimal

import pytest
from dispatch.config import DispatchSettings
from dispatch.exceptions import MissingFieldError, ValidationError
from dispatch.port import ExecutionStatus
from dispatch.random_source import ScriptedRandomSource
from notifications.channel import (
    build_channel_registry,
    build_notification_service,
    get_notification_service,
    set_notification_service,
)
from notifications.notification import NotificationChannel, NotificationProcessingError
from support.notifications import make_notification


@pytest.fixture()
def settings():
    return DispatchSettings(_env_file=None)


@pytest.fixture()
def service(settings, succeeding_source):
    return build_notification_service(settings, succeeding_source)


class TestRegistry:
    def test_every_channel_has_a_handler(self, settings):
        assert set(build_channel_registry(settings).discriminants) == set(NotificationChannel)

    def test_failure_rate_comes_from_settings(self):
        registry = build_channel_registry(DispatchSettings(_env_file=None, notification_failure_rate=0.25))
        assert all(handler.failure_rate == 0.25 for _, handler in registry)


class TestSendNotification:
    @pytest.mark.parametrize(
        "channel, cost",
        [
            (NotificationChannel.EMAIL, "0.001"),
            (NotificationChannel.SMS, "0.05"),
            (NotificationChannel.PUSH, "0.0001"),
            (NotificationChannel.SLACK, "0.00"),
        ],
    )
    def test_each_channel(self, service, channel, cost):
        result = service.dispatch(make_notification(channel))
        assert result.status is ExecutionStatus.COMPLETED
        assert result.discriminant == channel.name
        assert result.fee == Decimal(cost)

    def test_invalid_recipient(self, service):
        with pytest.raises(ValidationError, match="Phone number must be in E.164 format"):
            service.dispatch(make_notification(NotificationChannel.SMS, recipient="12345"))

    def test_missing_message(self, service):
        with pytest.raises(MissingFieldError):
            service.dispatch(make_notification(NotificationChannel.SLACK, message=""))

    def test_failure_rate_boundary(self, settings):
        # a draw equal to the rate is not a failure
        service = build_notification_service(settings, ScriptedRandomSource([0.05]))
        assert service.dispatch(make_notification()).succeeded

    def test_delivery_failure_is_audited(self, settings):
        service = build_notification_service(settings, ScriptedRandomSource([0.04]))
        with pytest.raises(NotificationProcessingError, match="Email delivery failed"):
            service.dispatch(make_notification())

        summary = service.audit.summary()
        assert summary.failed == 1
        assert summary.gross_volume == Decimal("0.00")


class TestEstimateCost:
    def test_sms_estimate_does_not_need_a_recipient(self, service):
        request = make_notification(NotificationChannel.SMS, recipient="", message="x" * 161)
        assert service.estimate_cost(request) == Decimal("0.10")


class TestServiceFactory:
    def test_override(self, service):
        set_notification_service(service)
        assert get_notification_service() is service
