"""Shared behaviour of the notification channel handlers."""

from uuid import uuid4

import structlog

from dispatch.port import ExecutionResult, ExecutionStatus, Handler
from dispatch.random_source import RandomSource
from notifications.notification import NotificationProcessingError, NotificationRequest, Priority

logger = structlog.get_logger(__name__)


def message_length_error(message: str | None, limit: int) -> str | None:
    if message is not None and len(message) > limit:
        return f"Message must not exceed {limit} characters"
    return None


class NotificationHandler(Handler):
    """Channel handler: simulate delivery, price the send, return a receipt."""

    identifier_prefix = "NOTIF"
    processing_error = NotificationProcessingError
    required_fields = ("recipient", "message")

    provider_prefix: str
    failure_message: str

    def __init__(self, random_source: RandomSource | None = None, failure_rate: float = 0.05) -> None:
        super().__init__(random_source)
        self.failure_rate = failure_rate

    def execute(self, request: NotificationRequest) -> ExecutionResult:
        log = logger.warning if request.priority is Priority.URGENT else logger.info
        log(
            "Sending notification",
            channel=self.discriminant.name,
            recipient=request.recipient,
            priority=request.priority.name,
        )
        self.simulate_failure(self.failure_rate, self.failure_message)

        result = ExecutionResult(
            status=ExecutionStatus.COMPLETED,
            identifier=self.new_identifier(),
            discriminant=self.discriminant.name,
            fee=self.estimate_cost(request),
            provider_reference=f"{self.provider_prefix}-{uuid4().hex[:12]}",
        )
        logger.info("Notification sent", channel=self.discriminant.name, notification_id=result.identifier)
        return result
