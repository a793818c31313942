"""Email notifications. Flat cost of €0.001 per message."""

import re
from decimal import Decimal

from dispatch.port import matches
from notifications.channel.base import NotificationHandler, message_length_error
from notifications.notification import NotificationChannel, NotificationRequest

EMAIL_PATTERN = re.compile(r"[\w+_.-]+@[\w.-]+", re.ASCII)
SUBJECT_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 10000

EMAIL_ERROR_MSG = "Invalid email address format"
SUBJECT_LENGTH_ERROR_MSG = f"Subject must not exceed {SUBJECT_MAX_LENGTH} characters"

COST = Decimal("0.001")


class EmailHandler(NotificationHandler):
    discriminant = NotificationChannel.EMAIL
    provider_prefix = "smtp"
    failure_message = "Email delivery failed"

    def check_rules(self, request: NotificationRequest) -> list[str]:
        errors = []
        if not matches(EMAIL_PATTERN, request.recipient):
            errors.append(EMAIL_ERROR_MSG)
        if request.subject and len(request.subject) > SUBJECT_MAX_LENGTH:
            errors.append(SUBJECT_LENGTH_ERROR_MSG)
        length_error = message_length_error(request.message, MESSAGE_MAX_LENGTH)
        if length_error:
            errors.append(length_error)
        return errors

    def estimate_cost(self, request: NotificationRequest) -> Decimal:
        return COST
