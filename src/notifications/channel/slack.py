"""Slack notifications to a #channel or @user. Free of charge."""

import re
from decimal import Decimal

from dispatch.port import matches
from notifications.channel.base import NotificationHandler, message_length_error
from notifications.notification import NotificationChannel, NotificationRequest

RECIPIENT_PATTERN = re.compile(r"[#@][\w-]+", re.ASCII)
MESSAGE_MAX_LENGTH = 4000

RECIPIENT_ERROR_MSG = "Slack recipient must be a #channel or @user"


class SlackHandler(NotificationHandler):
    discriminant = NotificationChannel.SLACK
    provider_prefix = "slack"
    failure_message = "Slack delivery failed"

    def check_rules(self, request: NotificationRequest) -> list[str]:
        errors = []
        if not matches(RECIPIENT_PATTERN, request.recipient):
            errors.append(RECIPIENT_ERROR_MSG)
        length_error = message_length_error(request.message, MESSAGE_MAX_LENGTH)
        if length_error:
            errors.append(length_error)
        return errors

    def estimate_cost(self, request: NotificationRequest) -> Decimal:
        return Decimal("0.00")
