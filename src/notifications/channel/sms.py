"""SMS notifications.

Messages are billed per 160-character segment at €0.05 each, up to 1600
characters (10 segments).
"""

import math
import re
from decimal import Decimal

from dispatch.port import matches
from notifications.channel.base import NotificationHandler, message_length_error
from notifications.notification import NotificationChannel, NotificationRequest

E164_PATTERN = re.compile(r"\+[1-9]\d{1,14}", re.ASCII)
SEGMENT_LENGTH = 160
MESSAGE_MAX_LENGTH = 1600

PHONE_ERROR_MSG = "Phone number must be in E.164 format"

COST_PER_SEGMENT = Decimal("0.05")


def segment_count(message: str | None) -> int:
    return math.ceil(len(message or "") / SEGMENT_LENGTH)


class SmsHandler(NotificationHandler):
    discriminant = NotificationChannel.SMS
    provider_prefix = "sms"
    failure_message = "SMS delivery failed"

    def check_rules(self, request: NotificationRequest) -> list[str]:
        errors = []
        if not matches(E164_PATTERN, request.recipient):
            errors.append(PHONE_ERROR_MSG)
        length_error = message_length_error(request.message, MESSAGE_MAX_LENGTH)
        if length_error:
            errors.append(length_error)
        return errors

    def estimate_cost(self, request: NotificationRequest) -> Decimal:
        return COST_PER_SEGMENT * segment_count(request.message)
