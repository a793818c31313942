"""Push notifications.

The device token is a 64-character hex string and the payload (message,
subject and metadata) must stay under the 4KB provider limit.
"""

import re
from decimal import Decimal

from dispatch.port import matches
from notifications.channel.base import NotificationHandler
from notifications.notification import NotificationChannel, NotificationRequest

DEVICE_TOKEN_PATTERN = re.compile(r"[A-Fa-f0-9]{64}")
MAX_PAYLOAD_BYTES = 4096

DEVICE_TOKEN_ERROR_MSG = "Device token must be 64 hexadecimal characters"
PAYLOAD_SIZE_ERROR_MSG = "Push payload must be smaller than 4KB"

COST = Decimal("0.0001")


def estimated_payload_size(request: NotificationRequest) -> int:
    parts = [request.message or "", request.subject or ""]
    for key, value in request.metadata.items():
        parts.extend([key, value or ""])
    return sum(len(part.encode("utf-8")) for part in parts)


class PushHandler(NotificationHandler):
    discriminant = NotificationChannel.PUSH
    provider_prefix = "push"
    failure_message = "Push delivery failed"

    def check_rules(self, request: NotificationRequest) -> list[str]:
        errors = []
        if not matches(DEVICE_TOKEN_PATTERN, request.recipient):
            errors.append(DEVICE_TOKEN_ERROR_MSG)
        if estimated_payload_size(request) >= MAX_PAYLOAD_BYTES:
            errors.append(PAYLOAD_SIZE_ERROR_MSG)
        return errors

    def estimate_cost(self, request: NotificationRequest) -> Decimal:
        return COST
