"""Pydantic request/response schemas for the Notifications API."""

from decimal import Decimal

from pydantic import BaseModel


class SendNotificationRequest(BaseModel):
    recipient: str | None = None
    subject: str = ""
    message: str | None = None
    channel: str
    metadata: dict[str, str] = {}
    priority: str = "NORMAL"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "recipient": "+306912345678",
                    "message": "Your order has shipped!",
                    "channel": "SMS",
                    "priority": "HIGH",
                }
            ]
        }
    }


class CostEstimateRequest(BaseModel):
    channel: str
    message: str = ""
    subject: str = ""
    metadata: dict[str, str] = {}


class NotificationResponse(BaseModel):
    status: str
    notification_id: str
    channel: str
    cost: Decimal
    provider_reference: str | None = None
    sent_at: str


class CostEstimateResponse(BaseModel):
    channel: str
    cost: Decimal
