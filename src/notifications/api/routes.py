"""FastAPI routes for the Notifications domain."""

from fastapi import APIRouter

from dispatch.api import AuditSummaryResponse
from dispatch.audit import AuditSummary
from dispatch.registry import parse_discriminant
from notifications.api.schemas import (
    CostEstimateRequest,
    CostEstimateResponse,
    NotificationResponse,
    SendNotificationRequest,
)
from notifications.channel import get_notification_service
from notifications.notification import NotificationChannel, NotificationRequest, Priority

notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.post("/send", response_model=NotificationResponse)
async def send_notification(body: SendNotificationRequest) -> NotificationResponse:
    """Validate and send a notification through its channel."""
    request = NotificationRequest(
        recipient=body.recipient,
        subject=body.subject,
        message=body.message,
        channel=NotificationChannel.parse(body.channel),
        metadata=body.metadata,
        priority=parse_discriminant(Priority, body.priority, label="Priority"),
    )
    result = get_notification_service().dispatch(request)
    return NotificationResponse(
        status=result.status.value,
        notification_id=result.identifier,
        channel=result.discriminant,
        cost=result.fee,
        provider_reference=result.provider_reference,
        sent_at=result.timestamp.isoformat(),
    )


@notification_router.post("/cost-estimate", response_model=CostEstimateResponse)
async def estimate_cost(body: CostEstimateRequest) -> CostEstimateResponse:
    """Return what sending the message would cost, without sending it."""
    channel = NotificationChannel.parse(body.channel)
    request = NotificationRequest(
        recipient="",
        subject=body.subject,
        message=body.message,
        channel=channel,
        metadata=body.metadata,
    )
    return CostEstimateResponse(channel=channel.name, cost=get_notification_service().estimate_cost(request))


@notification_router.get("/audit", response_model=AuditSummaryResponse)
async def audit_summary() -> AuditSummaryResponse:
    """Totals over every notification sent by the active service."""
    audit = get_notification_service().audit
    summary = audit.summary() if audit is not None else AuditSummary()
    return AuditSummaryResponse(**summary.to_dict())
