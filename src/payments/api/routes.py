"""FastAPI routes for the Payments domain."""

from fastapi import APIRouter

from dispatch.api import AuditSummaryResponse
from dispatch.audit import AuditSummary
from dispatch.registry import parse_discriminant
from payments.api.schemas import (
    FeeEstimateRequest,
    FeeEstimateResponse,
    PaymentResponse,
    ProcessPaymentRequest,
)
from payments.methods import get_payment_service
from payments.payment import Currency, PaymentMethod, PaymentRequest

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/process", response_model=PaymentResponse)
async def process_payment(body: ProcessPaymentRequest) -> PaymentResponse:
    """Validate and process a payment with the handler for its method."""
    request = PaymentRequest(
        amount=body.amount,
        method=PaymentMethod.parse(body.method),
        details=body.payment_details,
        currency=parse_discriminant(Currency, body.currency, label="Currency"),
    )
    result = get_payment_service().dispatch(request)
    return PaymentResponse(
        status=result.status.value,
        transaction_id=result.identifier,
        method=result.discriminant,
        net_amount=result.amount,
        fee=result.fee,
        gross_amount=result.gross_amount,
        currency=result.currency,
        timestamp=result.timestamp.isoformat(),
    )


@payment_router.post("/fee-estimate", response_model=FeeEstimateResponse)
async def estimate_fee(body: FeeEstimateRequest) -> FeeEstimateResponse:
    """Return the fee a payment would incur, without validating or processing it."""
    method = PaymentMethod.parse(body.method)
    fee = get_payment_service().estimate_cost(PaymentRequest(amount=body.amount, method=method))
    return FeeEstimateResponse(method=method.name, amount=body.amount, fee=fee)


@payment_router.get("/audit", response_model=AuditSummaryResponse)
async def audit_summary() -> AuditSummaryResponse:
    """Totals over every payment processed by the active service."""
    audit = get_payment_service().audit
    summary = audit.summary() if audit is not None else AuditSummary()
    return AuditSummaryResponse(**summary.to_dict())
