"""Pydantic request/response schemas for the Payments API.

These are external contracts, kept separate from the internal
PaymentRequest value object.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ProcessPaymentRequest(BaseModel):
    amount: Decimal = Field(gt=0)
    currency: str = "EUR"
    method: str
    payment_details: dict[str, Any]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": "100.00",
                    "currency": "EUR",
                    "method": "CREDIT_CARD",
                    "payment_details": {
                        "card_number": "4532015112830366",
                        "cvv": "123",
                        "expiry_date": "12/2030",
                        "cardholder_name": "John Doe",
                    },
                }
            ]
        }
    }


class FeeEstimateRequest(BaseModel):
    amount: Decimal = Field(gt=0)
    method: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PaymentResponse(BaseModel):
    status: str
    transaction_id: str
    method: str
    net_amount: Decimal
    fee: Decimal
    gross_amount: Decimal
    currency: str
    timestamp: str


class FeeEstimateResponse(BaseModel):
    method: str
    amount: Decimal
    fee: Decimal

