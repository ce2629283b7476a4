"""Payment-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CheckoutRequestSchema(BaseModel):
    """Schema for POST /payment-checkout-system request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "application_id": "0b6f3c1e-9a8d-4c2b-8e7f-6a5b4c3d2e1f",
                    "loan_title": "Small Business Starter",
                    "amount": "50.00",
                }
            ]
        }
    )
    application_id: str = Field(..., min_length=1, description="Application being paid for")
    loan_title: str = Field("", max_length=255, description="Shown on the checkout page")
    amount: Decimal = Field(..., description="Fee amount in major currency units")


class CheckoutSessionSchema(BaseModel):
    """Hosted checkout redirect."""

    url: str = Field(..., description="Checkout URL to redirect the payer to")
    session_id: str = Field(..., description="Processor session reference")


class SettlementResultSchema(BaseModel):
    """Schema for the settlement callback response."""

    transaction_id: str
    tracking_id: str
    already_settled: bool = Field(
        ...,
        description="True when this transaction had already been recorded",
    )
    application_updated: bool
    payment_recorded: bool


class PaymentRecordSchema(BaseModel):
    """Schema for a ledger row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    application_id: str
    loan_title: str
    amount: Decimal
    currency: str
    payer_email: str
    transaction_id: str
    payment_status: str
    tracking_id: str
    paid_at: datetime
