"""Application-related Pydantic schemas."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from loanlink.domain.entities import ApplicationFeeStatus, ApplicationStatus


class SubmitApplicationSchema(BaseModel):
    """Schema for POST /applications request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "loan_id": "7d0c6a52-4f1e-4a3e-9d7b-1f2b3c4d5e6f",
                    "details": {
                        "first_name": "Ada",
                        "last_name": "Lovelace",
                        "monthly_income": 4200,
                        "reason": "Equipment purchase",
                    },
                }
            ]
        }
    )
    loan_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Identifier of the loan offer applied for",
    )
    details: Dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form borrower-submitted fields",
    )

    @field_validator("loan_id")
    @classmethod
    def validate_loan_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("loan_id cannot be empty or whitespace")
        return v.strip()


class ApplicationSchema(BaseModel):
    """Schema for an application in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    loan_id: str
    loan_title: Optional[str] = None
    borrower_email: str
    details: Dict[str, Any]
    status: ApplicationStatus
    application_fee_status: ApplicationFeeStatus
    payment_status: Optional[str] = None
    transaction_id: Optional[str] = None
    tracking_id: Optional[str] = None
    applied_at: datetime
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
