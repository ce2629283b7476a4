"""Loan catalog Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LoanCreateSchema(BaseModel):
    """Schema for POST /loans request body."""

    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=5000)
    amount: Decimal = Field(..., gt=0, description="Principal in major currency units")
    interest_rate: Decimal = Field(..., ge=0, description="Interest rate in percent")
    max_term_months: Optional[int] = Field(None, gt=0)
    show_on_home: bool = False


class LoanUpdateSchema(BaseModel):
    """Schema for PATCH /loans/{id}; only provided fields change."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=5000)
    amount: Optional[Decimal] = Field(None, gt=0)
    interest_rate: Optional[Decimal] = Field(None, ge=0)
    max_term_months: Optional[int] = Field(None, gt=0)
    show_on_home: Optional[bool] = None


class LoanSchema(BaseModel):
    """Schema for a loan offer in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    category: str
    description: str
    amount: Decimal
    interest_rate: Decimal
    max_term_months: Optional[int] = None
    show_on_home: bool
    created_by: Optional[str] = None
    created_at: datetime
