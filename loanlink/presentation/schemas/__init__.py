"""Pydantic schemas for API request/response validation."""

from .application import ApplicationSchema, SubmitApplicationSchema
from .payment import (
    CheckoutRequestSchema,
    CheckoutSessionSchema,
    PaymentRecordSchema,
    SettlementResultSchema,
)
from .loan import LoanCreateSchema, LoanSchema, LoanUpdateSchema
from .user import RegisterUserSchema, RegistrationSchema, UpdateUserSchema, UserSchema
from .error import ErrorResponseSchema

__all__ = [
    "ApplicationSchema",
    "SubmitApplicationSchema",
    "CheckoutRequestSchema",
    "CheckoutSessionSchema",
    "PaymentRecordSchema",
    "SettlementResultSchema",
    "LoanCreateSchema",
    "LoanSchema",
    "LoanUpdateSchema",
    "RegisterUserSchema",
    "RegistrationSchema",
    "UpdateUserSchema",
    "UserSchema",
    "ErrorResponseSchema",
]
