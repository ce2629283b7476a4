"""Data Transfer Objects for application layer."""

from .application import SubmitApplicationRequest
from .payment import CheckoutRequest, CheckoutSessionResponse, SettlementResult
from .loan import LoanRequest
from .user import RegisterUserRequest, RegistrationResult, UpdateUserRequest

__all__ = [
    "SubmitApplicationRequest",
    "CheckoutRequest",
    "CheckoutSessionResponse",
    "SettlementResult",
    "LoanRequest",
    "RegisterUserRequest",
    "RegistrationResult",
    "UpdateUserRequest",
]
