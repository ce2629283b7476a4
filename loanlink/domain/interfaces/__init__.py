"""
Domain Interfaces (Ports)
"""

from .repositories import (
    ApplicationRepository,
    PaymentRepository,
    LoanRepository,
    UserRepository,
)
from .clients import PaymentProcessorClient, IdentityVerifier

__all__ = [
    "ApplicationRepository",
    "PaymentRepository",
    "LoanRepository",
    "UserRepository",
    "PaymentProcessorClient",
    "IdentityVerifier",
]
