"""Application services (use cases)."""

from .authorization_service import AuthorizationService
from .application_service import ApplicationService
from .settlement_service import SettlementService
from .loan_service import LoanService
from .user_service import UserService

__all__ = [
    "AuthorizationService",
    "ApplicationService",
    "SettlementService",
    "LoanService",
    "UserService",
]
