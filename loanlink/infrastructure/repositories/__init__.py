"""Repository implementations."""

from .application_repository import PostgresApplicationRepository
from .payment_repository import PostgresPaymentRepository
from .loan_repository import PostgresLoanRepository
from .user_repository import PostgresUserRepository

__all__ = [
    "PostgresApplicationRepository",
    "PostgresPaymentRepository",
    "PostgresLoanRepository",
    "PostgresUserRepository",
]
