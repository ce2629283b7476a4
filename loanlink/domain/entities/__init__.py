"""Domain Entities - Core business objects."""

from .application import (
    Application,
    ApplicationStatus,
    ApplicationFeeStatus,
    LifecycleAction,
    ALLOWED_TRANSITIONS,
    APPROVAL_TRANSACTION_PREFIX,
)
from .payment import PaymentRecord, ProcessorSession, PROCESSOR_PAID
from .loan import LoanOffer
from .user import Role, UserAccount

__all__ = [
    "Application",
    "ApplicationStatus",
    "ApplicationFeeStatus",
    "LifecycleAction",
    "ALLOWED_TRANSITIONS",
    "APPROVAL_TRANSACTION_PREFIX",
    "PaymentRecord",
    "ProcessorSession",
    "PROCESSOR_PAID",
    "LoanOffer",
    "Role",
    "UserAccount",
]
