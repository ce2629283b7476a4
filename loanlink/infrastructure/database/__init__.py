"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import as_utc, Base, UserModel, LoanModel, ApplicationModel, PaymentModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "as_utc",
    "Base",
    "UserModel",
    "LoanModel",
    "ApplicationModel",
    "PaymentModel",
]
