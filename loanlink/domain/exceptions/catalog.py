"""Loan catalog and user directory exceptions."""

from .base import NotFoundException


class LoanNotFoundException(NotFoundException):
    """Raised when a loan offer cannot be found."""

    def __init__(self, loan_id: str):
        super().__init__(
            message=f"Loan not found: {loan_id}",
            code="LOAN_NOT_FOUND",
        )
        self.loan_id = loan_id


class UserNotFoundException(NotFoundException):
    """Raised when a user account cannot be found."""

    def __init__(self, email: str):
        super().__init__(
            message=f"User not found: {email}",
            code="USER_NOT_FOUND",
        )
        self.email = email
