"""Data transfer objects for application lifecycle operations."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SubmitApplicationRequest:
    """Input data for submitting a loan application."""
    borrower_email: str
    loan_id: str
    details: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> List[str]:
        errors = []

        if not self.borrower_email or not self.borrower_email.strip():
            errors.append("borrower_email is required")

        if not self.loan_id or not self.loan_id.strip():
            errors.append("loan_id is required")

        return errors
