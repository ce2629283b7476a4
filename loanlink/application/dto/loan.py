"""Data transfer objects for loan catalog operations."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class LoanRequest:
    """Input data for creating a loan offer."""
    title: str
    category: str
    amount: Decimal
    interest_rate: Decimal
    description: str = ""
    max_term_months: Optional[int] = None
    show_on_home: bool = False

    def validate(self) -> List[str]:
        errors = []

        if not self.title or not self.title.strip():
            errors.append("title is required")

        if not self.category or not self.category.strip():
            errors.append("category is required")

        if self.amount is None or self.amount <= 0:
            errors.append("amount must be positive")

        if self.interest_rate is None or self.interest_rate < 0:
            errors.append("interest_rate must not be negative")

        if self.max_term_months is not None and self.max_term_months <= 0:
            errors.append("max_term_months must be positive")

        return errors
