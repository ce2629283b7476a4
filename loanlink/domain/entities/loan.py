"""Loan offer entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class LoanOffer:
    """A loan product listed in the catalog by a manager."""

    title: str
    category: str
    amount: Decimal
    interest_rate: Decimal
    description: str = ""
    max_term_months: Optional[int] = None
    show_on_home: bool = False
    created_by: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "category": self.category,
            "description": self.description,
            "amount": str(self.amount),
            "interest_rate": str(self.interest_rate),
            "max_term_months": self.max_term_months,
            "show_on_home": self.show_on_home,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }
