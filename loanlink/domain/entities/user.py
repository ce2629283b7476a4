"""User account entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Role(str, Enum):
    BORROWER = "borrower"
    MANAGER = "manager"
    ADMIN = "admin"


@dataclass
class UserAccount:
    """A registered user, keyed by email."""

    email: str
    name: str
    role: Role = Role.BORROWER
    photo_url: Optional[str] = None
    suspended: bool = False
    suspend_reason: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def suspend(self, reason: str) -> None:
        self.suspended = True
        self.suspend_reason = reason

    def reinstate(self) -> None:
        self.suspended = False
        self.suspend_reason = ""
