"""Data transfer objects for user directory operations."""

from dataclasses import dataclass
from typing import List, Optional

from loanlink.domain.entities import Role, UserAccount


@dataclass(frozen=True)
class RegisterUserRequest:
    """Input data for registering an account."""
    email: str
    name: str
    role: Optional[str] = None
    photo_url: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.email or not self.email.strip():
            errors.append("email is required")

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if self.role is not None and self.role not in (Role.BORROWER.value, Role.MANAGER.value):
            errors.append("role must be borrower or manager")

        return errors


@dataclass(frozen=True)
class UpdateUserRequest:
    """Role and suspension changes applied by an admin."""
    role: Optional[str] = None
    suspend: Optional[bool] = None
    suspend_reason: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.role is not None and self.role not in {r.value for r in Role}:
            errors.append("role must be borrower, manager or admin")

        if self.suspend and not (self.suspend_reason or "").strip():
            errors.append("suspend_reason is required when suspending")

        if self.role is None and self.suspend is None:
            errors.append("nothing to update")

        return errors


@dataclass(frozen=True)
class RegistrationResult:
    """Account returned from registration, with whether it was new."""

    user: UserAccount
    created: bool
