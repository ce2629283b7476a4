"""Application entity and its lifecycle state machine."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from loanlink.domain.exceptions import InvalidStatusTransitionException


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationStatus(str, Enum):
    """Lifecycle status of a loan application."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class ApplicationFeeStatus(str, Enum):
    """Status of the application fee, independent of the lifecycle status."""

    UNPAID = "Unpaid"
    PAID = "Paid"


class LifecycleAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    CANCEL = "cancel"
    WITHDRAW = "withdraw"


# Statuses each action may start from. Anything else is a double transition.
ALLOWED_TRANSITIONS: Dict[LifecycleAction, frozenset] = {
    LifecycleAction.APPROVE: frozenset({ApplicationStatus.PENDING}),
    LifecycleAction.REJECT: frozenset({ApplicationStatus.PENDING}),
    LifecycleAction.CANCEL: frozenset({ApplicationStatus.PENDING}),
    LifecycleAction.WITHDRAW: frozenset(
        {ApplicationStatus.PENDING, ApplicationStatus.CANCELLED}
    ),
}

# Synthetic transaction reference prefix for fees marked paid by approval.
APPROVAL_TRANSACTION_PREFIX = "approval:"


@dataclass
class Application:
    """
    A borrower's application against a loan offer.

    ``status`` moves Pending -> Approved | Rejected | Cancelled.
    ``application_fee_status`` moves Unpaid -> Paid, either through payment
    settlement or as a side effect of approval. Paid always implies that
    ``transaction_id`` and ``tracking_id`` are set.
    """

    loan_id: str
    borrower_email: str
    details: Dict[str, Any] = field(default_factory=dict)
    loan_title: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    status: ApplicationStatus = ApplicationStatus.PENDING
    application_fee_status: ApplicationFeeStatus = ApplicationFeeStatus.UNPAID
    payment_status: Optional[str] = None
    transaction_id: Optional[str] = None
    tracking_id: Optional[str] = None
    applied_at: datetime = field(default_factory=utc_now)
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @property
    def is_fee_paid(self) -> bool:
        return self.application_fee_status == ApplicationFeeStatus.PAID

    def is_owned_by(self, email: str) -> bool:
        return bool(email) and self.borrower_email.lower() == email.lower()

    def can(self, action: LifecycleAction) -> bool:
        """Check whether an action is allowed from the current status."""
        return self.status in ALLOWED_TRANSITIONS[action]

    def _ensure(self, action: LifecycleAction) -> None:
        if not self.can(action):
            raise InvalidStatusTransitionException(
                application_id=str(self.id),
                current_status=self.status.value,
                action=action.value,
            )

    def approve(self, tracking_id: str, now: datetime | None = None) -> None:
        """
        Approve the application and mark its fee as paid.

        Approval does not consult the payment ledger. When no processor
        payment has been recorded, a synthetic transaction reference and
        the supplied tracking code are attached.
        """
        self._ensure(LifecycleAction.APPROVE)
        now = now or utc_now()

        self.status = ApplicationStatus.APPROVED
        self.approved_at = now

        if not self.is_fee_paid:
            self.application_fee_status = ApplicationFeeStatus.PAID
            self.transaction_id = self.transaction_id or (
                f"{APPROVAL_TRANSACTION_PREFIX}{self.id}"
            )
            self.tracking_id = self.tracking_id or tracking_id
            self.paid_at = self.paid_at or now

    def reject(self, now: datetime | None = None) -> None:
        """Reject a pending application."""
        self._ensure(LifecycleAction.REJECT)
        self.status = ApplicationStatus.REJECTED
        self.rejected_at = now or utc_now()

    def cancel(self, now: datetime | None = None) -> None:
        """Cancel a pending application, keeping the record."""
        self._ensure(LifecycleAction.CANCEL)
        self.status = ApplicationStatus.CANCELLED
        self.cancelled_at = now or utc_now()

    def ensure_withdrawable(self) -> None:
        """Check that the record may be hard-deleted."""
        self._ensure(LifecycleAction.WITHDRAW)
        if self.is_fee_paid or self.approved_at is not None:
            raise InvalidStatusTransitionException(
                application_id=str(self.id),
                current_status=f"{self.status.value}/{self.application_fee_status.value}",
                action=LifecycleAction.WITHDRAW.value,
            )

    def mark_fee_paid(
        self,
        transaction_id: str,
        tracking_id: str,
        payment_status: str = "Paid",
        now: datetime | None = None,
    ) -> None:
        """Record a settled processor payment against this application."""
        self.application_fee_status = ApplicationFeeStatus.PAID
        self.payment_status = payment_status
        self.transaction_id = transaction_id
        self.tracking_id = tracking_id
        self.paid_at = now or utc_now()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": str(self.id),
            "loan_id": self.loan_id,
            "loan_title": self.loan_title,
            "borrower_email": self.borrower_email,
            "details": self.details,
            "status": self.status.value,
            "application_fee_status": self.application_fee_status.value,
            "payment_status": self.payment_status,
            "transaction_id": self.transaction_id,
            "tracking_id": self.tracking_id,
            "applied_at": _iso(self.applied_at),
            "approved_at": _iso(self.approved_at),
            "rejected_at": _iso(self.rejected_at),
            "cancelled_at": _iso(self.cancelled_at),
            "paid_at": _iso(self.paid_at),
        }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
