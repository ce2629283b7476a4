"""Payment ledger and processor session entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID, uuid4

PROCESSOR_PAID = "paid"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PaymentRecord:
    """
    Immutable ledger row for a completed application-fee payment.

    At most one record exists per ``transaction_id``.
    """

    application_id: str
    loan_title: str
    amount: Decimal
    currency: str
    payer_email: str
    transaction_id: str
    payment_status: str
    tracking_id: str
    id: UUID = field(default_factory=uuid4)
    paid_at: datetime = field(default_factory=_utc_now)
    created_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "application_id": self.application_id,
            "loan_title": self.loan_title,
            "amount": str(self.amount),
            "currency": self.currency,
            "payer_email": self.payer_email,
            "transaction_id": self.transaction_id,
            "payment_status": self.payment_status,
            "tracking_id": self.tracking_id,
            "paid_at": self.paid_at.isoformat(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ProcessorSession:
    """
    A hosted checkout session as reported by the payment processor.

    Attributes:
        id: Processor session reference
        url: Hosted checkout URL the payer is redirected to
        payment_status: Processor payment status ("paid", "unpaid", ...)
        transaction_id: Processor transaction reference, once one exists
        amount_total: Amount in minor units
        currency: ISO currency code
        customer_email: Email the session was opened for
        metadata: Metadata bound at creation time
    """

    id: str
    payment_status: str
    amount_total: int
    currency: str
    url: Optional[str] = None
    transaction_id: Optional[str] = None
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PROCESSOR_PAID

    @property
    def application_id(self) -> Optional[str]:
        return self.metadata.get("applicationId")

    @property
    def payer_email(self) -> Optional[str]:
        return self.metadata.get("payerEmail") or self.customer_email

    @property
    def loan_title(self) -> str:
        return self.metadata.get("loanTitle", "")
