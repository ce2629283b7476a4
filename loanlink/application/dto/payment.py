"""Data transfer objects for payment settlement operations."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Union


@dataclass(frozen=True)
class CheckoutRequest:
    """Input data for opening a hosted checkout session."""
    application_id: str
    loan_title: str
    amount: Union[Decimal, int, float, str]
    payer_email: str

    def validate(self) -> List[str]:
        errors = []

        if not self.application_id or not self.application_id.strip():
            errors.append("application_id is required")

        if not self.payer_email or not self.payer_email.strip():
            errors.append("payer_email is required")

        return errors


@dataclass(frozen=True)
class CheckoutSessionResponse:
    """Redirect target for a created checkout session."""

    url: str
    session_id: str


@dataclass(frozen=True)
class SettlementResult:
    """
    Outcome of a settlement callback.

    ``already_settled`` is set when the transaction had been recorded by an
    earlier or concurrent call; in that case nothing was written.
    """

    transaction_id: str
    tracking_id: str
    already_settled: bool
    application_updated: bool
    payment_recorded: bool

    @classmethod
    def settled(cls, transaction_id: str, tracking_id: str) -> "SettlementResult":
        return cls(
            transaction_id=transaction_id,
            tracking_id=tracking_id,
            already_settled=False,
            application_updated=True,
            payment_recorded=True,
        )

    @classmethod
    def replay(cls, record) -> "SettlementResult":
        return cls(
            transaction_id=record.transaction_id,
            tracking_id=record.tracking_id,
            already_settled=True,
            application_updated=False,
            payment_recorded=False,
        )
