"""Settlement service - coordinates checkout sessions and payment settlement."""

from typing import List
from uuid import UUID

import structlog

from loanlink.core.config import settings
from loanlink.core.metrics import record_payment_amount, record_settlement
from loanlink.domain.entities import Application, ApplicationStatus, PaymentRecord, Role
from loanlink.domain.exceptions import (
    ApplicationFeeAlreadyPaidException,
    ApplicationNotFoundException,
    ApplicationNotPayableException,
    InvalidPaymentRequestException,
    OwnershipRequiredException,
    PaymentIncompleteException,
    PaymentProviderException,
)
from loanlink.domain.interfaces import (
    ApplicationRepository,
    PaymentProcessorClient,
    PaymentRepository,
)
from loanlink.application.dto import (
    CheckoutRequest,
    CheckoutSessionResponse,
    SettlementResult,
)
from loanlink.application.services.authorization_service import AuthorizationService
from loanlink.service.settlement import (
    from_minor_units,
    generate_tracking_code,
    to_minor_units,
)

logger = structlog.get_logger(__name__)

SUCCESS_PATH = "/dashboard/payment-success?session_id={CHECKOUT_SESSION_ID}"
CANCEL_PATH = "/dashboard/my-loans"
DEFAULT_PRODUCT_NAME = "Loan application fee"


class SettlementService:
    """
    Application service for application-fee payments.

    The ledger's unique transaction reference is the only idempotency
    mechanism: settlement inserts the ledger row before touching the
    application and treats an insert conflict as "already settled".
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        payment_repository: PaymentRepository,
        payment_client: PaymentProcessorClient,
        authorizer: AuthorizationService,
        client_url: str | None = None,
        currency: str | None = None,
    ):
        self._application_repo = application_repository
        self._payment_repo = payment_repository
        self._payment_client = payment_client
        self._authorizer = authorizer
        self._client_url = (client_url or settings.client_url).rstrip("/")
        self._currency = (currency or settings.payment_currency).lower()

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSessionResponse:
        """
        Open a hosted checkout session for an application fee.

        Nothing is persisted locally; the session only becomes a payment
        once it is settled.

        Raises:
            InvalidPaymentRequestException: If the request or amount is invalid
            ApplicationNotFoundException: If the application does not exist
            OwnershipRequiredException: If the payer does not own the application
            ApplicationFeeAlreadyPaidException: If the fee is already paid
            ApplicationNotPayableException: If the application is not Pending
            PaymentProviderException: If the processor fails
        """
        errors = request.validate()
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        try:
            amount_minor = to_minor_units(request.amount)
        except ValueError as e:
            raise InvalidPaymentRequestException(str(e))

        application = await self._load(request.application_id)

        if not application.is_owned_by(request.payer_email):
            raise OwnershipRequiredException("Forbidden: can only pay for your own application")

        if application.is_fee_paid:
            raise ApplicationFeeAlreadyPaidException(str(application.id))

        if application.status != ApplicationStatus.PENDING:
            raise ApplicationNotPayableException(str(application.id), application.status.value)

        loan_title = request.loan_title or application.loan_title or ""

        session = await self._payment_client.create_checkout_session(
            amount_minor=amount_minor,
            currency=self._currency,
            product_name=loan_title or DEFAULT_PRODUCT_NAME,
            customer_email=request.payer_email,
            metadata={
                "applicationId": str(application.id),
                "payerEmail": request.payer_email,
                "loanTitle": loan_title,
            },
            success_url=f"{self._client_url}{SUCCESS_PATH}",
            cancel_url=f"{self._client_url}{CANCEL_PATH}",
        )

        if not session.url:
            raise PaymentProviderException("Payment provider returned no checkout URL")

        logger.info(
            "checkout_session_created",
            session_id=session.id,
            application_id=str(application.id),
            amount_minor=amount_minor,
        )

        return CheckoutSessionResponse(url=session.url, session_id=session.id)

    async def settle_payment(self, session_id: str | None) -> SettlementResult:
        """
        Settle a completed checkout session exactly once.

        Repeated or concurrent calls for the same processor transaction
        return the first call's result and write nothing.

        Raises:
            InvalidPaymentRequestException: If session_id is missing
            PaymentProviderException: If the session cannot be retrieved
            PaymentIncompleteException: If the processor reports it unpaid
            ApplicationNotFoundException: If the application is gone
        """
        if not session_id or not session_id.strip():
            raise InvalidPaymentRequestException("session_id is required")

        log = logger.bind(session_id=session_id)

        session = await self._payment_client.retrieve_checkout_session(session_id)
        transaction_id = session.transaction_id

        if transaction_id:
            existing = await self._payment_repo.get_by_transaction_id(transaction_id)
            if existing is not None:
                record_settlement("already_settled")
                log.info("payment_already_settled", transaction_id=transaction_id)
                return SettlementResult.replay(existing)

        if not session.is_paid:
            record_settlement("incomplete")
            log.info("payment_incomplete", payment_status=session.payment_status)
            raise PaymentIncompleteException(session_id, session.payment_status)

        if not transaction_id:
            raise PaymentProviderException("Paid session carries no transaction reference")

        application = await self._load(session.application_id)
        tracking_id = generate_tracking_code()

        record = PaymentRecord(
            application_id=str(application.id),
            loan_title=session.loan_title or application.loan_title or "",
            amount=from_minor_units(session.amount_total),
            currency=session.currency,
            payer_email=session.payer_email or application.borrower_email,
            transaction_id=transaction_id,
            payment_status=session.payment_status,
            tracking_id=tracking_id,
        )

        stored, created = await self._payment_repo.insert_if_absent(record)

        if not created:
            record_settlement("conflict")
            log.info("payment_settlement_conflict", transaction_id=transaction_id)
            return SettlementResult.replay(stored)

        application.mark_fee_paid(
            transaction_id=transaction_id,
            tracking_id=tracking_id,
            now=record.paid_at,
        )
        await self._application_repo.update(application)

        record_settlement("settled")
        record_payment_amount(record.amount, record.currency)

        log.info(
            "payment_settled",
            transaction_id=transaction_id,
            tracking_id=tracking_id,
            application_id=str(application.id),
            amount=str(record.amount),
        )

        return SettlementResult.settled(transaction_id, tracking_id)

    async def list_payments(self, caller: str, email: str | None = None) -> List[PaymentRecord]:
        """List the caller's own payment history, newest first."""
        if email and email.lower() != caller.lower():
            raise OwnershipRequiredException("Forbidden: can only list your own payments")

        return await self._payment_repo.list_by_payer(caller)

    async def list_all_payments(self, caller: str) -> List[PaymentRecord]:
        await self._authorizer.authorize(caller, (Role.ADMIN,))
        return await self._payment_repo.list_all()

    async def _load(self, application_id: str | None) -> Application:
        try:
            key = UUID(str(application_id))
        except ValueError:
            raise ApplicationNotFoundException(str(application_id))

        application = await self._application_repo.get_by_id(key)

        if application is None:
            raise ApplicationNotFoundException(str(application_id))

        return application
