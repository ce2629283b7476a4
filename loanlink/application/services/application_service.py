"""Application service - orchestrates the loan application lifecycle."""

from typing import List
from uuid import UUID

import structlog

from loanlink.core.metrics import record_application_submitted, record_transition
from loanlink.domain.entities import (
    Application,
    ApplicationStatus,
    LifecycleAction,
    Role,
)
from loanlink.domain.exceptions import (
    ApplicationNotFoundException,
    InvalidApplicationException,
    InvalidStatusTransitionException,
    OwnershipRequiredException,
)
from loanlink.domain.interfaces import (
    ApplicationRepository,
    LoanRepository,
    PaymentRepository,
)
from loanlink.application.dto import SubmitApplicationRequest
from loanlink.application.services.authorization_service import AuthorizationService
from loanlink.service.settlement import generate_tracking_code

logger = structlog.get_logger(__name__)

STAFF_ROLES = (Role.MANAGER, Role.ADMIN)
ADJUDICATOR_ROLES = (Role.MANAGER,)


class ApplicationService:
    """
    Application service for loan application use cases.

    Role-gated operations authorize the caller before reading the record.
    Transitions are guarded on the status read at the start of the call.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        payment_repository: PaymentRepository,
        loan_repository: LoanRepository,
        authorizer: AuthorizationService,
    ):
        self._application_repo = application_repository
        self._payment_repo = payment_repository
        self._loan_repo = loan_repository
        self._authorizer = authorizer

    async def submit(self, request: SubmitApplicationRequest) -> Application:
        """
        Submit a new application in Pending/Unpaid state.

        The loan reference is not required to resolve; when it does, the
        loan title is copied onto the application.

        Raises:
            InvalidApplicationException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidApplicationException("; ".join(errors))

        loan_id = request.loan_id.strip()
        application = Application(
            loan_id=loan_id,
            borrower_email=request.borrower_email.strip(),
            details=dict(request.details),
            loan_title=await self._lookup_loan_title(loan_id),
        )

        await self._application_repo.save(application)
        record_application_submitted()

        logger.info(
            "application_submitted",
            application_id=str(application.id),
            loan_id=loan_id,
            borrower_email=application.borrower_email,
        )

        return application

    async def list_for_user(self, caller: str, email: str) -> List[Application]:
        """List a borrower's own applications."""
        if caller.lower() != email.lower():
            raise OwnershipRequiredException("Forbidden: can only list your own applications")

        return await self._application_repo.list_by_borrower(email)

    async def list_pending(self, caller: str) -> List[Application]:
        await self._authorizer.authorize(caller, STAFF_ROLES)
        return await self._application_repo.list_by_status(ApplicationStatus.PENDING)

    async def list_approved(self, caller: str) -> List[Application]:
        await self._authorizer.authorize(caller, STAFF_ROLES)
        return await self._application_repo.list_by_status(ApplicationStatus.APPROVED)

    async def list_all(self, caller: str) -> List[Application]:
        await self._authorizer.authorize(caller, (Role.ADMIN,))
        return await self._application_repo.list_all()

    async def get(self, application_id: str, caller: str) -> Application:
        """
        Get an application visible to the caller.

        Borrowers see their own records; managers and admins see all.
        """
        application = await self._load(application_id)

        if not application.is_owned_by(caller):
            await self._authorizer.authorize(caller, STAFF_ROLES)

        return application

    async def approve(self, application_id: str, caller: str) -> Application:
        """
        Approve a pending application.

        Approval also marks the application fee as paid.

        Raises:
            RoleRequiredException: If the caller is not a manager
            ApplicationNotFoundException: If the application does not exist
            InvalidStatusTransitionException: If the application is not Pending
        """
        await self._authorizer.authorize(caller, ADJUDICATOR_ROLES)
        application = await self._load(application_id)

        application.approve(tracking_id=generate_tracking_code())
        await self._application_repo.update(application)
        record_transition(LifecycleAction.APPROVE.value)

        logger.info(
            "application_approved",
            application_id=application_id,
            approved_by=caller,
            tracking_id=application.tracking_id,
        )

        return application

    async def reject(self, application_id: str, caller: str) -> Application:
        await self._authorizer.authorize(caller, ADJUDICATOR_ROLES)
        application = await self._load(application_id)

        application.reject()
        await self._application_repo.update(application)
        record_transition(LifecycleAction.REJECT.value)

        logger.info("application_rejected", application_id=application_id, rejected_by=caller)

        return application

    async def cancel(self, application_id: str, caller: str) -> Application:
        """Cancel a pending application on behalf of its borrower."""
        application = await self._load_owned(application_id, caller)

        application.cancel()
        await self._application_repo.update(application)
        record_transition(LifecycleAction.CANCEL.value)

        logger.info("application_cancelled", application_id=application_id)

        return application

    async def withdraw(self, application_id: str, caller: str) -> None:
        """
        Delete an application that never reached a paid or approved state.

        Raises:
            InvalidStatusTransitionException: If the fee was paid, the
                application was approved, or a ledger row references it
        """
        application = await self._load_owned(application_id, caller)
        application.ensure_withdrawable()

        if await self._payment_repo.exists_for_application(str(application.id)):
            raise InvalidStatusTransitionException(
                application_id=application_id,
                current_status="payment recorded",
                action=LifecycleAction.WITHDRAW.value,
            )

        await self._application_repo.delete(application.id)
        record_transition(LifecycleAction.WITHDRAW.value)

        logger.info("application_withdrawn", application_id=application_id)

    async def _load(self, application_id: str) -> Application:
        try:
            key = UUID(str(application_id))
        except ValueError:
            raise ApplicationNotFoundException(str(application_id))

        application = await self._application_repo.get_by_id(key)

        if application is None:
            logger.warning("application_not_found", application_id=str(application_id))
            raise ApplicationNotFoundException(str(application_id))

        return application

    async def _load_owned(self, application_id: str, caller: str) -> Application:
        application = await self._load(application_id)

        if not application.is_owned_by(caller):
            raise OwnershipRequiredException()

        return application

    async def _lookup_loan_title(self, loan_id: str) -> str | None:
        try:
            key = UUID(loan_id)
        except ValueError:
            return None

        loan = await self._loan_repo.get_by_id(key)
        return loan.title if loan else None
