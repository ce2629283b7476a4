"""PostgreSQL implementation of ApplicationRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanlink.domain.entities import Application, ApplicationFeeStatus, ApplicationStatus
from loanlink.domain.exceptions import ApplicationNotFoundException
from loanlink.domain.interfaces import ApplicationRepository
from loanlink.infrastructure.database.models import ApplicationModel, as_utc


class PostgresApplicationRepository(ApplicationRepository):
    """
    PostgreSQL implementation of the Application repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, application: Application) -> Application:
        """Persist a new application to the database."""
        model = ApplicationModel(id=str(application.id))
        self._apply(model, application)
        model.loan_id = application.loan_id
        model.borrower_email = application.borrower_email
        model.applied_at = application.applied_at

        self._session.add(model)
        await self._session.flush()

        return application

    async def update(self, application: Application) -> Application:
        """Write lifecycle and payment fields of an existing application."""
        model = await self._get_model(application.id)

        if model is None:
            raise ApplicationNotFoundException(str(application.id))

        self._apply(model, application)
        await self._session.flush()

        return application

    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Retrieve an application by ID."""
        model = await self._get_model(application_id)

        if model is None:
            return None

        return self._to_entity(model)

    async def list_by_borrower(self, email: str) -> List[Application]:
        stmt = (
            select(ApplicationModel)
            .where(func.lower(ApplicationModel.borrower_email) == email.lower())
            .order_by(ApplicationModel.applied_at.asc())
        )
        return await self._list(stmt)

    async def list_by_status(self, status: ApplicationStatus) -> List[Application]:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.status == status.value)
            .order_by(ApplicationModel.applied_at.asc())
        )
        return await self._list(stmt)

    async def list_all(self) -> List[Application]:
        stmt = select(ApplicationModel).order_by(ApplicationModel.applied_at.desc())
        return await self._list(stmt)

    async def delete(self, application_id: UUID) -> bool:
        stmt = delete(ApplicationModel).where(ApplicationModel.id == str(application_id))
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _get_model(self, application_id: UUID) -> Optional[ApplicationModel]:
        stmt = select(ApplicationModel).where(ApplicationModel.id == str(application_id))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _list(self, stmt) -> List[Application]:
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _apply(self, model: ApplicationModel, application: Application) -> None:
        """Copy mutable fields from the entity onto the model."""
        model.loan_title = application.loan_title
        model.details = dict(application.details)
        model.status = application.status.value
        model.application_fee_status = application.application_fee_status.value
        model.payment_status = application.payment_status
        model.transaction_id = application.transaction_id
        model.tracking_id = application.tracking_id
        model.approved_at = application.approved_at
        model.rejected_at = application.rejected_at
        model.cancelled_at = application.cancelled_at
        model.paid_at = application.paid_at

    def _to_entity(self, model: ApplicationModel) -> Application:
        """Convert database model to domain entity."""
        return Application(
            id=UUID(model.id),
            loan_id=model.loan_id,
            loan_title=model.loan_title,
            borrower_email=model.borrower_email,
            details=dict(model.details or {}),
            status=ApplicationStatus(model.status),
            application_fee_status=ApplicationFeeStatus(model.application_fee_status),
            payment_status=model.payment_status,
            transaction_id=model.transaction_id,
            tracking_id=model.tracking_id,
            applied_at=as_utc(model.applied_at),
            approved_at=as_utc(model.approved_at),
            rejected_at=as_utc(model.rejected_at),
            cancelled_at=as_utc(model.cancelled_at),
            paid_at=as_utc(model.paid_at),
        )
