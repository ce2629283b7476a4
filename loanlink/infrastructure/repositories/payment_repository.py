"""PostgreSQL implementation of the append-only payment ledger."""

from typing import List, Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loanlink.domain.entities import PaymentRecord
from loanlink.domain.interfaces import PaymentRepository
from loanlink.infrastructure.database.models import PaymentModel, as_utc

logger = structlog.get_logger(__name__)


class PostgresPaymentRepository(PaymentRepository):
    """
    PostgreSQL implementation of the Payment ledger.

    Idempotency rests on the unique constraint over ``transaction_id``:
    a conflicting insert is reported as ``created=False`` instead of
    raising.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def insert_if_absent(
        self,
        record: PaymentRecord,
    ) -> Tuple[PaymentRecord, bool]:
        """
        Insert a ledger row unless its transaction is already recorded.

        On a unique-constraint conflict the session is rolled back, so this
        must be the first write of the unit of work.
        """
        existing = await self.get_by_transaction_id(record.transaction_id)
        if existing is not None:
            return existing, False

        model = PaymentModel(
            id=str(record.id),
            application_id=record.application_id,
            loan_title=record.loan_title,
            amount=record.amount,
            currency=record.currency,
            payer_email=record.payer_email,
            transaction_id=record.transaction_id,
            payment_status=record.payment_status,
            tracking_id=record.tracking_id,
            paid_at=record.paid_at,
            created_at=record.created_at,
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            logger.info(
                "payment_insert_conflict",
                transaction_id=record.transaction_id,
            )

            existing = await self.get_by_transaction_id(record.transaction_id)
            if existing is None:
                raise
            return existing, False

        return record, True

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[PaymentRecord]:
        stmt = select(PaymentModel).where(PaymentModel.transaction_id == transaction_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def exists_for_application(self, application_id: str) -> bool:
        stmt = select(exists().where(PaymentModel.application_id == application_id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def list_by_payer(self, email: str) -> List[PaymentRecord]:
        stmt = (
            select(PaymentModel)
            .where(func.lower(PaymentModel.payer_email) == email.lower())
            .order_by(PaymentModel.paid_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_all(self) -> List[PaymentRecord]:
        stmt = select(PaymentModel).order_by(PaymentModel.paid_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: PaymentModel) -> PaymentRecord:
        """Convert database model to domain entity."""
        return PaymentRecord(
            id=UUID(model.id),
            application_id=model.application_id,
            loan_title=model.loan_title,
            amount=model.amount,
            currency=model.currency,
            payer_email=model.payer_email,
            transaction_id=model.transaction_id,
            payment_status=model.payment_status,
            tracking_id=model.tracking_id,
            paid_at=as_utc(model.paid_at),
            created_at=as_utc(model.created_at),
        )
