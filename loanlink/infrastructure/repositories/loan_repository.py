"""PostgreSQL repository implementation for the loan catalog."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from loanlink.domain.entities import LoanOffer
from loanlink.domain.exceptions import LoanNotFoundException
from loanlink.domain.interfaces import LoanRepository
from loanlink.infrastructure.database.models import LoanModel, as_utc


class PostgresLoanRepository(LoanRepository):
    """PostgreSQL-backed loan catalog."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, loan: LoanOffer) -> LoanOffer:
        model = LoanModel(id=str(loan.id), created_at=loan.created_at)
        self._apply(model, loan)

        self._session.add(model)
        await self._session.flush()

        return loan

    async def update(self, loan: LoanOffer) -> LoanOffer:
        model = await self._get_model(loan.id)

        if model is None:
            raise LoanNotFoundException(str(loan.id))

        self._apply(model, loan)
        await self._session.flush()

        return loan

    async def get_by_id(self, loan_id: UUID) -> Optional[LoanOffer]:
        model = await self._get_model(loan_id)

        if model is None:
            return None

        return self._to_entity(model)

    async def search(
        self,
        query: Optional[str] = None,
        home_only: bool = False,
    ) -> List[LoanOffer]:
        stmt = select(LoanModel)

        if query:
            pattern = f"%{query}%"
            stmt = stmt.where(
                or_(
                    LoanModel.title.ilike(pattern),
                    LoanModel.category.ilike(pattern),
                )
            )

        if home_only:
            stmt = stmt.where(LoanModel.show_on_home.is_(True))

        stmt = stmt.order_by(LoanModel.created_at.desc())
        result = await self._session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, loan_id: UUID) -> bool:
        stmt = delete(LoanModel).where(LoanModel.id == str(loan_id))
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _get_model(self, loan_id: UUID) -> Optional[LoanModel]:
        stmt = select(LoanModel).where(LoanModel.id == str(loan_id))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _apply(self, model: LoanModel, loan: LoanOffer) -> None:
        model.title = loan.title
        model.category = loan.category
        model.description = loan.description
        model.amount = loan.amount
        model.interest_rate = loan.interest_rate
        model.max_term_months = loan.max_term_months
        model.show_on_home = loan.show_on_home
        model.created_by = loan.created_by

    def _to_entity(self, model: LoanModel) -> LoanOffer:
        return LoanOffer(
            id=UUID(model.id),
            title=model.title,
            category=model.category,
            description=model.description,
            amount=model.amount,
            interest_rate=model.interest_rate,
            max_term_months=model.max_term_months,
            show_on_home=model.show_on_home,
            created_by=model.created_by,
            created_at=as_utc(model.created_at),
        )
