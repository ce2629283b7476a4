"""Loan service - catalog browsing and management."""

from dataclasses import replace
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from loanlink.domain.entities import LoanOffer, Role
from loanlink.domain.exceptions import LoanNotFoundException, ValidationException
from loanlink.domain.interfaces import LoanRepository
from loanlink.application.dto import LoanRequest
from loanlink.application.services.authorization_service import AuthorizationService

logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = (
    "title",
    "category",
    "description",
    "amount",
    "interest_rate",
    "max_term_months",
    "show_on_home",
)


class LoanService:
    """Application service for the loan catalog."""

    def __init__(self, loan_repository: LoanRepository, authorizer: AuthorizationService):
        self._loan_repo = loan_repository
        self._authorizer = authorizer

    async def search(self, query: Optional[str] = None, home_only: bool = False) -> List[LoanOffer]:
        return await self._loan_repo.search(query=query or None, home_only=home_only)

    async def get(self, loan_id: str) -> LoanOffer:
        try:
            key = UUID(str(loan_id))
        except ValueError:
            raise LoanNotFoundException(str(loan_id))

        loan = await self._loan_repo.get_by_id(key)

        if loan is None:
            raise LoanNotFoundException(str(loan_id))

        return loan

    async def create(self, caller: str, request: LoanRequest) -> LoanOffer:
        await self._authorizer.authorize(caller, (Role.MANAGER, Role.ADMIN))

        errors = request.validate()
        if errors:
            raise ValidationException("; ".join(errors))

        loan = LoanOffer(
            title=request.title.strip(),
            category=request.category.strip(),
            amount=request.amount,
            interest_rate=request.interest_rate,
            description=request.description,
            max_term_months=request.max_term_months,
            show_on_home=request.show_on_home,
            created_by=caller,
        )
        await self._loan_repo.save(loan)

        logger.info("loan_created", loan_id=str(loan.id), created_by=caller)
        return loan

    async def update(self, caller: str, loan_id: str, changes: Dict[str, Any]) -> LoanOffer:
        """Apply a partial update; unknown keys are ignored."""
        await self._authorizer.authorize(caller, (Role.MANAGER, Role.ADMIN))
        loan = await self.get(loan_id)

        updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        updated = replace(loan, **updates)

        errors = LoanRequest(
            title=updated.title,
            category=updated.category,
            amount=updated.amount,
            interest_rate=updated.interest_rate,
            max_term_months=updated.max_term_months,
        ).validate()
        if errors:
            raise ValidationException("; ".join(errors))

        await self._loan_repo.update(updated)

        logger.info("loan_updated", loan_id=str(loan.id), fields=sorted(updates))
        return updated

    async def delete(self, caller: str, loan_id: str) -> None:
        await self._authorizer.authorize(caller, (Role.MANAGER, Role.ADMIN))
        loan = await self.get(loan_id)

        await self._loan_repo.delete(loan.id)
        logger.info("loan_deleted", loan_id=str(loan.id), deleted_by=caller)
