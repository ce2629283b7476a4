"""Loan catalog API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from loanlink.application.dto import LoanRequest
from loanlink.application.services import LoanService
from loanlink.core.dependencies import get_current_principal, get_loan_service
from loanlink.presentation.schemas import (
    ErrorResponseSchema,
    LoanCreateSchema,
    LoanSchema,
    LoanUpdateSchema,
)

loan_router = APIRouter(
    prefix="/loans",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Loan not found"},
    },
)

Service = Annotated[LoanService, Depends(get_loan_service)]


@loan_router.get(
    "",
    response_model=List[LoanSchema],
    summary="Search Loans",
)
async def search_loans(
    service: Service,
    search: Annotated[
        Optional[str],
        Query(max_length=100, description="Matches title or category"),
    ] = None,
    home: Annotated[bool, Query(description="Only offers featured on the home page")] = False,
) -> List[LoanSchema]:
    loans = await service.search(query=search, home_only=home)
    return [LoanSchema.model_validate(loan) for loan in loans]


@loan_router.get("/{loan_id}", response_model=LoanSchema, summary="Get Loan")
async def get_loan(loan_id: str, service: Service) -> LoanSchema:
    loan = await service.get(loan_id)
    return LoanSchema.model_validate(loan)


@loan_router.post(
    "",
    response_model=LoanSchema,
    status_code=201,
    summary="Create Loan",
)
async def create_loan(
    request: LoanCreateSchema,
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> LoanSchema:
    loan = await service.create(principal, LoanRequest(**request.model_dump()))
    return LoanSchema.model_validate(loan)


@loan_router.patch("/{loan_id}", response_model=LoanSchema, summary="Update Loan")
async def update_loan(
    loan_id: str,
    request: LoanUpdateSchema,
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> LoanSchema:
    loan = await service.update(principal, loan_id, request.model_dump(exclude_unset=True))
    return LoanSchema.model_validate(loan)


@loan_router.delete("/{loan_id}", status_code=204, summary="Delete Loan")
async def delete_loan(
    loan_id: str,
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> Response:
    await service.delete(principal, loan_id)
    return Response(status_code=204)
