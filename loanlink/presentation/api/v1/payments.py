"""Payment checkout and settlement API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from loanlink.application.dto import CheckoutRequest
from loanlink.application.services import SettlementService
from loanlink.core.dependencies import get_current_principal, get_settlement_service
from loanlink.presentation.schemas import (
    CheckoutRequestSchema,
    CheckoutSessionSchema,
    ErrorResponseSchema,
    PaymentRecordSchema,
    SettlementResultSchema,
)

payment_router = APIRouter(
    responses={
        502: {"model": ErrorResponseSchema, "description": "Payment provider unavailable"},
    },
)

Service = Annotated[SettlementService, Depends(get_settlement_service)]


@payment_router.post(
    "/payment-checkout-system",
    response_model=CheckoutSessionSchema,
    summary="Create Checkout Session",
    description="Open a hosted checkout session for an application fee.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid amount"},
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
        409: {"model": ErrorResponseSchema, "description": "Fee already paid"},
    },
)
async def create_checkout_session(
    request: CheckoutRequestSchema,
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> CheckoutSessionSchema:
    response = await service.create_checkout_session(
        CheckoutRequest(
            application_id=request.application_id,
            loan_title=request.loan_title,
            amount=request.amount,
            payer_email=principal,
        )
    )
    return CheckoutSessionSchema(url=response.url, session_id=response.session_id)


@payment_router.patch(
    "/payment-success",
    response_model=SettlementResultSchema,
    summary="Settle Payment",
    description="""
    Settle a completed checkout session.

    Safe to call any number of times for the same session; only the first
    call records the payment.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Missing session or payment incomplete"},
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
    },
)
async def settle_payment(
    service: Service,
    session_id: Annotated[Optional[str], Query(description="Checkout session reference")] = None,
) -> SettlementResultSchema:
    result = await service.settle_payment(session_id)

    return SettlementResultSchema(
        transaction_id=result.transaction_id,
        tracking_id=result.tracking_id,
        already_settled=result.already_settled,
        application_updated=result.application_updated,
        payment_recorded=result.payment_recorded,
    )


@payment_router.get(
    "/payments",
    response_model=List[PaymentRecordSchema],
    summary="List My Payments",
    description="Payment history of the caller, newest first.",
)
async def list_payments(
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
    email: Annotated[Optional[str], Query(description="Must match the caller")] = None,
) -> List[PaymentRecordSchema]:
    records = await service.list_payments(principal, email)
    return [PaymentRecordSchema.model_validate(r) for r in records]


@payment_router.get(
    "/admin/payments",
    response_model=List[PaymentRecordSchema],
    summary="List All Payments",
)
async def list_all_payments(
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> List[PaymentRecordSchema]:
    records = await service.list_all_payments(principal)
    return [PaymentRecordSchema.model_validate(r) for r in records]
