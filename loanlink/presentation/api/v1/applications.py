"""Application lifecycle API endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Response

from loanlink.application.dto import SubmitApplicationRequest
from loanlink.application.services import ApplicationService
from loanlink.core.dependencies import get_application_service, get_current_principal
from loanlink.presentation.schemas import (
    ApplicationSchema,
    ErrorResponseSchema,
    SubmitApplicationSchema,
)

application_router = APIRouter(
    prefix="/applications",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
        403: {"model": ErrorResponseSchema, "description": "Role or ownership required"},
    },
)

Principal = Annotated[str, Depends(get_current_principal)]
Service = Annotated[ApplicationService, Depends(get_application_service)]


@application_router.post(
    "",
    response_model=ApplicationSchema,
    status_code=201,
    summary="Submit Application",
    responses={400: {"model": ErrorResponseSchema, "description": "Invalid request"}},
)
async def submit_application(
    request: SubmitApplicationSchema,
    principal: Principal,
    service: Service,
) -> ApplicationSchema:
    """Submit an application for the calling borrower."""
    application = await service.submit(
        SubmitApplicationRequest(
            borrower_email=principal,
            loan_id=request.loan_id,
            details=request.details,
        )
    )
    return ApplicationSchema.model_validate(application)


@application_router.get(
    "",
    response_model=List[ApplicationSchema],
    summary="List All Applications",
)
async def list_all_applications(principal: Principal, service: Service) -> List[ApplicationSchema]:
    applications = await service.list_all(principal)
    return [ApplicationSchema.model_validate(a) for a in applications]


@application_router.get(
    "/pending",
    response_model=List[ApplicationSchema],
    summary="List Pending Applications",
)
async def list_pending_applications(principal: Principal, service: Service) -> List[ApplicationSchema]:
    applications = await service.list_pending(principal)
    return [ApplicationSchema.model_validate(a) for a in applications]


@application_router.get(
    "/approved",
    response_model=List[ApplicationSchema],
    summary="List Approved Applications",
)
async def list_approved_applications(principal: Principal, service: Service) -> List[ApplicationSchema]:
    applications = await service.list_approved(principal)
    return [ApplicationSchema.model_validate(a) for a in applications]


@application_router.get(
    "/user/{email}",
    response_model=List[ApplicationSchema],
    summary="List My Applications",
    description="Borrowers may only list their own applications.",
)
async def list_user_applications(
    email: str,
    principal: Principal,
    service: Service,
) -> List[ApplicationSchema]:
    applications = await service.list_for_user(principal, email)
    return [ApplicationSchema.model_validate(a) for a in applications]


@application_router.get(
    "/{application_id}",
    response_model=ApplicationSchema,
    summary="Get Application",
    responses={404: {"model": ErrorResponseSchema, "description": "Application not found"}},
)
async def get_application(
    application_id: str,
    principal: Principal,
    service: Service,
) -> ApplicationSchema:
    application = await service.get(application_id, principal)
    return ApplicationSchema.model_validate(application)


@application_router.patch(
    "/approve/{application_id}",
    response_model=ApplicationSchema,
    summary="Approve Application",
    description="Approve a pending application. Approval also marks the fee paid.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
        409: {"model": ErrorResponseSchema, "description": "Application is not pending"},
    },
)
async def approve_application(
    application_id: str,
    principal: Principal,
    service: Service,
) -> ApplicationSchema:
    application = await service.approve(application_id, principal)
    return ApplicationSchema.model_validate(application)


@application_router.patch(
    "/reject/{application_id}",
    response_model=ApplicationSchema,
    summary="Reject Application",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
        409: {"model": ErrorResponseSchema, "description": "Application is not pending"},
    },
)
async def reject_application(
    application_id: str,
    principal: Principal,
    service: Service,
) -> ApplicationSchema:
    application = await service.reject(application_id, principal)
    return ApplicationSchema.model_validate(application)


@application_router.patch(
    "/cancel/{application_id}",
    response_model=ApplicationSchema,
    summary="Cancel Application",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
        409: {"model": ErrorResponseSchema, "description": "Application is not pending"},
    },
)
async def cancel_application(
    application_id: str,
    principal: Principal,
    service: Service,
) -> ApplicationSchema:
    application = await service.cancel(application_id, principal)
    return ApplicationSchema.model_validate(application)


@application_router.delete(
    "/{application_id}",
    status_code=204,
    summary="Withdraw Application",
    description="Delete an application that was never paid for or approved.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Application not found"},
        409: {"model": ErrorResponseSchema, "description": "Application can no longer be withdrawn"},
    },
)
async def withdraw_application(
    application_id: str,
    principal: Principal,
    service: Service,
) -> Response:
    await service.withdraw(application_id, principal)
    return Response(status_code=204)
