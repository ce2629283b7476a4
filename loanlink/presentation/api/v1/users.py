"""User directory API endpoints."""

from typing import Annotated, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from loanlink.application.dto import RegisterUserRequest, UpdateUserRequest
from loanlink.application.services import UserService
from loanlink.core.dependencies import get_current_principal, get_user_service
from loanlink.presentation.schemas import (
    ErrorResponseSchema,
    RegisterUserSchema,
    RegistrationSchema,
    UpdateUserSchema,
    UserSchema,
)

user_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)

Service = Annotated[UserService, Depends(get_user_service)]


@user_router.post(
    "/users",
    response_model=RegistrationSchema,
    status_code=201,
    summary="Register User",
    description="Returns 200 with the existing account when the email is already registered.",
)
async def register_user(request: RegisterUserSchema, service: Service):
    result = await service.register(
        RegisterUserRequest(
            email=request.email,
            name=request.name,
            role=request.role,
            photo_url=request.photo_url,
        )
    )

    body = RegistrationSchema(
        message="User created" if result.created else "User already exists",
        user=UserSchema.model_validate(result.user),
    )

    if not result.created:
        return JSONResponse(status_code=200, content=body.model_dump(mode="json"))
    return body


@user_router.get("/users/me", response_model=UserSchema, summary="Get My Account")
async def get_me(
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> UserSchema:
    user = await service.get_account(principal)
    return UserSchema.model_validate(user)


@user_router.get("/admin/users", response_model=List[UserSchema], summary="List Users")
async def list_users(
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> List[UserSchema]:
    users = await service.list_users(principal)
    return [UserSchema.model_validate(u) for u in users]


@user_router.patch(
    "/admin/users/role/{email}",
    response_model=UserSchema,
    summary="Update User Role",
    description="Change an account's role or suspension.",
    responses={404: {"model": ErrorResponseSchema, "description": "User not found"}},
)
async def update_user(
    email: str,
    request: UpdateUserSchema,
    principal: Annotated[str, Depends(get_current_principal)],
    service: Service,
) -> UserSchema:
    user = await service.update_user(
        principal,
        email,
        UpdateUserRequest(
            role=request.role,
            suspend=request.suspend,
            suspend_reason=request.suspend_reason,
        ),
    )
    return UserSchema.model_validate(user)
