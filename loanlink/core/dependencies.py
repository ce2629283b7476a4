"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from loanlink.domain.exceptions import MissingCredentialException
from loanlink.domain.interfaces import IdentityVerifier, PaymentProcessorClient
from loanlink.infrastructure.database import get_db_session
from loanlink.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresLoanRepository,
    PostgresPaymentRepository,
    PostgresUserRepository,
)
from loanlink.infrastructure.clients import (
    HttpIdentityVerifierClient,
    HttpPaymentProcessorClient,
)
from loanlink.application.services import (
    ApplicationService,
    AuthorizationService,
    LoanService,
    SettlementService,
    UserService,
)


# Repository dependencies
async def get_application_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresApplicationRepository:
    """Get an ApplicationRepository instance."""
    return PostgresApplicationRepository(session)


async def get_payment_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresPaymentRepository:
    """Get a PaymentRepository instance."""
    return PostgresPaymentRepository(session)


async def get_loan_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresLoanRepository:
    return PostgresLoanRepository(session)


async def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresUserRepository:
    return PostgresUserRepository(session)


# External client dependencies
def get_payment_client() -> PaymentProcessorClient:
    """Get a PaymentProcessorClient instance."""
    return HttpPaymentProcessorClient()


def get_identity_verifier() -> IdentityVerifier:
    """Get an IdentityVerifier instance."""
    return HttpIdentityVerifierClient()


# Authentication
async def get_current_principal(
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Resolve the verified email of the caller from its bearer token.

    Raises:
        MissingCredentialException: If no bearer token is present
        InvalidCredentialException: If the identity provider rejects it
    """
    scheme, _, token = (authorization or "").partition(" ")

    if scheme.lower() != "bearer" or not token.strip():
        raise MissingCredentialException()

    return await verifier.verify_token(token.strip())


# Service dependencies
async def get_authorization_service(
    user_repo: Annotated[PostgresUserRepository, Depends(get_user_repository)],
) -> AuthorizationService:
    return AuthorizationService(user_repository=user_repo)


async def get_application_service(
    application_repo: Annotated[PostgresApplicationRepository, Depends(get_application_repository)],
    payment_repo: Annotated[PostgresPaymentRepository, Depends(get_payment_repository)],
    loan_repo: Annotated[PostgresLoanRepository, Depends(get_loan_repository)],
    authorizer: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> ApplicationService:
    """Get an ApplicationService instance with all dependencies."""
    return ApplicationService(
        application_repository=application_repo,
        payment_repository=payment_repo,
        loan_repository=loan_repo,
        authorizer=authorizer,
    )


async def get_settlement_service(
    application_repo: Annotated[PostgresApplicationRepository, Depends(get_application_repository)],
    payment_repo: Annotated[PostgresPaymentRepository, Depends(get_payment_repository)],
    payment_client: Annotated[PaymentProcessorClient, Depends(get_payment_client)],
    authorizer: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> SettlementService:
    """Get a SettlementService instance with all dependencies."""
    return SettlementService(
        application_repository=application_repo,
        payment_repository=payment_repo,
        payment_client=payment_client,
        authorizer=authorizer,
    )


async def get_loan_service(
    loan_repo: Annotated[PostgresLoanRepository, Depends(get_loan_repository)],
    authorizer: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> LoanService:
    return LoanService(loan_repository=loan_repo, authorizer=authorizer)


async def get_user_service(
    user_repo: Annotated[PostgresUserRepository, Depends(get_user_repository)],
    authorizer: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> UserService:
    return UserService(user_repository=user_repo, authorizer=authorizer)
