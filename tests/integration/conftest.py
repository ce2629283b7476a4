"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Fake identity verifier mapping bearer tokens to emails
- Fake payment processor with controllable session state
- In-memory database for testing, seeded with one account per role
"""

from dataclasses import replace
from typing import AsyncGenerator, Dict, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from loanlink.main import app
from loanlink.core.dependencies import (
    get_application_repository,
    get_identity_verifier,
    get_loan_repository,
    get_payment_client,
    get_payment_repository,
    get_user_repository,
)
from loanlink.domain.entities import ProcessorSession, Role, UserAccount
from loanlink.domain.exceptions import (
    InvalidCredentialException,
    PaymentProviderException,
    PaymentProviderTimeoutException,
)
from loanlink.domain.interfaces import IdentityVerifier, PaymentProcessorClient
from loanlink.infrastructure.database import Base
from loanlink.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresLoanRepository,
    PostgresPaymentRepository,
    PostgresUserRepository,
)


# =============================================================================
# Test Accounts
# =============================================================================

BORROWER = "borrower@example.com"
OTHER_BORROWER = "other@example.com"
MANAGER = "manager@example.com"
ADMIN = "admin@example.com"
SUSPENDED_MANAGER = "suspended@example.com"

TOKENS: Dict[str, str] = {
    "borrower-token": BORROWER,
    "other-token": OTHER_BORROWER,
    "manager-token": MANAGER,
    "admin-token": ADMIN,
    "suspended-token": SUSPENDED_MANAGER,
    "unregistered-token": "nobody@example.com",
}


def auth(token: str) -> dict:
    """Authorization header for a fake bearer token."""
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Fake Clients
# =============================================================================

class FakeIdentityVerifier(IdentityVerifier):
    """Identity verifier that resolves tokens from a fixed table."""

    def __init__(self, tokens: Dict[str, str]):
        self.tokens = tokens

    async def verify_token(self, token: str) -> str:
        if token not in self.tokens:
            raise InvalidCredentialException()
        return self.tokens[token]


class FakePaymentProcessor(PaymentProcessorClient):
    """Payment processor that keeps checkout sessions in memory."""

    def __init__(self):
        self.sessions: Dict[str, ProcessorSession] = {}
        self.created: List[dict] = []
        self.retrieve_count = 0
        self.fail_retrieve = False

    async def create_checkout_session(
        self,
        amount_minor: int,
        currency: str,
        product_name: str,
        customer_email: str,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> ProcessorSession:
        session_id = f"cs_test_{len(self.sessions) + 1}"
        session = ProcessorSession(
            id=session_id,
            url=f"https://checkout.test/pay/{session_id}",
            payment_status="unpaid",
            amount_total=amount_minor,
            currency=currency,
            customer_email=customer_email,
            metadata=dict(metadata),
        )
        self.sessions[session_id] = session
        self.created.append({
            "amount_minor": amount_minor,
            "currency": currency,
            "product_name": product_name,
            "customer_email": customer_email,
            "metadata": dict(metadata),
            "success_url": success_url,
            "cancel_url": cancel_url,
        })
        return session

    async def retrieve_checkout_session(self, session_id: str) -> ProcessorSession:
        self.retrieve_count += 1

        if self.fail_retrieve:
            raise PaymentProviderTimeoutException()

        if session_id not in self.sessions:
            raise PaymentProviderException("No such checkout session", status_code=404)

        return self.sessions[session_id]

    def complete(self, session_id: str, transaction_id: str | None = None) -> str:
        """Mark a session paid, as the processor does after checkout."""
        transaction_id = transaction_id or f"pi_{session_id}"
        self.sessions[session_id] = replace(
            self.sessions[session_id],
            payment_status="paid",
            transaction_id=transaction_id,
        )
        return transaction_id


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_users(test_session: AsyncSession) -> List[UserAccount]:
    """One account per role, plus a suspended manager."""
    repo = PostgresUserRepository(test_session)
    users = [
        UserAccount(email=BORROWER, name="Bea Borrower"),
        UserAccount(email=OTHER_BORROWER, name="Otto Other"),
        UserAccount(email=MANAGER, name="Mia Manager", role=Role.MANAGER),
        UserAccount(email=ADMIN, name="Ada Admin", role=Role.ADMIN),
        UserAccount(
            email=SUSPENDED_MANAGER,
            name="Sam Suspended",
            role=Role.MANAGER,
            suspended=True,
            suspend_reason="Fraud review",
        ),
    ]
    for user in users:
        await repo.create_if_absent(user)
    return users


# =============================================================================
# Fake Client Fixtures
# =============================================================================

@pytest.fixture
def identity_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier(TOKENS)


@pytest.fixture
def payment_processor() -> FakePaymentProcessor:
    return FakePaymentProcessor()


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    seeded_users: List[UserAccount],
    identity_verifier: FakeIdentityVerifier,
    payment_processor: FakePaymentProcessor,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with faked upstreams.

    This client:
    - Uses an in-memory SQLite database shared by all repositories
    - Resolves bearer tokens through the fixed TOKENS table
    - Keeps checkout sessions in the fake payment processor
    """
    async def override_get_application_repository():
        return PostgresApplicationRepository(test_session)

    async def override_get_payment_repository():
        return PostgresPaymentRepository(test_session)

    async def override_get_loan_repository():
        return PostgresLoanRepository(test_session)

    async def override_get_user_repository():
        return PostgresUserRepository(test_session)

    app.dependency_overrides[get_application_repository] = override_get_application_repository
    app.dependency_overrides[get_payment_repository] = override_get_payment_repository
    app.dependency_overrides[get_loan_repository] = override_get_loan_repository
    app.dependency_overrides[get_user_repository] = override_get_user_repository
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_payment_client] = lambda: payment_processor

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def application_request() -> dict:
    """Request body for a loan application."""
    return {
        "loan_id": "loan-123",
        "details": {
            "first_name": "Bea",
            "last_name": "Borrower",
            "monthly_income": 4200,
            "reason": "Sewing machine for a tailoring business",
        },
    }


@pytest_asyncio.fixture
async def submitted_application(client: AsyncClient, application_request: dict) -> dict:
    """A pending application owned by BORROWER."""
    response = await client.post(
        "/applications",
        json=application_request,
        headers=auth("borrower-token"),
    )
    assert response.status_code == 201
    return response.json()
