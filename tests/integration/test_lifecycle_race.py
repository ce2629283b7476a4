"""
Integration tests for concurrent lifecycle transitions.

Approve, Reject and Cancel check the Pending guard against the row they
read, then write every lifecycle field back. Two transitions that both read
the record while it is still Pending therefore both succeed, and whichever
writes last decides the stored state. These tests pin that behaviour down.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from loanlink.application.services import ApplicationService, AuthorizationService
from loanlink.domain.entities import (
    Application,
    ApplicationFeeStatus,
    ApplicationStatus,
    Role,
    UserAccount,
)
from loanlink.domain.exceptions import InvalidStatusTransitionException
from loanlink.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresLoanRepository,
    PostgresPaymentRepository,
    PostgresUserRepository,
)
from tests.integration.conftest import BORROWER, MANAGER


@pytest_asyncio.fixture
async def pending_application(session_factory: async_sessionmaker) -> Application:
    application = Application(loan_id="loan-123", borrower_email=BORROWER)

    async with session_factory() as session:
        await PostgresUserRepository(session).create_if_absent(
            UserAccount(email=MANAGER, name="Mia Manager", role=Role.MANAGER)
        )
        await PostgresApplicationRepository(session).save(application)
        await session.commit()

    return application


async def read_snapshot(session_factory: async_sessionmaker, application: Application) -> Application:
    """Read the record the way a second request would before the first one writes."""
    async with session_factory() as session:
        return await PostgresApplicationRepository(session).get_by_id(application.id)


def build_service(session: AsyncSession, snapshot: Application | None = None) -> ApplicationService:
    application_repo = PostgresApplicationRepository(session)

    if snapshot is not None:
        async def stale_read(application_id):
            return snapshot

        application_repo.get_by_id = stale_read

    return ApplicationService(
        application_repository=application_repo,
        payment_repository=PostgresPaymentRepository(session),
        loan_repository=PostgresLoanRepository(session),
        authorizer=AuthorizationService(PostgresUserRepository(session)),
    )


async def stored(session_factory: async_sessionmaker, application: Application) -> Application:
    async with session_factory() as session:
        return await PostgresApplicationRepository(session).get_by_id(application.id)


class TestInterleavedTransitions:
    """Tests for transitions that both pass the Pending guard."""

    @pytest.mark.asyncio
    async def test_reject_written_after_approve_wins(
        self,
        session_factory: async_sessionmaker,
        pending_application: Application,
    ):
        snapshot = await read_snapshot(session_factory, pending_application)
        application_id = str(pending_application.id)

        async with session_factory() as session:
            approved = await build_service(session).approve(application_id, MANAGER)
            await session.commit()

        async with session_factory() as session:
            rejected = await build_service(session, snapshot).reject(application_id, MANAGER)
            await session.commit()

        assert approved.status == ApplicationStatus.APPROVED
        assert rejected.status == ApplicationStatus.REJECTED

        current = await stored(session_factory, pending_application)
        assert current.status == ApplicationStatus.REJECTED
        assert current.approved_at is None
        assert current.application_fee_status == ApplicationFeeStatus.UNPAID
        assert current.tracking_id is None

    @pytest.mark.asyncio
    async def test_approve_written_after_cancel_wins(
        self,
        session_factory: async_sessionmaker,
        pending_application: Application,
    ):
        snapshot = await read_snapshot(session_factory, pending_application)
        application_id = str(pending_application.id)

        async with session_factory() as session:
            await build_service(session).cancel(application_id, BORROWER)
            await session.commit()

        async with session_factory() as session:
            await build_service(session, snapshot).approve(application_id, MANAGER)
            await session.commit()

        current = await stored(session_factory, pending_application)
        assert current.status == ApplicationStatus.APPROVED
        assert current.cancelled_at is None
        assert current.application_fee_status == ApplicationFeeStatus.PAID

    @pytest.mark.asyncio
    async def test_transition_after_committed_write_is_refused(
        self,
        session_factory: async_sessionmaker,
        pending_application: Application,
    ):
        """Without an interleaved read the Pending guard sees the first write."""
        application_id = str(pending_application.id)

        async with session_factory() as session:
            await build_service(session).approve(application_id, MANAGER)
            await session.commit()

        async with session_factory() as session:
            with pytest.raises(InvalidStatusTransitionException):
                await build_service(session).reject(application_id, MANAGER)

        current = await stored(session_factory, pending_application)
        assert current.status == ApplicationStatus.APPROVED
