"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from loanlink.domain.entities import (
    Application,
    ApplicationStatus,
    LoanOffer,
    PaymentRecord,
    UserAccount,
)


class ApplicationRepository(ABC):
    """
    Abstract repository for Application persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """
        Persist a new application.

        Args:
            application: The application to save

        Returns:
            The saved application
        """
        ...

    @abstractmethod
    async def update(self, application: Application) -> Application:
        """
        Write the lifecycle and payment fields of an existing application.

        Args:
            application: The application to update

        Returns:
            The updated application

        Raises:
            ApplicationNotFoundException: If the row no longer exists
        """
        ...

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """
        Retrieve an application by ID.

        Returns:
            The application if found, None otherwise
        """
        ...

    @abstractmethod
    async def list_by_borrower(self, email: str) -> List[Application]:
        """Retrieve a borrower's applications, oldest first, ignoring email case."""
        ...

    @abstractmethod
    async def list_by_status(self, status: ApplicationStatus) -> List[Application]:
        """Retrieve all applications in a given status."""
        ...

    @abstractmethod
    async def list_all(self) -> List[Application]:
        """Retrieve every application."""
        ...

    @abstractmethod
    async def delete(self, application_id: UUID) -> bool:
        """
        Hard-delete an application.

        Returns:
            True if a row was removed
        """
        ...


class PaymentRepository(ABC):
    """
    Abstract append-only repository for the payment ledger.

    There is intentionally no update or delete.
    """

    @abstractmethod
    async def insert_if_absent(
        self,
        record: PaymentRecord,
    ) -> Tuple[PaymentRecord, bool]:
        """
        Insert a record unless one already exists for its transaction_id.

        Must be atomic with respect to concurrent callers inserting the
        same transaction_id.

        Returns:
            (stored record, created) where ``created`` is False when an
            existing record for the same transaction was found
        """
        ...

    @abstractmethod
    async def get_by_transaction_id(self, transaction_id: str) -> Optional[PaymentRecord]:
        """Retrieve the ledger row for a processor transaction reference."""
        ...

    @abstractmethod
    async def exists_for_application(self, application_id: str) -> bool:
        """Check whether any payment has been recorded for an application."""
        ...

    @abstractmethod
    async def list_by_payer(self, email: str) -> List[PaymentRecord]:
        """Retrieve a payer's history, newest first, ignoring email case."""
        ...

    @abstractmethod
    async def list_all(self) -> List[PaymentRecord]:
        """Retrieve the whole ledger, ordered by paid_at descending."""
        ...


class LoanRepository(ABC):
    """Abstract repository for the loan catalog."""

    @abstractmethod
    async def save(self, loan: LoanOffer) -> LoanOffer:
        ...

    @abstractmethod
    async def update(self, loan: LoanOffer) -> LoanOffer:
        ...

    @abstractmethod
    async def get_by_id(self, loan_id: UUID) -> Optional[LoanOffer]:
        ...

    @abstractmethod
    async def search(
        self,
        query: Optional[str] = None,
        home_only: bool = False,
    ) -> List[LoanOffer]:
        """
        List loan offers.

        Args:
            query: Case-insensitive substring matched against title or category
            home_only: Only return offers flagged for the home page
        """
        ...

    @abstractmethod
    async def delete(self, loan_id: UUID) -> bool:
        ...


class UserRepository(ABC):
    """Abstract repository for user accounts."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        ...

    @abstractmethod
    async def create_if_absent(self, user: UserAccount) -> Tuple[UserAccount, bool]:
        """
        Register an account unless the email is already taken.

        Returns:
            (stored account, created)
        """
        ...

    @abstractmethod
    async def update(self, user: UserAccount) -> UserAccount:
        ...

    @abstractmethod
    async def list_all(self) -> List[UserAccount]:
        ...
