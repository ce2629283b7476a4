"""Authorization service - the role guard for gated operations."""

from typing import Iterable

import structlog

from loanlink.domain.entities import Role, UserAccount
from loanlink.domain.exceptions import (
    AccountSuspendedException,
    RoleRequiredException,
)
from loanlink.domain.interfaces import UserRepository

logger = structlog.get_logger(__name__)


class AuthorizationService:
    """
    Resolves a verified principal to an account and checks its role.

    Every role-gated operation calls ``authorize`` before touching any
    record.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def authorize(self, email: str, required_roles: Iterable[Role]) -> UserAccount:
        """
        Check that ``email`` belongs to an active account holding one of
        ``required_roles``.

        Raises:
            RoleRequiredException: If the account is missing or its role
                does not match
            AccountSuspendedException: If the account is suspended
        """
        roles = list(required_roles)
        role_names = [role.value for role in roles]

        account = await self._user_repo.get_by_email(email)

        if account is None:
            logger.warning("authorization_denied", email=email, reason="no_account")
            raise RoleRequiredException(email, role_names)

        if account.suspended:
            logger.warning("authorization_denied", email=email, reason="suspended")
            raise AccountSuspendedException(email)

        if not account.has_role(*roles):
            logger.warning(
                "authorization_denied",
                email=email,
                reason="role",
                role=account.role.value,
                required=role_names,
            )
            raise RoleRequiredException(email, role_names)

        return account
