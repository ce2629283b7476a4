"""User service - account registration and administration."""

from typing import List

import structlog

from loanlink.domain.entities import Role, UserAccount
from loanlink.domain.exceptions import UserNotFoundException, ValidationException
from loanlink.domain.interfaces import UserRepository
from loanlink.application.dto import (
    RegisterUserRequest,
    RegistrationResult,
    UpdateUserRequest,
)
from loanlink.application.services.authorization_service import AuthorizationService

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for the user directory."""

    def __init__(self, user_repository: UserRepository, authorizer: AuthorizationService):
        self._user_repo = user_repository
        self._authorizer = authorizer

    async def register(self, request: RegisterUserRequest) -> RegistrationResult:
        """
        Register an account, or return the existing one for the email.

        Self-registration may request ``manager``; ``admin`` is only ever
        granted through ``update_user``.
        """
        errors = request.validate()
        if errors:
            raise ValidationException("; ".join(errors))

        user = UserAccount(
            email=request.email.strip(),
            name=request.name.strip(),
            role=Role(request.role) if request.role else Role.BORROWER,
            photo_url=request.photo_url,
        )
        stored, created = await self._user_repo.create_if_absent(user)

        if created:
            logger.info("user_registered", email=stored.email, role=stored.role.value)

        return RegistrationResult(user=stored, created=created)

    async def get_account(self, email: str) -> UserAccount:
        user = await self._user_repo.get_by_email(email)

        if user is None:
            raise UserNotFoundException(email)

        return user

    async def list_users(self, caller: str) -> List[UserAccount]:
        await self._authorizer.authorize(caller, (Role.ADMIN,))
        return await self._user_repo.list_all()

    async def update_user(self, caller: str, email: str, request: UpdateUserRequest) -> UserAccount:
        """
        Change an account's role and/or suspension.

        Raises:
            RoleRequiredException: If the caller is not an admin
            ValidationException: If the change is malformed
            UserNotFoundException: If the account does not exist
        """
        await self._authorizer.authorize(caller, (Role.ADMIN,))

        errors = request.validate()
        if errors:
            raise ValidationException("; ".join(errors))

        user = await self.get_account(email)

        if request.role is not None:
            user.role = Role(request.role)

        if request.suspend is True:
            user.suspend(request.suspend_reason.strip())
        elif request.suspend is False:
            user.reinstate()

        await self._user_repo.update(user)

        logger.info(
            "user_updated",
            email=email,
            updated_by=caller,
            role=user.role.value,
            suspended=user.suspended,
        )

        return user
