"""PostgreSQL repository implementation for user accounts."""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loanlink.domain.entities import Role, UserAccount
from loanlink.domain.exceptions import UserNotFoundException
from loanlink.domain.interfaces import UserRepository
from loanlink.infrastructure.database.models import UserModel, as_utc


class PostgresUserRepository(UserRepository):
    """PostgreSQL-backed user directory."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        model = await self._get_model(email)

        if model is None:
            return None

        return self._to_entity(model)

    async def create_if_absent(self, user: UserAccount) -> Tuple[UserAccount, bool]:
        existing = await self.get_by_email(user.email)
        if existing is not None:
            return existing, False

        model = UserModel(
            email=user.email,
            name=user.name,
            photo_url=user.photo_url,
            role=user.role.value,
            suspended=user.suspended,
            suspend_reason=user.suspend_reason,
            created_at=user.created_at,
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            existing = await self.get_by_email(user.email)
            if existing is None:
                raise
            return existing, False

        return user, True

    async def update(self, user: UserAccount) -> UserAccount:
        model = await self._get_model(user.email)

        if model is None:
            raise UserNotFoundException(user.email)

        model.name = user.name
        model.photo_url = user.photo_url
        model.role = user.role.value
        model.suspended = user.suspended
        model.suspend_reason = user.suspend_reason
        await self._session.flush()

        return user

    async def list_all(self) -> List[UserAccount]:
        stmt = select(UserModel).order_by(UserModel.created_at.asc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def _get_model(self, email: str) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: UserModel) -> UserAccount:
        return UserAccount(
            email=model.email,
            name=model.name,
            photo_url=model.photo_url,
            role=Role(model.role),
            suspended=model.suspended,
            suspend_reason=model.suspend_reason,
            created_at=as_utc(model.created_at),
        )
