"""Repository for back-office user data access."""

from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.auth.security import hash_password
from powerbill.filters.sql import apply_filters, apply_predicate
from powerbill.filters.types import FilterResult
from powerbill.models.user import User
from powerbill.schemas.user import UserCreate, UserUpdate


class UserRepository:
    """Data access layer for users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self, filters: FilterResult) -> tuple[list[User], int]:
        count_query = apply_predicate(
            select(func.count()).select_from(User), User, filters.predicate
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        result = await self.session.execute(apply_filters(select(User), User, filters))
        return list(result.scalars().all()), total

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def create(self, data: UserCreate) -> User:
        values = data.model_dump(exclude={"password"})
        user = User(hashed_password=hash_password(data.password), **values)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user_id: str, data: UserUpdate) -> User | None:
        user = await self.get_by_id(user_id)
        if not user:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def record_login(self, user: User) -> None:
        user.last_login = datetime.now(UTC)
        await self.session.flush()
