"""Repository for dashboard notifications."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.models.notification import Notification
from powerbill.repositories.common import next_code
from powerbill.schemas.notification import NotificationCreate


class NotificationRepository:
    """Data access layer for notifications."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self, *, page: int = 1, size: int = 10) -> tuple[list[Notification], int]:
        total = (
            await self.session.execute(select(func.count()).select_from(Notification))
        ).scalar() or 0

        result = await self.session.execute(
            select(Notification)
            .order_by(Notification.timestamp.desc())
            .offset((page - 1) * size)
            .limit(size)
        )
        return list(result.scalars().all()), total

    async def get_unread(self, limit: int | None = None) -> list[Notification]:
        query = (
            select(Notification)
            .where(Notification.is_read.is_(False))
            .order_by(Notification.priority.desc(), Notification.timestamp.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create(self, data: NotificationCreate) -> Notification:
        notification = Notification(
            code=await next_code(self.session, Notification.code, "NOTIF"), **data.model_dump()
        )
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def mark_read(self, code: str) -> Notification | None:
        result = await self.session.execute(
            select(Notification).where(Notification.code == code)
        )
        notification = result.scalar_one_or_none()
        if not notification:
            return None

        notification.is_read = True
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def mark_all_read(self) -> int:
        result = await self.session.execute(
            update(Notification).where(Notification.is_read.is_(False)).values(is_read=True)
        )
        return result.rowcount or 0
