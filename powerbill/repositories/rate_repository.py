"""Repository for tariff rates."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.filters.sql import apply_filters, apply_predicate
from powerbill.filters.types import FilterResult
from powerbill.models.rate import Rate
from powerbill.repositories.common import next_code
from powerbill.schemas.rate import RateCreate, RateUpdate


class RateRepository:
    """Data access layer for rates."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self, filters: FilterResult) -> tuple[list[Rate], int]:
        count_query = apply_predicate(
            select(func.count()).select_from(Rate), Rate, filters.predicate
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        result = await self.session.execute(apply_filters(select(Rate), Rate, filters))
        return list(result.scalars().all()), total

    async def get_by_code(self, code: str) -> Rate | None:
        result = await self.session.execute(select(Rate).where(Rate.code == code))
        return result.scalar_one_or_none()

    async def get_active(self) -> Rate | None:
        result = await self.session.execute(
            select(Rate)
            .where(Rate.is_active.is_(True))
            .order_by(Rate.effective_date.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def deactivate_all(self) -> None:
        await self.session.execute(
            update(Rate).where(Rate.is_active.is_(True)).values(is_active=False)
        )

    async def create(self, data: RateCreate) -> Rate:
        if data.is_active:
            await self.deactivate_all()

        rate = Rate(code=await next_code(self.session, Rate.code, "RATE"), **data.model_dump())
        self.session.add(rate)
        await self.session.flush()
        await self.session.refresh(rate)
        return rate

    async def update(self, code: str, data: RateUpdate) -> Rate | None:
        rate = await self.get_by_code(code)
        if not rate:
            return None

        changes = data.model_dump(exclude_unset=True)
        if changes.get("is_active"):
            await self.deactivate_all()

        for field, value in changes.items():
            setattr(rate, field, value)

        await self.session.flush()
        await self.session.refresh(rate)
        return rate

    async def delete(self, rate: Rate) -> None:
        await self.session.delete(rate)
        await self.session.flush()
