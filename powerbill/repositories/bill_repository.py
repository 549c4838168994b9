"""Repository for bills."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.filters.sql import apply_filters, apply_predicate
from powerbill.filters.types import FilterResult
from powerbill.models.bill import Bill
from powerbill.models.customer import Customer
from powerbill.repositories.common import next_code
from powerbill.schemas.bill import BillUpdate

# Filter fields that live on the joined customer row.
CUSTOMER_ALIASES = {
    "customer.code": Customer.code,
    "customer.name": Customer.name,
    "customer.phone": Customer.phone,
    "customer.watch_id": Customer.watch_id,
}


class BillRepository:
    """Data access layer for bills."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self, filters: FilterResult) -> tuple[list[tuple[Bill, Customer]], int]:
        count_query = apply_predicate(
            select(func.count()).select_from(Bill).join(Customer, Bill.customer_id == Customer.id),
            Bill,
            filters.predicate,
            CUSTOMER_ALIASES,
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        query = apply_filters(
            select(Bill, Customer).join(Customer, Bill.customer_id == Customer.id),
            Bill,
            filters,
            CUSTOMER_ALIASES,
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()], total

    async def get_by_code(self, code: str) -> Bill | None:
        result = await self.session.execute(select(Bill).where(Bill.code == code))
        return result.scalar_one_or_none()

    async def get_with_customer(self, code: str) -> tuple[Bill, Customer] | None:
        result = await self.session.execute(
            select(Bill, Customer)
            .join(Customer, Bill.customer_id == Customer.id)
            .where(Bill.code == code)
        )
        row = result.one_or_none()
        return (row[0], row[1]) if row else None

    async def get_by_customer(self, customer_id: str) -> list[Bill]:
        result = await self.session.execute(
            select(Bill).where(Bill.customer_id == customer_id).order_by(Bill.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_recent(self, limit: int = 5) -> list[Bill]:
        result = await self.session.execute(
            select(Bill).order_by(Bill.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def next_code(self) -> str:
        return await next_code(self.session, Bill.code, "BILL")

    async def add(self, bill: Bill) -> Bill:
        self.session.add(bill)
        await self.session.flush()
        await self.session.refresh(bill)
        return bill

    async def update(self, code: str, data: BillUpdate) -> Bill | None:
        bill = await self.get_by_code(code)
        if not bill:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(bill, field, value)

        await self.session.flush()
        await self.session.refresh(bill)
        return bill
