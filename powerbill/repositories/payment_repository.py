"""Repository for payments."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.filters.sql import apply_filters, apply_predicate
from powerbill.filters.types import FilterResult
from powerbill.models.customer import Customer
from powerbill.models.payment import Payment
from powerbill.repositories.common import next_sequence

CUSTOMER_ALIASES = {
    "customer.name": Customer.name,
    "customer.phone": Customer.phone,
}


class PaymentRepository:
    """Data access layer for payments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(
        self, filters: FilterResult
    ) -> tuple[list[tuple[Payment, Customer]], int]:
        count_query = apply_predicate(
            select(func.count())
            .select_from(Payment)
            .join(Customer, Payment.customer_id == Customer.id),
            Payment,
            filters.predicate,
            CUSTOMER_ALIASES,
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        query = apply_filters(
            select(Payment, Customer).join(Customer, Payment.customer_id == Customer.id),
            Payment,
            filters,
            CUSTOMER_ALIASES,
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()], total

    async def get_with_customer(self, code: str) -> tuple[Payment, Customer] | None:
        result = await self.session.execute(
            select(Payment, Customer)
            .join(Customer, Payment.customer_id == Customer.id)
            .where(Payment.code == code)
        )
        row = result.one_or_none()
        return (row[0], row[1]) if row else None

    async def get_by_customer(self, customer_id: str) -> list[Payment]:
        result = await self.session.execute(
            select(Payment)
            .where(Payment.customer_id == customer_id)
            .order_by(Payment.payment_date.desc())
        )
        return list(result.scalars().all())

    async def get_recent(self, limit: int = 5) -> list[Payment]:
        result = await self.session.execute(
            select(Payment).order_by(Payment.payment_date.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def next_codes(self) -> tuple[str, str]:
        """Return ``(code, reference)`` for the next payment."""
        sequence = await next_sequence(self.session, Payment.code, "PAY")
        return f"PAY{sequence:04d}", f"TXN{sequence:06d}"

    async def add(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment
