"""Repository for customer data access."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.filters.sql import apply_filters, apply_predicate
from powerbill.filters.types import FilterResult
from powerbill.models.customer import Customer
from powerbill.repositories.common import next_code
from powerbill.schemas.customer import CustomerCreate, CustomerUpdate
from powerbill.utils.status import (
    BillingStatus,
    ConnectionStatus,
    CustomerStatus,
    PaymentStatus,
)


class CustomerRepository:
    """Data access layer for customers."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self, filters: FilterResult) -> tuple[list[Customer], int]:
        count_query = apply_predicate(
            select(func.count()).select_from(Customer), Customer, filters.predicate
        )
        total = (await self.session.execute(count_query)).scalar() or 0

        query = apply_filters(select(Customer), Customer, filters)
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_by_code(self, code: str) -> Customer | None:
        result = await self.session.execute(select(Customer).where(Customer.code == code))
        return result.scalar_one_or_none()

    async def create(self, data: CustomerCreate) -> Customer:
        code = await next_code(self.session, Customer.code, "CUST")
        customer = Customer(code=code, **data.model_dump())
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def update(self, code: str, data: CustomerUpdate) -> Customer | None:
        customer = await self.get_by_code(code)
        if not customer:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(customer, field, value)

        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def status_counts(self) -> dict[str, int]:
        """Customer counts per dashboard bucket, in a single query."""

        def _count(condition):
            return func.count().filter(condition)

        query = select(
            func.count().label("total_customers"),
            _count(Customer.status == CustomerStatus.active).label("active_customers"),
            _count(Customer.status == CustomerStatus.suspended).label("suspended_customers"),
            _count(Customer.billing_status == BillingStatus.billed).label("total_billed"),
            _count(Customer.billing_status == BillingStatus.unbilled).label("total_unbilled"),
            _count(Customer.payment_status == PaymentStatus.paid).label("total_paid"),
            _count(Customer.payment_status == PaymentStatus.unpaid).label("total_unpaid"),
            _count(Customer.connection_status == ConnectionStatus.lost).label("lost_connections"),
            _count(Customer.connection_status == ConnectionStatus.under_warning).label(
                "under_warning"
            ),
        )
        row = (await self.session.execute(query)).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
