"""Service layer for bill generation and payment recording."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.models.bill import Bill
from powerbill.models.customer import Customer
from powerbill.models.payment import Payment
from powerbill.repositories.bill_repository import BillRepository
from powerbill.repositories.customer_repository import CustomerRepository
from powerbill.repositories.payment_repository import PaymentRepository
from powerbill.repositories.rate_repository import RateRepository
from powerbill.schemas.bill import BillCreate
from powerbill.schemas.payment import PaymentCreate
from powerbill.utils.logging import get_logger
from powerbill.utils.status import (
    BillingStatus,
    BillStatus,
    PaymentProcessStatus,
    PaymentStatus,
)

logger = get_logger(__name__)

CENTS = Decimal("0.01")


class EntityNotFoundError(LookupError):
    """A record referenced by a request does not exist."""

    def __init__(self, entity: str, code: str) -> None:
        super().__init__(f"{entity} not found: {code}")
        self.entity = entity
        self.code = code


class NoActiveRateError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("No active rate found")


def compute_amount(usage_kwh: Decimal, rate_value: Decimal) -> Decimal:
    """Bill amount for ``usage_kwh`` at ``rate_value`` per kWh, rounded to cents."""
    return (Decimal(usage_kwh) * Decimal(rate_value)).quantize(CENTS, rounding=ROUND_HALF_UP)


class BillingService:
    """Creates bills from the active rate and applies payments to them."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.customers = CustomerRepository(session)
        self.bills = BillRepository(session)
        self.payments = PaymentRepository(session)
        self.rates = RateRepository(session)

    async def _customer(self, code: str) -> Customer:
        customer = await self.customers.get_by_code(code)
        if customer is None:
            raise EntityNotFoundError("Customer", code)
        return customer

    async def create_bill(
        self, data: BillCreate, created_by: str | None = None
    ) -> tuple[Bill, Customer]:
        customer = await self._customer(data.customer_code)

        rate = await self.rates.get_active()
        if rate is None:
            raise NoActiveRateError()

        bill = Bill(
            code=await self.bills.next_code(),
            customer_id=customer.id,
            rate_id=rate.id,
            created_by=created_by,
            amount=compute_amount(data.usage_kwh, rate.rate_value),
            usage_kwh=data.usage_kwh,
            due_date=data.due_date,
            billing_period=data.billing_period,
            watch_id=customer.watch_id,
            status=BillStatus.unpaid,
        )
        bill = await self.bills.add(bill)

        customer.billing_status = BillingStatus.billed
        customer.payment_status = PaymentStatus.unpaid
        await self._session.flush()

        logger.info(
            "Created bill %s for customer %s: %s kWh at %s = %s",
            bill.code,
            customer.code,
            data.usage_kwh,
            rate.rate_value,
            bill.amount,
        )
        return bill, customer

    async def record_payment(
        self, data: PaymentCreate, processed_by: str | None = None
    ) -> tuple[Payment, Customer]:
        customer = await self._customer(data.customer_code)

        bill = await self.bills.get_by_code(data.bill_code)
        if bill is None or bill.customer_id != customer.id:
            raise EntityNotFoundError("Bill", data.bill_code)

        code, reference = await self.payments.next_codes()
        payment = Payment(
            code=code,
            customer_id=customer.id,
            bill_id=bill.id,
            processed_by=processed_by,
            amount=data.amount,
            payment_date=data.payment_date,
            payment_method=data.payment_method,
            reference=reference,
            status=PaymentProcessStatus.completed,
        )
        payment = await self.payments.add(payment)

        bill.status = BillStatus.paid
        bill.paid_at = datetime.now(UTC)
        customer.payment_status = PaymentStatus.paid
        customer.last_payment_date = data.payment_date
        await self._session.flush()

        logger.info(
            "Recorded payment %s (%s) of %s against bill %s",
            payment.code,
            reference,
            data.amount,
            bill.code,
        )
        return payment, customer
