"""Seed script for the PowerBill database.

Seeds staff users, rates, demo customers, bills, payments and notifications.
Run: python -m scripts.seed_data
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from powerbill.auth.security import hash_password
from powerbill.config import get_settings
from powerbill.models import Bill, Customer, Notification, Payment, Rate, User
from powerbill.utils.status import (
    BillingStatus,
    BillStatus,
    ConnectionStatus,
    CustomerStatus,
    LineStatus,
    NotificationPriority,
    NotificationType,
    PaymentMethod,
    PaymentProcessStatus,
    PaymentStatus,
    PermissionAction,
    UserRole,
    UserStatus,
)

logger = logging.getLogger(__name__)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _permission(pid: str, name: str, resource: str, action: PermissionAction) -> dict:
    return {"id": pid, "name": name, "resource": resource, "action": int(action), "granted": True}


# ── Staff users ───────────────────────────────────────────────────────────────

USERS = [
    {
        "username": "admin",
        "email": "admin@powerbill.local",
        "password": "admin123",
        "role": UserRole.admin,
        "department": "IT",
        "permissions": [
            _permission("1", "Manage Users", "users", PermissionAction.manage),
            _permission("3", "Manage Customers", "customers", PermissionAction.manage),
            _permission("5", "Manage Bills", "bills", PermissionAction.manage),
        ],
    },
    {
        "username": "manager1",
        "email": "manager1@powerbill.local",
        "password": "manager123",
        "role": UserRole.manager,
        "department": "Operations",
        "permissions": [
            _permission("1", "View Users", "users", PermissionAction.read),
            _permission("3", "Manage Customers", "customers", PermissionAction.write),
            _permission("5", "Manage Bills", "bills", PermissionAction.write),
        ],
    },
    {
        "username": "operator1",
        "email": "operator1@powerbill.local",
        "password": "operator123",
        "role": UserRole.operator,
        "department": "Customer Service",
        "permissions": [
            _permission("2", "View Customers", "customers", PermissionAction.read),
            _permission("4", "View Bills", "bills", PermissionAction.read),
        ],
    },
]

# ── Rates ─────────────────────────────────────────────────────────────────────

RATES = [
    {
        "code": "RATE0001",
        "rate_value": Decimal("2.0000"),
        "description": "Standard electricity rate per kWh",
        "is_active": True,
        "effective_date": _utc(2024, 1, 1),
    },
    {
        "code": "RATE0002",
        "rate_value": Decimal("2.2500"),
        "description": "Updated electricity rate per kWh",
        "is_active": False,
        "effective_date": _utc(2024, 6, 1),
    },
]

# ── Demo customers ────────────────────────────────────────────────────────────

CUSTOMERS = [
    {
        "code": "CUST0001",
        "name": "John Doe",
        "phone": "+1234567890",
        "watch_id": "WATCH001",
        "email": "john.doe@email.com",
        "address": "123 Main St, City, State",
        "registration_date": date(2024, 1, 15),
        "last_payment_date": _utc(2024, 10, 15),
        "status": CustomerStatus.active,
        "pr_status": LineStatus.active,
        "sc_status": LineStatus.active,
        "billing_status": BillingStatus.billed,
        "payment_status": PaymentStatus.paid,
        "connection_status": ConnectionStatus.connected,
    },
    {
        "code": "CUST0002",
        "name": "Jane Smith",
        "phone": "+1234567891",
        "watch_id": "WATCH002",
        "email": "jane.smith@email.com",
        "address": "456 Oak Ave, City, State",
        "registration_date": date(2024, 2, 20),
        "last_payment_date": _utc(2024, 9, 20),
        "status": CustomerStatus.active,
        "pr_status": LineStatus.active,
        "sc_status": LineStatus.inactive,
        "billing_status": BillingStatus.billed,
        "payment_status": PaymentStatus.unpaid,
        "connection_status": ConnectionStatus.under_warning,
    },
    {
        "code": "CUST0003",
        "name": "Bob Johnson",
        "phone": "+1234567892",
        "watch_id": "WATCH003",
        "email": "bob.johnson@email.com",
        "address": "789 Pine St, City, State",
        "registration_date": date(2024, 3, 10),
        "last_payment_date": _utc(2024, 8, 10),
        "status": CustomerStatus.suspended,
        "pr_status": LineStatus.inactive,
        "sc_status": LineStatus.inactive,
        "billing_status": BillingStatus.billed,
        "payment_status": PaymentStatus.unpaid,
        "connection_status": ConnectionStatus.lost,
    },
    {
        "code": "CUST0004",
        "name": "Alice Brown",
        "phone": "+1234567893",
        "watch_id": "WATCH004",
        "email": "alice.brown@email.com",
        "address": "321 Elm St, City, State",
        "registration_date": date(2024, 10, 1),
        "last_payment_date": None,
        "status": CustomerStatus.pending,
        "pr_status": LineStatus.inactive,
        "sc_status": LineStatus.inactive,
        "billing_status": BillingStatus.unbilled,
        "payment_status": PaymentStatus.unpaid,
        "connection_status": ConnectionStatus.lost,
    },
    {
        "code": "CUST0005",
        "name": "Charlie Wilson",
        "phone": "+1234567894",
        "watch_id": "WATCH005",
        "email": "charlie.wilson@email.com",
        "address": "654 Maple Dr, City, State",
        "registration_date": date(2024, 4, 5),
        "last_payment_date": _utc(2024, 10, 20),
        "status": CustomerStatus.active,
        "pr_status": LineStatus.active,
        "sc_status": LineStatus.active,
        "billing_status": BillingStatus.billed,
        "payment_status": PaymentStatus.paid,
        "connection_status": ConnectionStatus.connected,
    },
]

# (code, customer, creator, amount, kWh, due, period, status, paid_at, created_at)
BILLS = [
    ("BILL0001", "CUST0001", "admin", "250.00", "125.5", date(2024, 11, 15), "October 2024",
     BillStatus.paid, _utc(2024, 10, 15), _utc(2024, 10, 15)),
    ("BILL0002", "CUST0002", "manager1", "450.00", "225.0", date(2024, 10, 20), "September 2024",
     BillStatus.overdue, None, _utc(2024, 9, 20)),
    ("BILL0003", "CUST0003", "admin", "600.00", "300.0", date(2024, 9, 10), "August 2024",
     BillStatus.overdue, None, _utc(2024, 8, 10)),
    ("BILL0004", "CUST0005", "manager1", "320.00", "160.0", date(2024, 11, 20), "October 2024",
     BillStatus.paid, _utc(2024, 10, 20), _utc(2024, 10, 20)),
]

# (code, customer, bill, processor, amount, date, method, reference)
PAYMENTS = [
    ("PAY0001", "CUST0001", "BILL0001", "admin", "250.00", _utc(2024, 10, 15),
     PaymentMethod.bank_transfer, "TXN000001"),
    ("PAY0002", "CUST0005", "BILL0004", "manager1", "320.00", _utc(2024, 10, 20),
     PaymentMethod.mobile_money, "TXN000002"),
    ("PAY0003", "CUST0002", "BILL0002", "operator1", "450.00", _utc(2024, 9, 20),
     PaymentMethod.cash, "TXN000003"),
]

NOTIFICATIONS = [
    ("NOTIF0001", NotificationType.warning, "Payment Overdue",
     "Jane Smith has an overdue payment of $450.00", _utc(2024, 10, 22, 10, 0), False,
     "CUST0002", NotificationPriority.high),
    ("NOTIF0002", NotificationType.danger, "Connection Lost",
     "Bob Johnson's connection has been lost for 3 days", _utc(2024, 10, 22, 9, 30), False,
     "CUST0003", NotificationPriority.high),
    ("NOTIF0003", NotificationType.info, "New Customer Registration",
     "Alice Brown has been registered and is pending activation", _utc(2024, 10, 22, 8, 0), True,
     "CUST0004", NotificationPriority.medium),
    ("NOTIF0004", NotificationType.success, "Payment Received",
     "Charlie Wilson has made a payment of $320.00", _utc(2024, 10, 22, 7, 30), True,
     "CUST0005", NotificationPriority.low),
]


async def _exists(session: AsyncSession, column, value) -> bool:
    result = await session.execute(select(column).where(column == value))
    return result.first() is not None


async def seed_users(session: AsyncSession) -> dict[str, str]:
    """Seed staff users if they don't exist. Returns username -> id."""
    for user_data in USERS:
        if await _exists(session, User.username, user_data["username"]):
            logger.info(f"User '{user_data['username']}' already exists, skipping")
            continue

        data = dict(user_data)
        session.add(
            User(
                hashed_password=hash_password(data.pop("password")),
                is_active=UserStatus.active,
                **data,
            )
        )
        logger.info(f"Created user: {user_data['username']}")

    await session.commit()
    rows = await session.execute(select(User.username, User.id))
    return {username: user_id for username, user_id in rows.all()}


async def seed_rates(session: AsyncSession) -> str:
    """Seed rates. Returns the id of the active rate."""
    for rate_data in RATES:
        if await _exists(session, Rate.code, rate_data["code"]):
            continue
        session.add(Rate(**rate_data))
        logger.info(f"Created rate {rate_data['code']}")

    await session.commit()
    return (await session.execute(select(Rate.id).where(Rate.code == "RATE0001"))).scalar_one()


async def seed_customers(session: AsyncSession) -> dict[str, Customer]:
    for cust_data in CUSTOMERS:
        if await _exists(session, Customer.code, cust_data["code"]):
            logger.info(f"Customer '{cust_data['code']}' already exists, skipping")
            continue
        session.add(Customer(**cust_data))
        logger.info(f"Created customer {cust_data['code']}")

    await session.commit()
    customers = (await session.execute(select(Customer))).scalars().all()
    return {c.code: c for c in customers}


async def seed_bills_and_payments(
    session: AsyncSession,
    users: dict[str, str],
    rate_id: str,
    customers: dict[str, Customer],
) -> None:
    for code, cust, creator, amount, kwh, due, period, status, paid_at, created in BILLS:
        if await _exists(session, Bill.code, code):
            continue
        session.add(
            Bill(
                code=code,
                customer_id=customers[cust].id,
                rate_id=rate_id,
                created_by=users.get(creator),
                amount=Decimal(amount),
                usage_kwh=Decimal(kwh),
                due_date=due,
                billing_period=period,
                watch_id=customers[cust].watch_id,
                status=status,
                paid_at=paid_at,
                created_at=created,
                updated_at=created,
            )
        )
    await session.commit()

    bills = {b.code: b.id for b in (await session.execute(select(Bill))).scalars().all()}
    for code, cust, bill, processor, amount, paid, method, reference in PAYMENTS:
        if await _exists(session, Payment.code, code):
            continue
        session.add(
            Payment(
                code=code,
                customer_id=customers[cust].id,
                bill_id=bills[bill],
                processed_by=users.get(processor),
                amount=Decimal(amount),
                payment_date=paid,
                payment_method=method,
                reference=reference,
                status=PaymentProcessStatus.completed,
            )
        )
    await session.commit()
    logger.info(f"Seeded {len(BILLS)} bills and {len(PAYMENTS)} payments")


async def seed_notifications(session: AsyncSession, customers: dict[str, Customer]) -> None:
    for code, ntype, title, message, timestamp, is_read, cust, priority in NOTIFICATIONS:
        if await _exists(session, Notification.code, code):
            continue
        session.add(
            Notification(
                code=code,
                type=ntype,
                title=title,
                message=message,
                timestamp=timestamp,
                is_read=is_read,
                customer_id=customers[cust].id,
                priority=priority,
            )
        )
    await session.commit()


async def main() -> None:
    """Run all seed steps."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    settings = get_settings()
    engine = create_async_engine(str(settings.database_url))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        logger.info("Seeding users...")
        users = await seed_users(session)

        logger.info("Seeding rates...")
        rate_id = await seed_rates(session)

        logger.info("Seeding customers...")
        customers = await seed_customers(session)

        logger.info("Seeding bills and payments...")
        await seed_bills_and_payments(session, users, rate_id, customers)

        logger.info("Seeding notifications...")
        await seed_notifications(session, customers)

    await engine.dispose()
    logger.info("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
