"""Dependency injection: engine, sessions, redis and repositories."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from powerbill.config import Settings, get_settings
from powerbill.repositories.bill_repository import BillRepository
from powerbill.repositories.customer_repository import CustomerRepository
from powerbill.repositories.notification_repository import NotificationRepository
from powerbill.repositories.payment_repository import PaymentRepository
from powerbill.repositories.rate_repository import RateRepository
from powerbill.repositories.user_repository import UserRepository
from powerbill.services.billing_service import BillingService
from powerbill.services.dashboard_service import DashboardService


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


def create_redis(settings: Settings) -> Redis:
    return Redis.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """One session per request: committed on success, rolled back on error."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_redis(request: Request) -> Redis:
    return request.app.state.redis


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
RedisClient = Annotated[Redis, Depends(get_redis)]


def get_customer_repo(db: DBSession) -> CustomerRepository:
    return CustomerRepository(db)


def get_bill_repo(db: DBSession) -> BillRepository:
    return BillRepository(db)


def get_payment_repo(db: DBSession) -> PaymentRepository:
    return PaymentRepository(db)


def get_rate_repo(db: DBSession) -> RateRepository:
    return RateRepository(db)


def get_user_repo(db: DBSession) -> UserRepository:
    return UserRepository(db)


def get_notification_repo(db: DBSession) -> NotificationRepository:
    return NotificationRepository(db)


def get_billing_service(db: DBSession) -> BillingService:
    return BillingService(db)


def get_dashboard_service(db: DBSession, redis: RedisClient) -> DashboardService:
    return DashboardService(db, get_settings(), redis=redis)


CustomerRepo = Annotated[CustomerRepository, Depends(get_customer_repo)]
BillRepo = Annotated[BillRepository, Depends(get_bill_repo)]
PaymentRepo = Annotated[PaymentRepository, Depends(get_payment_repo)]
RateRepo = Annotated[RateRepository, Depends(get_rate_repo)]
UserRepo = Annotated[UserRepository, Depends(get_user_repo)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repo)]
BillingSvc = Annotated[BillingService, Depends(get_billing_service)]
DashboardSvc = Annotated[DashboardService, Depends(get_dashboard_service)]
