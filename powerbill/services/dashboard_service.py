"""Dashboard statistics, cached in Redis."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from powerbill.config import Settings
from powerbill.repositories.bill_repository import BillRepository
from powerbill.repositories.customer_repository import CustomerRepository
from powerbill.repositories.notification_repository import NotificationRepository
from powerbill.repositories.payment_repository import PaymentRepository
from powerbill.schemas.bill import BillResponse
from powerbill.schemas.dashboard import DashboardStats
from powerbill.schemas.notification import NotificationResponse
from powerbill.schemas.payment import PaymentResponse
from powerbill.utils.logging import get_logger

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

CACHE_KEY = "powerbill:dashboard:stats"
RECENT_LIMIT = 5


class DashboardService:
    def __init__(
        self,
        session: AsyncSession,
        settings: Settings,
        *,
        redis: Redis | None = None,
    ) -> None:
        self.customers = CustomerRepository(session)
        self.bills = BillRepository(session)
        self.payments = PaymentRepository(session)
        self.notifications = NotificationRepository(session)
        self.settings = settings
        self._redis = redis

    async def get_stats(self) -> DashboardStats:
        """Return cached stats when present, otherwise compute and cache them."""
        cached = await self._read_cache()
        if cached is not None:
            return cached

        stats = await self.compute_stats()
        await self._write_cache(stats)
        return stats

    async def compute_stats(self) -> DashboardStats:
        counts = await self.customers.status_counts()
        payments = await self.payments.get_recent(RECENT_LIMIT)
        bills = await self.bills.get_recent(RECENT_LIMIT)
        alerts = await self.notifications.get_unread(RECENT_LIMIT)
        return DashboardStats(
            **counts,
            recent_payments=[PaymentResponse.model_validate(p) for p in payments],
            recent_bills=[BillResponse.model_validate(b) for b in bills],
            alerts=[NotificationResponse.model_validate(n) for n in alerts],
        )

    async def _read_cache(self) -> DashboardStats | None:
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(CACHE_KEY)
        except RedisError:
            logger.warning("Dashboard cache unavailable, computing stats", exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return DashboardStats.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding malformed dashboard cache entry")
            return None

    async def _write_cache(self, stats: DashboardStats) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(
                CACHE_KEY,
                stats.model_dump_json(),
                ex=self.settings.dashboard_cache_ttl_seconds,
            )
        except RedisError:
            logger.warning("Failed to cache dashboard stats", exc_info=True)
