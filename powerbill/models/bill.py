"""Bill model."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from powerbill.models.base import Base, TimestampMixin, UUIDMixin
from powerbill.utils.status import BillStatus


class Bill(UUIDMixin, TimestampMixin, Base):
    """Electricity bill for one billing period."""

    __tablename__ = "bills"

    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    customer_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rate_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("rates.id", ondelete="RESTRICT"), nullable=False
    )
    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    usage_kwh: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    billing_period: Mapped[str] = mapped_column(String(50), nullable=False)
    watch_id: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=BillStatus.unpaid)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_bill_status", "status"),
        Index("idx_bill_due_date", "due_date"),
        Index("idx_bill_billing_period", "billing_period"),
    )
