"""Tariff rate model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from powerbill.models.base import Base, TimestampMixin, UUIDMixin


class Rate(UUIDMixin, TimestampMixin, Base):
    """Price per kWh; at most one rate is active at a time."""

    __tablename__ = "rates"

    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    rate_value: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    effective_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_rate_is_active", "is_active"),
        Index("idx_rate_effective_date", "effective_date"),
    )
