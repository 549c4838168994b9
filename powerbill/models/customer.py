"""Customer model."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from powerbill.models.base import Base, TimestampMixin, UUIDMixin
from powerbill.utils.status import (
    BillingStatus,
    ConnectionStatus,
    CustomerStatus,
    LineStatus,
    PaymentStatus,
)

class Customer(UUIDMixin, TimestampMixin, Base):
    """Metered electricity customer."""

    __tablename__ = "customers"

    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    watch_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    registration_date: Mapped[date] = mapped_column(Date, nullable=False)
    last_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=CustomerStatus.pending)
    pr_status: Mapped[int] = mapped_column(Integer, nullable=False, default=LineStatus.inactive)
    sc_status: Mapped[int] = mapped_column(Integer, nullable=False, default=LineStatus.inactive)
    billing_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=BillingStatus.unbilled
    )
    payment_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=PaymentStatus.unpaid
    )
    connection_status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=ConnectionStatus.lost
    )

    __table_args__ = (
        Index("idx_customer_status", "status"),
        Index("idx_customer_billing_status", "billing_status"),
        Index("idx_customer_payment_status", "payment_status"),
        Index("idx_customer_connection_status", "connection_status"),
    )
