"""Payment model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from powerbill.models.base import Base, TimestampMixin, UUIDMixin
from powerbill.utils.status import PaymentProcessStatus


class Payment(UUIDMixin, TimestampMixin, Base):
    """Payment received against a bill."""

    __tablename__ = "payments"

    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    customer_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bill_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    processed_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_method: Mapped[int] = mapped_column(Integer, nullable=False)
    reference: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=PaymentProcessStatus.pending
    )

    __table_args__ = (
        Index("idx_payment_date", "payment_date"),
        Index("idx_payment_status", "status"),
    )
