"""Notification model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from powerbill.models.base import Base, TimestampMixin, UUIDMixin
from powerbill.utils.status import NotificationPriority


class Notification(UUIDMixin, TimestampMixin, Base):
    """Alert shown on the operator dashboard."""

    __tablename__ = "notifications"

    code: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    type: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    customer_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    priority: Mapped[int] = mapped_column(
        Integer, nullable=False, default=NotificationPriority.medium
    )

    __table_args__ = (
        Index("idx_notification_is_read", "is_read"),
        Index("idx_notification_timestamp", "timestamp"),
        Index("idx_notification_priority", "priority"),
    )
