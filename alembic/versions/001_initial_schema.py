"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the billing tables: users, customers, rates, bills, payments,
notifications. Status columns hold the integer codes defined in
powerbill.utils.status.
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables."""

    # -- users --
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.Integer, nullable=False, server_default="1"),
        sa.Column("permissions", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("is_active", sa.Integer, nullable=False, server_default="2"),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_created_at", "users", ["created_at"])
    op.create_index("idx_user_role", "users", ["role"])
    op.create_index("idx_user_is_active", "users", ["is_active"])

    # -- customers --
    op.create_table(
        "customers",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("watch_id", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("registration_date", sa.Date, nullable=False),
        sa.Column("last_payment_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("pr_status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("sc_status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("billing_status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("payment_status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("connection_status", sa.Integer, nullable=False, server_default="2"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("watch_id"),
    )
    op.create_index("ix_customers_code", "customers", ["code"], unique=True)
    op.create_index("ix_customers_created_at", "customers", ["created_at"])
    op.create_index("idx_customer_status", "customers", ["status"])
    op.create_index("idx_customer_billing_status", "customers", ["billing_status"])
    op.create_index("idx_customer_payment_status", "customers", ["payment_status"])
    op.create_index("idx_customer_connection_status", "customers", ["connection_status"])

    # -- rates --
    op.create_table(
        "rates",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("rate_value", sa.Numeric(12, 4), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("effective_date", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rates_code", "rates", ["code"], unique=True)
    op.create_index("ix_rates_created_at", "rates", ["created_at"])
    op.create_index("idx_rate_is_active", "rates", ["is_active"])
    op.create_index("idx_rate_effective_date", "rates", ["effective_date"])

    # -- bills --
    op.create_table(
        "bills",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column(
            "customer_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "rate_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("rates.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "created_by",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("usage_kwh", sa.Numeric(12, 3), nullable=False),
        sa.Column("due_date", sa.Date, nullable=False),
        sa.Column("billing_period", sa.String(50), nullable=False),
        sa.Column("watch_id", sa.String(50), nullable=False),
        sa.Column("status", sa.Integer, nullable=False, server_default="1"),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bills_code", "bills", ["code"], unique=True)
    op.create_index("ix_bills_customer_id", "bills", ["customer_id"])
    op.create_index("ix_bills_created_at", "bills", ["created_at"])
    op.create_index("idx_bill_status", "bills", ["status"])
    op.create_index("idx_bill_due_date", "bills", ["due_date"])
    op.create_index("idx_bill_billing_period", "bills", ["billing_period"])

    # -- payments --
    op.create_table(
        "payments",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column(
            "customer_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "bill_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("bills.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "processed_by",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("payment_method", sa.Integer, nullable=False),
        sa.Column("reference", sa.String(30), nullable=False),
        sa.Column("status", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reference"),
    )
    op.create_index("ix_payments_code", "payments", ["code"], unique=True)
    op.create_index("ix_payments_customer_id", "payments", ["customer_id"])
    op.create_index("ix_payments_bill_id", "payments", ["bill_id"])
    op.create_index("ix_payments_created_at", "payments", ["created_at"])
    op.create_index("idx_payment_date", "payments", ["payment_date"])
    op.create_index("idx_payment_status", "payments", ["status"])

    # -- notifications --
    op.create_table(
        "notifications",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("type", sa.Integer, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column(
            "customer_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "user_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("priority", sa.Integer, nullable=False, server_default="2"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_code", "notifications", ["code"], unique=True)
    op.create_index("ix_notifications_customer_id", "notifications", ["customer_id"])
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])
    op.create_index("idx_notification_is_read", "notifications", ["is_read"])
    op.create_index("idx_notification_timestamp", "notifications", ["timestamp"])
    op.create_index("idx_notification_priority", "notifications", ["priority"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("notifications")
    op.drop_table("payments")
    op.drop_table("bills")
    op.drop_table("rates")
    op.drop_table("customers")
    op.drop_table("users")
