"""Unit tests for database models and status codes."""

import pytest

from powerbill.models import Base, Bill, Customer, Notification, Payment, Rate, User
from powerbill.utils.status import (
    UNKNOWN_LABEL,
    BillStatus,
    ConnectionStatus,
    CustomerStatus,
    PaymentMethod,
    UserRole,
    as_label,
    from_label,
    label_for,
)


class TestStatusCodes:
    def test_customer_status_values(self):
        assert CustomerStatus.pending == 1
        assert CustomerStatus.active == 2
        assert CustomerStatus.suspended == 3

    def test_role_ordering(self):
        assert UserRole.viewer < UserRole.operator < UserRole.manager < UserRole.admin

    @pytest.mark.parametrize(
        "kind,code,label",
        [
            (CustomerStatus, 2, "Active"),
            (ConnectionStatus, 3, "Under Warning"),
            (BillStatus, 3, "Overdue"),
            (PaymentMethod, 2, "Bank Transfer"),
            (UserRole, 4, "Admin"),
        ],
    )
    def test_label_for(self, kind, code, label):
        assert label_for(kind, code) == label

    def test_unknown_codes(self):
        assert label_for(CustomerStatus, 99) == UNKNOWN_LABEL
        assert label_for(CustomerStatus, None) == UNKNOWN_LABEL

    def test_as_label_passes_labels_through(self):
        assert as_label(BillStatus, 2) == "Paid"
        assert as_label(BillStatus, "Paid") == "Paid"


class TestModels:
    def test_tables_registered(self):
        assert set(Base.metadata.tables) == {
            "customers",
            "bills",
            "payments",
            "rates",
            "users",
            "notifications",
        }

    def test_table_names(self):
        assert Customer.__tablename__ == "customers"
        assert Bill.__tablename__ == "bills"
        assert Payment.__tablename__ == "payments"
        assert Rate.__tablename__ == "rates"
        assert User.__tablename__ == "users"
        assert Notification.__tablename__ == "notifications"

    def test_unique_columns(self):
        assert Customer.__table__.c.watch_id.unique
        assert Payment.__table__.c.reference.unique
        assert User.__table__.c.email.unique

    def test_bill_foreign_keys(self):
        targets = {fk.target_fullname for fk in Bill.__table__.foreign_keys}
        assert targets == {"customers.id", "rates.id", "users.id"}


class TestFromLabel:
    def test_label_to_code(self):
        assert from_label(BillStatus, "Paid") == BillStatus.paid
        assert from_label(PaymentMethod, "bank transfer") == PaymentMethod.bank_transfer

    def test_passes_other_values_through(self):
        assert from_label(BillStatus, 3) == 3
        assert from_label(BillStatus, "Settled") == "Settled"
        assert from_label(BillStatus, None) is None
