"""Integration tests for the billing API endpoints."""

from unittest.mock import AsyncMock

import pytest

from powerbill.dependencies import (
    get_bill_repo,
    get_billing_service,
    get_customer_repo,
    get_dashboard_service,
    get_notification_repo,
    get_payment_repo,
    get_rate_repo,
    get_user_repo,
)
from powerbill.filters.types import Equals, FilterResult
from powerbill.main import app
from powerbill.schemas.dashboard import DashboardStats
from powerbill.services.billing_service import EntityNotFoundError, NoActiveRateError
from powerbill.utils.status import BillStatus, CustomerStatus, PaymentStatus, UserRole
from tests.conftest import (
    make_bill_model,
    make_customer_model,
    make_customer_payload,
    make_notification_model,
    make_payment_model,
    make_rate_model,
    make_user_model,
)


def _override_repo(dep_fn, mock_repo):
    """Register a dependency override and return the mock."""
    app.dependency_overrides[dep_fn] = lambda: mock_repo
    return mock_repo


@pytest.fixture(autouse=True)
def _clear_overrides():
    """Clear dependency overrides after each test."""
    yield
    app.dependency_overrides.clear()


def _filters_passed(mock) -> FilterResult:
    return mock.get_all.await_args.args[0]


# ---------------------------------------------------------------------------
# Customers API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestCustomersAPI:
    async def test_list_customers(self, viewer_client):
        customers = [make_customer_model(), make_customer_model(code="CUST0002")]
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=(customers, 2))
        resp = await viewer_client.get("/api/v1/customers")
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 2
        assert len(body["items"]) == 2
        assert body["items"][0]["status"] == "Active"
        assert (body["page"], body["size"]) == (1, 10)

    async def test_list_customers_translates_filters(self, viewer_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([], 0))
        resp = await viewer_client.get(
            "/api/v1/customers?status=Active&paymentStatus=Unpaid&search=john"
            "&sortBy=name&sortOrder=asc&page=2&limit=20"
        )
        assert resp.status_code == 200

        filters = _filters_passed(mock)
        assert filters.predicate.constraints["status"] == Equals(CustomerStatus.active)
        assert filters.predicate.constraints["payment_status"] == Equals(PaymentStatus.unpaid)
        assert [name for name, _ in filters.predicate.any_of.conditions] == [
            "name",
            "phone",
            "watch_id",
            "email",
        ]
        assert (filters.sort.field, filters.sort.direction) == ("name", "asc")
        assert (filters.skip, filters.limit) == (20, 20)
        assert resp.json()["page"] == 2

    async def test_multiple_values_for_single_select(self, viewer_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        resp = await viewer_client.get("/api/v1/customers?status=Active,Suspended")
        assert resp.status_code == 400
        mock.get_all.assert_not_awaited()

    async def test_invalid_filter_value(self, viewer_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        resp = await viewer_client.get("/api/v1/customers?status=Deleted")
        assert resp.status_code == 400
        assert resp.json()["detail"]["errors"] == ["Invalid value for Status"]
        mock.get_all.assert_not_awaited()

    async def test_page_size_capped(self, viewer_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([], 0))
        await viewer_client.get("/api/v1/customers?limit=1000")
        assert _filters_passed(mock).limit == 100

    async def test_get_customer(self, viewer_client):
        customer = make_customer_model()
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.get_by_code = AsyncMock(return_value=customer)
        resp = await viewer_client.get("/api/v1/customers/CUST0001")
        assert resp.status_code == 200
        assert resp.json()["code"] == "CUST0001"

    async def test_get_customer_not_found(self, viewer_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.get_by_code = AsyncMock(return_value=None)
        resp = await viewer_client.get("/api/v1/customers/CUST9999")
        assert resp.status_code == 404

    async def test_create_customer(self, manager_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.create = AsyncMock(return_value=make_customer_model(status=CustomerStatus.pending))
        resp = await manager_client.post("/api/v1/customers", json=make_customer_payload())
        assert resp.status_code == 201
        assert resp.json()["status"] == "Pending"

    async def test_create_customer_validation_error(self, admin_client):
        _override_repo(get_customer_repo, AsyncMock())
        resp = await admin_client.post("/api/v1/customers", json={"name": ""})
        assert resp.status_code == 422

    async def test_update_customer(self, admin_client):
        mock = _override_repo(get_customer_repo, AsyncMock())
        mock.update = AsyncMock(
            return_value=make_customer_model(status=CustomerStatus.suspended)
        )
        resp = await admin_client.put(
            "/api/v1/customers/CUST0001", json={"status": CustomerStatus.suspended}
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "Suspended"


# ---------------------------------------------------------------------------
# Bills API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestBillsAPI:
    async def test_list_bills_with_customer(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([(make_bill_model(), make_customer_model())], 1))
        resp = await viewer_client.get("/api/v1/bills?status=Unpaid&customerId=CUST0001")
        assert resp.status_code == 200
        item = resp.json()["items"][0]
        assert item["status"] == "Unpaid"
        assert item["customer"]["name"] == "John Doe"

        constraints = _filters_passed(mock).predicate.constraints
        assert constraints["status"] == Equals(BillStatus.unpaid)
        assert constraints["customer.code"] == Equals("CUST0001")

    async def test_several_customer_ids_compare_as_one_value(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([], 0))
        resp = await viewer_client.get("/api/v1/bills?customerId=CUST0001,CUST0002")
        assert resp.status_code == 200
        constraints = _filters_passed(mock).predicate.constraints
        assert constraints["customer.code"] == Equals("CUST0001,CUST0002")

    async def test_list_bills_rejects_bad_amount(self, viewer_client):
        _override_repo(get_bill_repo, AsyncMock())
        resp = await viewer_client.get("/api/v1/bills?amountRange=-5&dateRange=2024-13-01,x")
        assert resp.status_code == 400
        assert resp.json()["detail"]["errors"] == [
            "Invalid date format for Date Range",
            "Invalid date format for Date Range",
            "Amount Range must be at least 0",
        ]

    async def test_list_bills_unknown_sort_field(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        resp = await viewer_client.get("/api/v1/bills?sortBy=shoeSize&sortOrder=asc")
        assert resp.status_code == 400
        assert "shoeSize" in resp.json()["detail"]
        mock.get_all.assert_not_awaited()

    async def test_list_bills_sorted_by_mapped_but_unlisted_column(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        resp = await viewer_client.get("/api/v1/bills?sortBy=customerId&sortOrder=asc")
        assert resp.status_code == 400
        mock.get_all.assert_not_awaited()

    async def test_get_bill(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        mock.get_with_customer = AsyncMock(
            return_value=(make_bill_model(), make_customer_model())
        )
        resp = await viewer_client.get("/api/v1/bills/BILL0001")
        assert resp.status_code == 200
        assert resp.json()["code"] == "BILL0001"

    async def test_get_bill_not_found(self, viewer_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        mock.get_with_customer = AsyncMock(return_value=None)
        resp = await viewer_client.get("/api/v1/bills/BILL9999")
        assert resp.status_code == 404

    async def test_customer_bills(self, viewer_client):
        customer = make_customer_model()
        customers = _override_repo(get_customer_repo, AsyncMock())
        customers.get_by_code = AsyncMock(return_value=customer)
        bills = _override_repo(get_bill_repo, AsyncMock())
        bills.get_by_customer = AsyncMock(return_value=[make_bill_model(), make_bill_model()])
        resp = await viewer_client.get("/api/v1/bills/customer/CUST0001")
        assert resp.status_code == 200
        assert len(resp.json()) == 2
        bills.get_by_customer.assert_awaited_once_with(customer.id)

    async def test_create_bill(self, manager_client):
        service = _override_repo(get_billing_service, AsyncMock())
        service.create_bill = AsyncMock(return_value=(make_bill_model(), make_customer_model()))
        resp = await manager_client.post(
            "/api/v1/bills",
            json={
                "customer_code": "CUST0001",
                "usage_kwh": "125.5",
                "due_date": "2024-11-15",
                "billing_period": "October 2024",
            },
        )
        assert resp.status_code == 201
        assert resp.json()["customer"]["code"] == "CUST0001"

    async def test_update_bill_with_status_label(self, manager_client):
        mock = _override_repo(get_bill_repo, AsyncMock())
        mock.update = AsyncMock(return_value=make_bill_model(status=BillStatus.paid))
        resp = await manager_client.put("/api/v1/bills/BILL0001", json={"status": "Paid"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "Paid"
        update = mock.update.await_args.args[1]
        assert update.status == BillStatus.paid

    async def test_create_bill_without_active_rate(self, admin_client):
        service = _override_repo(get_billing_service, AsyncMock())
        service.create_bill = AsyncMock(side_effect=NoActiveRateError())
        resp = await admin_client.post(
            "/api/v1/bills",
            json={
                "customer_code": "CUST0001",
                "usage_kwh": "10",
                "due_date": "2024-11-15",
                "billing_period": "October 2024",
            },
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "No active rate found"


# ---------------------------------------------------------------------------
# Payments API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestPaymentsAPI:
    async def test_list_payments(self, viewer_client):
        mock = _override_repo(get_payment_repo, AsyncMock())
        mock.get_all = AsyncMock(
            return_value=([(make_payment_model(), make_customer_model())], 1)
        )
        resp = await viewer_client.get("/api/v1/payments?paymentMethod=Bank Transfer")
        assert resp.status_code == 200
        assert resp.json()["items"][0]["payment_method"] == "Bank Transfer"
        assert _filters_passed(mock).sort.field == "payment_date"

    async def test_record_payment(self, operator_client):
        service = _override_repo(get_billing_service, AsyncMock())
        service.record_payment = AsyncMock(
            return_value=(make_payment_model(), make_customer_model())
        )
        resp = await operator_client.post(
            "/api/v1/payments",
            json={
                "customer_code": "CUST0001",
                "bill_code": "BILL0001",
                "amount": "250.00",
                "payment_date": "2024-10-20T10:30:00Z",
                "payment_method": 2,
            },
        )
        assert resp.status_code == 201
        assert resp.json()["reference"] == "TXN000001"

    async def test_record_payment_unknown_bill(self, operator_client):
        service = _override_repo(get_billing_service, AsyncMock())
        service.record_payment = AsyncMock(side_effect=EntityNotFoundError("Bill", "BILL0404"))
        resp = await operator_client.post(
            "/api/v1/payments",
            json={
                "customer_code": "CUST0001",
                "bill_code": "BILL0404",
                "amount": "10",
                "payment_date": "2024-10-20T10:30:00Z",
                "payment_method": 1,
            },
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Bill not found: BILL0404"

    async def test_get_payment_not_found(self, viewer_client):
        mock = _override_repo(get_payment_repo, AsyncMock())
        mock.get_with_customer = AsyncMock(return_value=None)
        resp = await viewer_client.get("/api/v1/payments/PAY9999")
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Rates API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestRatesAPI:
    async def test_list_rates_active_filter(self, viewer_client):
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([make_rate_model()], 1))
        resp = await viewer_client.get("/api/v1/rates?isActive=true")
        assert resp.status_code == 200
        assert _filters_passed(mock).predicate.constraints["is_active"] == Equals(True)

    async def test_active_rate(self, viewer_client):
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.get_active = AsyncMock(return_value=make_rate_model())
        resp = await viewer_client.get("/api/v1/rates/active")
        assert resp.status_code == 200
        assert resp.json()["code"] == "RATE0001"

    async def test_no_active_rate(self, viewer_client):
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.get_active = AsyncMock(return_value=None)
        resp = await viewer_client.get("/api/v1/rates/active")
        assert resp.status_code == 404

    async def test_create_rate(self, manager_client):
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.create = AsyncMock(return_value=make_rate_model(code="RATE0003"))
        resp = await manager_client.post(
            "/api/v1/rates",
            json={"rate_value": "2.25", "effective_date": "2024-11-01T00:00:00Z"},
        )
        assert resp.status_code == 201
        assert resp.json()["code"] == "RATE0003"

    async def test_delete_active_rate_rejected(self, admin_client):
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.get_by_code = AsyncMock(return_value=make_rate_model(is_active=True))
        resp = await admin_client.delete("/api/v1/rates/RATE0001")
        assert resp.status_code == 400
        mock.delete.assert_not_awaited()

    async def test_delete_inactive_rate(self, admin_client):
        rate = make_rate_model(code="RATE0002", is_active=False)
        mock = _override_repo(get_rate_repo, AsyncMock())
        mock.get_by_code = AsyncMock(return_value=rate)
        resp = await admin_client.delete("/api/v1/rates/RATE0002")
        assert resp.status_code == 200
        mock.delete.assert_awaited_once_with(rate)


# ---------------------------------------------------------------------------
# Users API
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestUsersAPI:
    async def test_list_users_by_role(self, manager_client):
        mock = _override_repo(get_user_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([make_user_model()], 1))
        resp = await manager_client.get("/api/v1/users?role=Admin")
        assert resp.status_code == 200
        item = resp.json()["items"][0]
        assert item["role"] == "Admin"
        assert "hashed_password" not in item
        assert _filters_passed(mock).predicate.constraints["role"] == Equals(UserRole.admin)

    async def test_list_users_cannot_sort_by_password_hash(self, manager_client):
        mock = _override_repo(get_user_repo, AsyncMock())
        resp = await manager_client.get("/api/v1/users?sortBy=hashed_password&sortOrder=asc")
        assert resp.status_code == 400
        assert "hashed_password" in resp.json()["detail"]
        mock.get_all.assert_not_awaited()

    async def test_list_users_sorted_by_last_login(self, manager_client):
        mock = _override_repo(get_user_repo, AsyncMock())
        mock.get_all = AsyncMock(return_value=([make_user_model()], 1))
        resp = await manager_client.get("/api/v1/users?sortBy=lastLogin&sortOrder=desc")
        assert resp.status_code == 200
        assert _filters_passed(mock).sort.field == "lastLogin"

    async def test_create_user(self, admin_client):
        mock = _override_repo(get_user_repo, AsyncMock())
        mock.get_by_username = AsyncMock(return_value=None)
        mock.create = AsyncMock(
            return_value=make_user_model(username="operator2", role=UserRole.operator)
        )
        resp = await admin_client.post(
            "/api/v1/users",
            json={
                "username": "operator2",
                "email": "operator2@powerbill.local",
                "password": "operator123",
                "role": UserRole.operator,
            },
        )
        assert resp.status_code == 201
        assert resp.json()["role"] == "Operator"

    async def test_create_duplicate_user(self, admin_client):
        mock = _override_repo(get_user_repo, AsyncMock())
        mock.get_by_username = AsyncMock(return_value=make_user_model())
        resp = await admin_client.post(
            "/api/v1/users",
            json={"username": "admin", "email": "a@powerbill.local", "password": "secret1"},
        )
        assert resp.status_code == 409
        mock.create.assert_not_awaited()


# ---------------------------------------------------------------------------
# Notifications, dashboard and filter metadata
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestNotificationsAPI:
    async def test_unread(self, viewer_client):
        mock = _override_repo(get_notification_repo, AsyncMock())
        mock.get_unread = AsyncMock(return_value=[make_notification_model()])
        resp = await viewer_client.get("/api/v1/notifications/unread")
        assert resp.status_code == 200
        assert resp.json()[0]["type"] == "warning"

    async def test_mark_read(self, viewer_client):
        mock = _override_repo(get_notification_repo, AsyncMock())
        mock.mark_read = AsyncMock(return_value=make_notification_model(is_read=True))
        resp = await viewer_client.put("/api/v1/notifications/NOTIF0001/read")
        assert resp.status_code == 200
        assert resp.json()["is_read"] is True

    async def test_mark_all_read(self, viewer_client):
        mock = _override_repo(get_notification_repo, AsyncMock())
        mock.mark_all_read = AsyncMock(return_value=3)
        resp = await viewer_client.put("/api/v1/notifications/read-all")
        assert resp.json()["message"] == "3 notification(s) marked as read"


@pytest.mark.asyncio
class TestDashboardAPI:
    async def test_stats(self, viewer_client):
        stats = DashboardStats(
            total_customers=5,
            active_customers=3,
            suspended_customers=1,
            total_billed=2,
            total_unbilled=3,
            total_paid=2,
            total_unpaid=3,
            lost_connections=1,
            under_warning=1,
        )
        service = _override_repo(get_dashboard_service, AsyncMock())
        service.get_stats = AsyncMock(return_value=stats)
        resp = await viewer_client.get("/api/v1/dashboard/stats")
        assert resp.status_code == 200
        assert resp.json()["total_customers"] == 5


@pytest.mark.asyncio
class TestFiltersAPI:
    async def test_modules(self, viewer_client):
        resp = await viewer_client.get("/api/v1/filters/modules")
        assert resp.json() == ["customers", "bills", "payments", "rates", "users"]

    async def test_module_config(self, viewer_client):
        resp = await viewer_client.get("/api/v1/filters/customers")
        assert resp.status_code == 200
        body = resp.json()
        assert body["endpoint"] == "/api/v1/customers"
        assert body["filters"][0]["type"] == "text"
        assert "name" in body["sort_fields"]

    async def test_unknown_module(self, viewer_client):
        resp = await viewer_client.get("/api/v1/filters/widgets")
        assert resp.status_code == 404
