"""Filter modules for every listable entity, keyed by module name."""

from collections.abc import Mapping
from types import MappingProxyType

from powerbill.filters.types import (
    FilterConfig,
    FilterKind,
    FilterModule,
    FilterOption,
    FilterValidation,
    SortDirection,
    SortSpec,
    UnknownModuleError,
)
from powerbill.utils.status import (
    BillingStatus,
    BillStatus,
    ConnectionStatus,
    CustomerStatus,
    PaymentMethod,
    PaymentProcessStatus,
    PaymentStatus,
    UserRole,
    UserStatus,
)


def _options(*values: str) -> tuple[FilterOption, ...]:
    return tuple(FilterOption(value=value, label=value) for value in values)


_ACTIVE_OPTIONS = (
    FilterOption(value="true", label="Active"),
    FilterOption(value="false", label="Inactive"),
)

CUSTOMER_FILTERS = (
    FilterConfig(
        key="search",
        label="Search",
        kind=FilterKind.text,
        placeholder="Search customers...",
        search_fields=("name", "phone", "watch_id", "email"),
    ),
    FilterConfig(
        key="status",
        label="Status",
        kind=FilterKind.select,
        options=_options("Active", "Suspended", "Pending"),
        mapping={
            "Active": CustomerStatus.active,
            "Suspended": CustomerStatus.suspended,
            "Pending": CustomerStatus.pending,
        },
    ),
    FilterConfig(
        key="billingStatus",
        label="Billing Status",
        kind=FilterKind.select,
        field="billing_status",
        options=_options("Billed", "Unbilled"),
        mapping={"Billed": BillingStatus.billed, "Unbilled": BillingStatus.unbilled},
    ),
    FilterConfig(
        key="paymentStatus",
        label="Payment Status",
        kind=FilterKind.select,
        field="payment_status",
        options=_options("Paid", "Unpaid", "Pending"),
        # customers only track paid/unpaid; "Pending" means not yet paid
        mapping={
            "Paid": PaymentStatus.paid,
            "Unpaid": PaymentStatus.unpaid,
            "Pending": PaymentStatus.unpaid,
        },
    ),
    FilterConfig(
        key="connectionStatus",
        label="Connection Status",
        kind=FilterKind.select,
        field="connection_status",
        options=_options("Connected", "Lost", "Disconnected", "Under Warning"),
        mapping={
            "Connected": ConnectionStatus.connected,
            "Lost": ConnectionStatus.lost,
            "Disconnected": ConnectionStatus.lost,
            "Under Warning": ConnectionStatus.under_warning,
        },
    ),
)

BILL_FILTERS = (
    FilterConfig(
        key="search",
        label="Search",
        kind=FilterKind.text,
        placeholder="Search bills...",
        search_fields=("code", "customer.name", "customer.phone", "customer.watch_id"),
    ),
    FilterConfig(
        key="status",
        label="Status",
        kind=FilterKind.select,
        options=_options("Paid", "Unpaid", "Overdue"),
        mapping={
            "Paid": BillStatus.paid,
            "Unpaid": BillStatus.unpaid,
            "Overdue": BillStatus.overdue,
        },
    ),
    # options are filled in by the client from the customer list
    FilterConfig(
        key="customerId",
        label="Customer",
        kind=FilterKind.select,
        field="customer.code",
        placeholder="Select customer...",
    ),
    FilterConfig(
        key="dateRange",
        label="Date Range",
        kind=FilterKind.daterange,
        field="created_at",
        placeholder="Select date range...",
    ),
    FilterConfig(
        key="amountRange",
        label="Amount Range",
        kind=FilterKind.number,
        field="amount",
        placeholder="Min amount...",
        validation=FilterValidation(min=0),
    ),
)

PAYMENT_FILTERS = (
    FilterConfig(
        key="search",
        label="Search",
        kind=FilterKind.text,
        placeholder="Search payments...",
        search_fields=("code", "reference", "customer.name", "customer.phone"),
    ),
    FilterConfig(
        key="status",
        label="Status",
        kind=FilterKind.select,
        options=_options("Completed", "Pending", "Failed"),
        mapping={
            "Completed": PaymentProcessStatus.completed,
            "Pending": PaymentProcessStatus.pending,
            "Failed": PaymentProcessStatus.failed,
        },
    ),
    FilterConfig(
        key="paymentMethod",
        label="Payment Method",
        kind=FilterKind.select,
        field="payment_method",
        options=_options("Cash", "Bank Transfer", "Mobile Money", "Card"),
        mapping={
            "Cash": PaymentMethod.cash,
            "Bank Transfer": PaymentMethod.bank_transfer,
            "Mobile Money": PaymentMethod.mobile_money,
            "Card": PaymentMethod.card,
        },
    ),
    FilterConfig(
        key="dateRange",
        label="Payment Date",
        kind=FilterKind.daterange,
        field="payment_date",
        placeholder="Select date range...",
    ),
)

RATE_FILTERS = (
    FilterConfig(
        key="search",
        label="Search",
        kind=FilterKind.text,
        placeholder="Search rates...",
        search_fields=("description", "rate_value"),
    ),
    FilterConfig(
        key="isActive",
        label="Status",
        kind=FilterKind.select,
        field="is_active",
        options=_ACTIVE_OPTIONS,
        mapping={"true": True, "false": False},
    ),
    FilterConfig(
        key="dateRange",
        label="Effective Date",
        kind=FilterKind.daterange,
        field="effective_date",
        placeholder="Select date range...",
    ),
)

USER_FILTERS = (
    FilterConfig(
        key="search",
        label="Search",
        kind=FilterKind.text,
        placeholder="Search users...",
        search_fields=("username", "email", "department"),
    ),
    FilterConfig(
        key="role",
        label="Role",
        kind=FilterKind.select,
        options=_options("Admin", "Manager", "Operator", "Viewer"),
        mapping={
            "Admin": UserRole.admin,
            "Manager": UserRole.manager,
            "Operator": UserRole.operator,
            "Viewer": UserRole.viewer,
        },
    ),
    FilterConfig(
        key="isActive",
        label="Status",
        kind=FilterKind.select,
        field="is_active",
        options=_ACTIVE_OPTIONS,
        mapping={"true": UserStatus.active, "false": UserStatus.inactive},
    ),
)

_CREATED_DESC = SortSpec(field="created_at", direction=SortDirection.desc)

CUSTOMER_SORT_FIELDS = (
    "created_at",
    "code",
    "name",
    "phone",
    "watch_id",
    "registration_date",
    "last_payment_date",
    "status",
    "billing_status",
    "payment_status",
    "connection_status",
)
BILL_SORT_FIELDS = (
    "created_at",
    "code",
    "amount",
    "usage_kwh",
    "due_date",
    "billing_period",
    "status",
    "paid_at",
    "customer.name",
)
PAYMENT_SORT_FIELDS = (
    "payment_date",
    "created_at",
    "code",
    "amount",
    "reference",
    "payment_method",
    "status",
    "customer.name",
)
RATE_SORT_FIELDS = ("effective_date", "created_at", "code", "rate_value", "is_active")
# never the password hash
USER_SORT_FIELDS = (
    "created_at",
    "username",
    "email",
    "role",
    "is_active",
    "department",
    "last_login",
)

FILTER_MODULES: Mapping[str, FilterModule] = MappingProxyType(
    {
        "customers": FilterModule(
            name="Customers",
            endpoint="/api/v1/customers",
            filters=CUSTOMER_FILTERS,
            default_sort=_CREATED_DESC,
            sort_fields=CUSTOMER_SORT_FIELDS,
        ),
        "bills": FilterModule(
            name="Bills",
            endpoint="/api/v1/bills",
            filters=BILL_FILTERS,
            default_sort=_CREATED_DESC,
            sort_fields=BILL_SORT_FIELDS,
        ),
        "payments": FilterModule(
            name="Payments",
            endpoint="/api/v1/payments",
            filters=PAYMENT_FILTERS,
            default_sort=SortSpec(field="payment_date", direction=SortDirection.desc),
            sort_fields=PAYMENT_SORT_FIELDS,
        ),
        "rates": FilterModule(
            name="Rates",
            endpoint="/api/v1/rates",
            filters=RATE_FILTERS,
            default_sort=SortSpec(field="effective_date", direction=SortDirection.desc),
            sort_fields=RATE_SORT_FIELDS,
        ),
        "users": FilterModule(
            name="Users",
            endpoint="/api/v1/users",
            filters=USER_FILTERS,
            default_sort=_CREATED_DESC,
            sort_fields=USER_SORT_FIELDS,
        ),
    }
)


def get_module(
    module_name: str, registry: Mapping[str, FilterModule] = FILTER_MODULES
) -> FilterModule:
    try:
        return registry[module_name]
    except KeyError:
        raise UnknownModuleError(module_name) from None


def get_filter_config(
    module_name: str, registry: Mapping[str, FilterModule] = FILTER_MODULES
) -> tuple[FilterConfig, ...]:
    return get_module(module_name, registry).filters


def available_modules(registry: Mapping[str, FilterModule] = FILTER_MODULES) -> list[str]:
    return list(registry)
