"""Integer status codes stored on records and their display labels."""

import enum


class CustomerStatus(enum.IntEnum):
    pending = 1
    active = 2
    suspended = 3


class ConnectionStatus(enum.IntEnum):
    connected = 1
    lost = 2
    under_warning = 3


class BillingStatus(enum.IntEnum):
    unbilled = 1
    billed = 2


class PaymentStatus(enum.IntEnum):
    unpaid = 1
    paid = 2


class LineStatus(enum.IntEnum):
    """Primary/secondary supply line state."""

    inactive = 1
    active = 2


class BillStatus(enum.IntEnum):
    unpaid = 1
    paid = 2
    overdue = 3


class PaymentProcessStatus(enum.IntEnum):
    pending = 1
    completed = 2
    failed = 3


class PaymentMethod(enum.IntEnum):
    cash = 1
    bank_transfer = 2
    mobile_money = 3
    card = 4


class UserStatus(enum.IntEnum):
    inactive = 1
    active = 2


class UserRole(enum.IntEnum):
    viewer = 1
    operator = 2
    manager = 3
    admin = 4


class NotificationType(enum.IntEnum):
    info = 1
    warning = 2
    danger = 3
    success = 4


class NotificationPriority(enum.IntEnum):
    low = 1
    medium = 2
    high = 3


class PermissionAction(enum.IntEnum):
    read = 1
    write = 2
    delete = 3
    manage = 4


UNKNOWN_LABEL = "Unknown"

_LABELS: dict[type[enum.IntEnum], dict[int, str]] = {
    CustomerStatus: {1: "Pending", 2: "Active", 3: "Suspended"},
    ConnectionStatus: {1: "Connected", 2: "Lost", 3: "Under Warning"},
    BillingStatus: {1: "Unbilled", 2: "Billed"},
    PaymentStatus: {1: "Unpaid", 2: "Paid"},
    LineStatus: {1: "Inactive", 2: "Active"},
    BillStatus: {1: "Unpaid", 2: "Paid", 3: "Overdue"},
    PaymentProcessStatus: {1: "Pending", 2: "Completed", 3: "Failed"},
    PaymentMethod: {1: "Cash", 2: "Bank Transfer", 3: "Mobile Money", 4: "Card"},
    UserStatus: {1: "Inactive", 2: "Active"},
    UserRole: {1: "Viewer", 2: "Operator", 3: "Manager", 4: "Admin"},
    NotificationType: {1: "info", 2: "warning", 3: "danger", 4: "success"},
    NotificationPriority: {1: "low", 2: "medium", 3: "high"},
    PermissionAction: {1: "read", 2: "write", 3: "delete", 4: "manage"},
}


def label_for(kind: type[enum.IntEnum], code: int | None) -> str:
    """Return the display label for ``code``, or ``"Unknown"``.

    >>> label_for(PaymentMethod, 2)
    'Bank Transfer'
    """
    if code is None:
        return UNKNOWN_LABEL
    return _LABELS[kind].get(int(code), UNKNOWN_LABEL)


def as_label(kind: type[enum.IntEnum], value: object) -> object:
    """Map an integer code to its label; anything else passes through unchanged."""
    if isinstance(value, int) and not isinstance(value, bool):
        return label_for(kind, value)
    return value


def from_label(kind: type[enum.IntEnum], value: object) -> object:
    """Inverse of :func:`as_label`: a known label becomes its code.

    Matching ignores case; anything else passes through unchanged.
    """
    if isinstance(value, str):
        wanted = value.strip().lower()
        for code, label in _LABELS[kind].items():
            if label.lower() == wanted:
                return kind(code)
    return value
