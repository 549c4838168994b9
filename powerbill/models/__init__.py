"""Database models package."""

from powerbill.models.base import Base
from powerbill.models.bill import Bill
from powerbill.models.customer import Customer
from powerbill.models.notification import Notification
from powerbill.models.payment import Payment
from powerbill.models.rate import Rate
from powerbill.models.user import User

__all__ = [
    "Base",
    "Customer",
    "Bill",
    "Payment",
    "Rate",
    "User",
    "Notification",
]
