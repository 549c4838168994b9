"""Dashboard summary schema."""

from pydantic import BaseModel, Field

from powerbill.schemas.bill import BillResponse
from powerbill.schemas.notification import NotificationResponse
from powerbill.schemas.payment import PaymentResponse


class DashboardStats(BaseModel):
    total_customers: int
    active_customers: int
    suspended_customers: int
    total_billed: int
    total_unbilled: int
    total_paid: int
    total_unpaid: int
    lost_connections: int
    under_warning: int
    recent_payments: list[PaymentResponse] = Field(default_factory=list)
    recent_bills: list[BillResponse] = Field(default_factory=list)
    alerts: list[NotificationResponse] = Field(default_factory=list)
