"""API v1 router, aggregating all sub-routers."""

from fastapi import APIRouter

from powerbill.api.v1 import (
    auth,
    bills,
    customers,
    dashboard,
    filters,
    notifications,
    payments,
    rates,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router.include_router(bills.router, prefix="/bills", tags=["Bills"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(rates.router, prefix="/rates", tags=["Rates"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(filters.router, prefix="/filters", tags=["Filters"])
