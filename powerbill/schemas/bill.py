"""Pydantic schemas for bills."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from powerbill.schemas.common import PaginatedResponse
from powerbill.schemas.customer import CustomerBrief
from powerbill.utils.status import BillStatus, as_label, from_label


class BillCreate(BaseModel):
    """Request schema for creating a bill; the amount is derived from the active rate."""

    customer_code: str = Field(min_length=1)
    usage_kwh: Decimal = Field(ge=0)
    due_date: date
    billing_period: str = Field(min_length=1, max_length=50)


class BillUpdate(BaseModel):
    due_date: date | None = None
    billing_period: str | None = Field(default=None, min_length=1, max_length=50)
    status: BillStatus | None = None
    paid_at: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_code(cls, v):
        return from_label(BillStatus, v)


class BillResponse(BaseModel):
    id: str
    code: str
    customer_id: str
    rate_id: str
    created_by: str | None
    amount: Decimal
    usage_kwh: Decimal
    due_date: date
    billing_period: str
    watch_id: str
    status: str
    paid_at: datetime | None
    created_at: datetime
    updated_at: datetime
    customer: CustomerBrief | None = None

    model_config = {"from_attributes": True}

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, v):
        return as_label(BillStatus, v)

    @classmethod
    def from_row(cls, bill, customer=None) -> "BillResponse":
        response = cls.model_validate(bill)
        if customer is not None:
            response.customer = CustomerBrief.model_validate(customer)
        return response


class BillListResponse(PaginatedResponse):
    items: list[BillResponse]
