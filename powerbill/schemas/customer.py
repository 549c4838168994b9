"""Pydantic schemas for customers."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from powerbill.schemas.common import PaginatedResponse
from powerbill.utils.status import (
    BillingStatus,
    ConnectionStatus,
    CustomerStatus,
    LineStatus,
    PaymentStatus,
    as_label,
    from_label,
)


class CustomerCreate(BaseModel):
    """Request schema for creating a customer."""

    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=30)
    watch_id: str = Field(min_length=1, max_length=50)
    address: str = Field(min_length=1, max_length=500)
    registration_date: date
    email: EmailStr | None = None
    status: CustomerStatus = CustomerStatus.pending
    pr_status: LineStatus = LineStatus.inactive
    sc_status: LineStatus = LineStatus.inactive
    billing_status: BillingStatus = BillingStatus.unbilled
    payment_status: PaymentStatus = PaymentStatus.unpaid
    connection_status: ConnectionStatus = ConnectionStatus.lost


class CustomerUpdate(BaseModel):
    """Request schema for updating a customer."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=30)
    address: str | None = None
    email: EmailStr | None = None
    status: CustomerStatus | None = None
    pr_status: LineStatus | None = None
    sc_status: LineStatus | None = None
    billing_status: BillingStatus | None = None
    payment_status: PaymentStatus | None = None
    connection_status: ConnectionStatus | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_code(cls, v):
        return from_label(CustomerStatus, v)

    @field_validator("pr_status", "sc_status", mode="before")
    @classmethod
    def _line_status_code(cls, v):
        return from_label(LineStatus, v)

    @field_validator("billing_status", mode="before")
    @classmethod
    def _billing_status_code(cls, v):
        return from_label(BillingStatus, v)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _payment_status_code(cls, v):
        return from_label(PaymentStatus, v)

    @field_validator("connection_status", mode="before")
    @classmethod
    def _connection_status_code(cls, v):
        return from_label(ConnectionStatus, v)


class CustomerResponse(BaseModel):
    """Response schema for a customer; status codes are rendered as labels."""

    id: str
    code: str
    name: str
    phone: str
    watch_id: str
    email: str | None
    address: str
    registration_date: date
    last_payment_date: datetime | None
    status: str
    pr_status: str
    sc_status: str
    billing_status: str
    payment_status: str
    connection_status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, v):
        return as_label(CustomerStatus, v)

    @field_validator("pr_status", "sc_status", mode="before")
    @classmethod
    def _line_status_label(cls, v):
        return as_label(LineStatus, v)

    @field_validator("billing_status", mode="before")
    @classmethod
    def _billing_status_label(cls, v):
        return as_label(BillingStatus, v)

    @field_validator("payment_status", mode="before")
    @classmethod
    def _payment_status_label(cls, v):
        return as_label(PaymentStatus, v)

    @field_validator("connection_status", mode="before")
    @classmethod
    def _connection_status_label(cls, v):
        return as_label(ConnectionStatus, v)


class CustomerBrief(BaseModel):
    """Customer fields embedded in bill and payment responses."""

    code: str
    name: str
    phone: str
    watch_id: str

    model_config = {"from_attributes": True}


class CustomerListResponse(PaginatedResponse):
    """Paginated list of customers."""

    items: list[CustomerResponse]
