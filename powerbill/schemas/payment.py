"""Pydantic schemas for payments."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from powerbill.schemas.common import PaginatedResponse
from powerbill.schemas.customer import CustomerBrief
from powerbill.utils.status import PaymentMethod, PaymentProcessStatus, as_label


class PaymentCreate(BaseModel):
    customer_code: str = Field(min_length=1)
    bill_code: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    payment_date: datetime
    payment_method: PaymentMethod


class PaymentResponse(BaseModel):
    id: str
    code: str
    customer_id: str
    bill_id: str
    processed_by: str | None
    amount: Decimal
    payment_date: datetime
    payment_method: str
    reference: str
    status: str
    created_at: datetime
    updated_at: datetime
    customer: CustomerBrief | None = None

    model_config = {"from_attributes": True}

    @field_validator("payment_method", mode="before")
    @classmethod
    def _payment_method_label(cls, v):
        return as_label(PaymentMethod, v)

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, v):
        return as_label(PaymentProcessStatus, v)

    @classmethod
    def from_row(cls, payment, customer=None) -> "PaymentResponse":
        response = cls.model_validate(payment)
        if customer is not None:
            response.customer = CustomerBrief.model_validate(customer)
        return response


class PaymentListResponse(PaginatedResponse):
    items: list[PaymentResponse]
