"""Pydantic schemas for tariff rates."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from powerbill.schemas.common import PaginatedResponse


class RateCreate(BaseModel):
    rate_value: Decimal = Field(ge=0)
    effective_date: datetime
    description: str | None = Field(default=None, max_length=255)
    is_active: bool = True


class RateUpdate(BaseModel):
    rate_value: Decimal | None = Field(default=None, ge=0)
    effective_date: datetime | None = None
    description: str | None = Field(default=None, max_length=255)
    is_active: bool | None = None


class RateResponse(BaseModel):
    id: str
    code: str
    rate_value: Decimal
    description: str | None
    is_active: bool
    effective_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RateListResponse(PaginatedResponse):
    items: list[RateResponse]
