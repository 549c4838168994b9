"""Pydantic schemas for notifications."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from powerbill.utils.status import NotificationPriority, NotificationType, as_label


class NotificationCreate(BaseModel):
    type: NotificationType
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    timestamp: datetime
    priority: NotificationPriority = NotificationPriority.medium
    customer_id: str | None = None
    user_id: str | None = None


class NotificationResponse(BaseModel):
    id: str
    code: str
    type: str
    title: str
    message: str
    timestamp: datetime
    is_read: bool
    customer_id: str | None
    user_id: str | None
    priority: str

    model_config = {"from_attributes": True}

    @field_validator("type", mode="before")
    @classmethod
    def _type_label(cls, v):
        return as_label(NotificationType, v)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_label(cls, v):
        return as_label(NotificationPriority, v)
