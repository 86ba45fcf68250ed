from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def to_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC; aware ones are converted to it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MessageCreate(BaseModel):
    msg: str = Field(..., description="Message body")
    msg_from: str = Field(..., alias="msgFrom", description="Username of the sender")
    msg_date_time: Optional[datetime] = Field(default=None, alias="msgDateTime")

    @field_validator("msg")
    @classmethod
    def msg_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("msg must not be empty")
        return value

    @field_validator("msg_from")
    @classmethod
    def msg_from_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("msgFrom must not be empty")
        return value

    @field_validator("msg_date_time")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc(value) if value is not None else None


class MessageResponse(BaseModel):
    id: UUID
    msg: str
    msg_from: str = Field(..., alias="msgFrom")
    msg_date_time: datetime = Field(..., alias="msgDateTime")

    class Config:
        from_attributes = True
        populate_by_name = True
