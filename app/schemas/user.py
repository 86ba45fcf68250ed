from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class UserCredentials(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username must not be empty")
        return value

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        # The password itself is kept as typed; only blank ones are refused.
        if not value.strip():
            raise ValueError("password must not be empty")
        return value


class UserCreate(UserCredentials):
    date_joined: datetime


class SafeUser(BaseModel):
    """A user as it may leave the service layer: never carries the password."""
    id: UUID
    username: str
    date_joined: datetime = Field(..., alias="dateJoined")

    class Config:
        from_attributes = True
        populate_by_name = True
