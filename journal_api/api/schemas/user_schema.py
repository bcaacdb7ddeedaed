# journal_api/api/schemas/user_schema.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_serializer

from journal_api.api.schemas._datetime_serializer import serialize_dt


class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr


class UserDetailResponse(UserResponse):
    created_at: datetime
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = Field(default=None, max_length=255)
