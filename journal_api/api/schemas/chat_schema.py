# journal_api/api/schemas/chat_schema.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer

from journal_api.api.schemas._datetime_serializer import serialize_dt


class CreateMessageRequest(BaseModel):
    content: str = Field(min_length=1, max_length=10000)
    session_id: Optional[str] = Field(default=None, min_length=1, max_length=100)


class EmotionResponse(BaseModel):
    name: str
    label: str
    intensity: Optional[float] = None


class MessageResponse(BaseModel):
    id: int
    content: str
    role: str
    session_id: str
    metadata: Optional[dict] = None
    emotions: List[EmotionResponse] = []

    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class CreateMessageResponse(BaseModel):
    session_id: str
    chat_id: int
    user_message: MessageResponse


class MessageListResponse(BaseModel):
    messages: List[MessageResponse]
    total_count: int
    current_page: int
    total_pages: int


class SessionResponse(BaseModel):
    session_id: str
    chat_id: int
    last_message_at: Optional[datetime] = None
    message_count: int
    preview: Optional[str] = None

    @field_serializer("last_message_at")
    def serialize_last(self, value: datetime | None):
        return serialize_dt(value)


class KeywordResponse(BaseModel):
    word: str
    count: int
    percentage: float
