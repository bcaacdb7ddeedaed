# journal_api/infrastructure/database/models/message_model.py

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.infrastructure.database.base_model import BaseModel, BigIntId


class MessageModel(BaseModel):
    __tablename__ = "tbMessages"
    __table_args__ = (
        CheckConstraint("emotion_score >= 0 AND emotion_score <= 1", name="chk_emotion_score"),
        Index("idx_messages_chat_sent", "chat_id", "sent_at"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    chat_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("tbChats.id", ondelete="CASCADE"), nullable=False, index=True
    )

    sender_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("tbUsers.id", ondelete="CASCADE"), nullable=False
    )

    # "user" | "assistant"
    sender_kind: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    llm_metadata: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    emotion_keywords: Mapped[list | None] = mapped_column(JSON, nullable=True)
    emotion_score: Mapped[float | None] = mapped_column(Numeric(3, 2), nullable=True)

    sent_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
