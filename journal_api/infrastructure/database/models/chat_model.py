# journal_api/infrastructure/database/models/chat_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.infrastructure.database.base_model import BaseModel, BigIntId


class ChatModel(BaseModel):
    __tablename__ = "tbChats"
    __table_args__ = (UniqueConstraint("user_id", "title", name="uq_chats_user_title"),)

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("tbUsers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # sessões ficam como "session:<uuid>"
    title: Mapped[str] = mapped_column(String(120), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
