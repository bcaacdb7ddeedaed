# journal_api/infrastructure/database/models/audit_log_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.infrastructure.database.base_model import BaseModel, BigIntId


class AuditLogModel(BaseModel):
    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    entity_name: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[int | None] = mapped_column(BigIntId, nullable=True)

    action_name: Mapped[str] = mapped_column(String(20), nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)

    occurred_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    user_id: Mapped[int | None] = mapped_column(
        BigIntId, ForeignKey("tbUsers.id", ondelete="SET NULL"), nullable=True
    )
