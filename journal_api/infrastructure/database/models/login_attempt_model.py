# journal_api/infrastructure/database/models/login_attempt_model.py

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.infrastructure.database.base_model import BaseModel, BigIntId


class LoginAttemptModel(BaseModel):
    """Uma linha por tentativa de login, registrada antes de conferir a senha."""

    __tablename__ = "tbLoginAttempts"
    __table_args__ = (Index("idx_login_attempts_email_at", "email", "attempted_at"),)

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    # email normalizado (strip + lower), exista ou não o usuário
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    succeeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    attempted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
