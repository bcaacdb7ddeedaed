# journal_api/infrastructure/database/models/token_pair_model.py

import math
from datetime import datetime

from sqlalchemy import CHAR, CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.infrastructure.database.base_model import BaseModel, BigIntId


class TokenPairModel(BaseModel):
    """
    Um registro por emissão/rotação de par access/refresh.

    Só os digests SHA-256 dos segredos ficam no banco. Todos os registros
    gerados por rotações sucessivas de uma mesma emissão compartilham
    `family_id`; `previous_id` aponta para o registro substituído.
    """

    __tablename__ = "tbTokenPairs"
    __table_args__ = (
        CheckConstraint(
            "access_secret_digest IS NOT NULL OR refresh_secret_digest IS NOT NULL",
            name="chk_token_pairs_digest_present",
        ),
        Index("idx_token_pairs_family_created", "family_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("tbUsers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    family_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    previous_id: Mapped[int | None] = mapped_column(BigIntId, ForeignKey("tbTokenPairs.id"), nullable=True)

    access_secret_digest: Mapped[str | None] = mapped_column(CHAR(64), nullable=True, unique=True)
    refresh_secret_digest: Mapped[str | None] = mapped_column(CHAR(64), nullable=True, unique=True)

    access_expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    refresh_expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    revoked_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    revoked_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # -------------------------
    # Predicados (sem I/O)
    # -------------------------

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_access_valid(self, now: datetime) -> bool:
        return (
            not self.is_revoked
            and bool(self.access_secret_digest)
            and (self.access_expires_at is None or self.access_expires_at > now)
        )

    def is_refresh_valid(self, now: datetime) -> bool:
        return (
            not self.is_revoked
            and bool(self.refresh_secret_digest)
            and (self.refresh_expires_at is None or self.refresh_expires_at > now)
        )

    def is_active(self, now: datetime) -> bool:
        return not self.is_revoked and (self.is_access_valid(now) or self.is_refresh_valid(now))

    def is_expired(self, now: datetime) -> bool:
        return not self.is_active(now)

    def days_until_expiry(self, now: datetime) -> int | None:
        if self.refresh_expires_at is None:
            return None
        return math.ceil((self.refresh_expires_at - now).total_seconds() / 86400)
