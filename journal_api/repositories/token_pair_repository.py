# journal_api/repositories/token_pair_repository.py

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel


class TokenPairRepository(BaseRepository[TokenPairModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, token_id: int) -> TokenPairModel | None:
        return self._session.get(TokenPairModel, token_id)

    def get_by_access_digest(self, digest: str) -> TokenPairModel | None:
        stmt = select(TokenPairModel).where(TokenPairModel.access_secret_digest == digest)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_refresh_digest(self, digest: str, *, for_update: bool = False) -> TokenPairModel | None:
        # sem filtro de revogação: o chamador precisa ver registros revogados
        stmt = select(TokenPairModel).where(TokenPairModel.refresh_secret_digest == digest)
        if for_update:
            stmt = stmt.with_for_update()
        return self._session.execute(stmt).scalar_one_or_none()

    def list_family(self, family_id: str) -> list[TokenPairModel]:
        stmt = (
            select(TokenPairModel)
            .where(TokenPairModel.family_id == family_id)
            .order_by(TokenPairModel.created_at.asc(), TokenPairModel.id.asc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def exists_other_live_in_family(self, *, family_id: str, exclude_id: int) -> bool:
        stmt = select(TokenPairModel.id).where(
            TokenPairModel.family_id == family_id,
            TokenPairModel.revoked_at.is_(None),
            TokenPairModel.id != exclude_id,
        )
        return self._session.execute(stmt.limit(1)).first() is not None

    def list_active_ids_for_user(self, *, user_id: int, now: datetime) -> list[int]:
        stmt = (
            select(TokenPairModel.id)
            .where(
                TokenPairModel.user_id == user_id,
                TokenPairModel.revoked_at.is_(None),
                (TokenPairModel.access_expires_at.is_(None) | (TokenPairModel.access_expires_at > now))
                | (TokenPairModel.refresh_expires_at.is_(None) | (TokenPairModel.refresh_expires_at > now)),
            )
            .order_by(TokenPairModel.created_at.desc(), TokenPairModel.id.desc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count(TokenPairModel.id)).where(TokenPairModel.user_id == user_id)
        return int(self._session.execute(stmt).scalar_one())

    # -------------------------
    # Escrita
    # -------------------------

    def revoke(self, *, token_id: int, now: datetime, reason: str | None = None) -> bool:
        stmt = (
            update(TokenPairModel)
            .where(TokenPairModel.id == token_id, TokenPairModel.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def revoke_ids(self, *, token_ids: list[int], now: datetime, reason: str | None = None) -> int:
        if not token_ids:
            return 0
        stmt = (
            update(TokenPairModel)
            .where(TokenPairModel.id.in_(token_ids), TokenPairModel.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def revoke_family(self, *, family_id: str, now: datetime, reason: str | None = None) -> int:
        # um único UPDATE: nunca deixa a família parcialmente revogada
        stmt = (
            update(TokenPairModel)
            .where(TokenPairModel.family_id == family_id, TokenPairModel.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def revoke_all_for_user(self, *, user_id: int, now: datetime, reason: str | None = None) -> int:
        stmt = (
            update(TokenPairModel)
            .where(TokenPairModel.user_id == user_id, TokenPairModel.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason, updated_at=now)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def supersede(self, *, token_id: int, refresh_digest: str, now: datetime) -> bool:
        """
        Compare-and-set da rotação: só uma transação consegue revogar a linha
        ainda viva. Retorna False para quem perdeu a corrida.
        """
        stmt = (
            update(TokenPairModel)
            .where(
                TokenPairModel.id == token_id,
                TokenPairModel.refresh_secret_digest == refresh_digest,
                TokenPairModel.revoked_at.is_(None),
                TokenPairModel.refresh_expires_at > now,
            )
            .values(revoked_at=now, revoked_reason="rotated", updated_at=now)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) == 1

    def extend_refresh(self, *, token_id: int, refresh_expires_at: datetime, now: datetime) -> bool:
        stmt = (
            update(TokenPairModel)
            .where(TokenPairModel.id == token_id, TokenPairModel.revoked_at.is_(None))
            .values(refresh_expires_at=refresh_expires_at, updated_at=now)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0
