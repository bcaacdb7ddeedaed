# journal_api/services/token_pair_manager.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from journal_api.config.settings import TokenConfig
from journal_api.core.clock import Clock, utcnow
from journal_api.core.exceptions import (
    IntegrityViolationError,
    InvalidOrExpiredTokenError,
    MissingTokenError,
    NotFoundError,
    TokenReuseDetectedError,
)
from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel
from journal_api.infrastructure.security.token_codec import TokenCodec
from journal_api.repositories.token_pair_repository import TokenPairRepository
from journal_api.services.reuse_detector import ReuseDetector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    # dono e família do registro recém-gravado, para auditoria sem nova consulta
    user_id: int
    family_id: str


class TokenPairManager:
    """
    Única autoridade para emitir, validar, rotacionar e revogar pares
    access/refresh.

    Rotação é append-only: a linha apresentada é revogada ("rotated") e uma
    nova linha com o mesmo `family_id` é inserida, apontando para a anterior
    via `previous_id`. Assim qualquer refresh antigo reapresentado cai no
    caminho de reutilização.
    """

    def __init__(
        self,
        *,
        repo: TokenPairRepository,
        config: TokenConfig,
        clock: Clock = utcnow,
        reuse_detector: ReuseDetector | None = None,
    ) -> None:
        self._repo = repo
        self._config = config
        self._clock = clock
        self._reuse = reuse_detector or ReuseDetector(repo=repo, clock=clock)

    # -------------------------
    # Emissão
    # -------------------------

    def issue(self, user_id: int) -> TokenPair:
        family_id = str(uuid4())
        pair, record = self._insert_pair(user_id=user_id, family_id=family_id, previous_id=None)
        logger.info("Par emitido: user_id=%s family_id=%s token_id=%s", user_id, family_id, record.id)
        return pair

    def _insert_pair(
        self, *, user_id: int, family_id: str, previous_id: int | None
    ) -> tuple[TokenPair, TokenPairModel]:
        now = self._clock()
        access = TokenCodec.generate_secret(self._config.secret_bytes)
        refresh = TokenCodec.generate_secret(self._config.secret_bytes)

        model = TokenPairModel(
            user_id=user_id,
            family_id=family_id,
            previous_id=previous_id,
            access_secret_digest=TokenCodec.digest(access),
            refresh_secret_digest=TokenCodec.digest(refresh),
            access_expires_at=now + self._config.access_ttl,
            refresh_expires_at=now + self._config.refresh_ttl,
            revoked_at=None,
            revoked_reason=None,
            created_at=now,
            updated_at=now,
        )

        try:
            self._repo.add(model)
        except IntegrityError as e:
            detail = str(e.orig).lower()
            if "secret_digest" in detail:
                logger.error("Colisão de digest ao gravar par de tokens: user_id=%s family_id=%s", user_id, family_id)
                raise IntegrityViolationError() from e
            if "foreign key" in detail:
                logger.warning("Par de tokens para usuário inexistente: user_id=%s", user_id)
                raise NotFoundError("Usuário não encontrado.") from e

            logger.error("Falha de integridade ao gravar par de tokens: user_id=%s detalhe=%s", user_id, detail)
            raise IntegrityViolationError("Falha de integridade ao gravar par de tokens.") from e

        pair = TokenPair(access_token=access, refresh_token=refresh, user_id=user_id, family_id=family_id)
        return pair, model

    # -------------------------
    # Validação
    # -------------------------

    def authenticate(self, raw_access_token: str | None) -> TokenPairModel:
        if raw_access_token is None or not raw_access_token.strip():
            raise MissingTokenError()

        record = self._repo.get_by_access_digest(TokenCodec.digest(raw_access_token.strip()))
        if record is None or not record.is_access_valid(self._clock()):
            raise InvalidOrExpiredTokenError()

        return record

    def validate_access(self, raw_access_token: str | None) -> int:
        return self.authenticate(raw_access_token).user_id

    # -------------------------
    # Rotação
    # -------------------------

    def rotate(self, raw_refresh_token: str | None) -> TokenPair:
        if raw_refresh_token is None or not raw_refresh_token.strip():
            raise MissingTokenError("Refresh token ausente.")

        digest = TokenCodec.digest(raw_refresh_token.strip())
        record = self._repo.get_by_refresh_digest(digest, for_update=True)
        if record is None:
            raise InvalidOrExpiredTokenError()

        if record.is_revoked:
            self._reuse.handle_revoked_presentation(record)
            raise TokenReuseDetectedError(family_id=record.family_id, user_id=record.user_id)

        now = self._clock()
        if not record.is_refresh_valid(now):
            raise InvalidOrExpiredTokenError()

        # só uma rotação concorrente vence; a perdedora vê a linha já revogada
        if not self._repo.supersede(token_id=record.id, refresh_digest=digest, now=now):
            self._reuse.handle_revoked_presentation(record)
            raise TokenReuseDetectedError(family_id=record.family_id, user_id=record.user_id)

        pair, new_record = self._insert_pair(
            user_id=record.user_id,
            family_id=record.family_id,
            previous_id=record.id,
        )
        logger.info(
            "Par rotacionado: user_id=%s family_id=%s token_id=%s->%s",
            record.user_id,
            record.family_id,
            record.id,
            new_record.id,
        )
        return pair

    # -------------------------
    # Revogação
    # -------------------------

    def revoke(self, record: TokenPairModel, *, reason: str = "logout") -> bool:
        return self._repo.revoke(token_id=record.id, now=self._clock(), reason=reason)

    def revoke_family(self, family_id: str, *, reason: str = "logout") -> int:
        return self._repo.revoke_family(family_id=family_id, now=self._clock(), reason=reason)

    def revoke_all_for_user(self, user_id: int, *, reason: str = "logout") -> int:
        return self._repo.revoke_all_for_user(user_id=user_id, now=self._clock(), reason=reason)

    def logout(self, raw_access_token: str | None, *, everywhere: bool = True) -> TokenPairModel:
        record = self.authenticate(raw_access_token)
        self.revoke(record, reason="logout")
        if everywhere:
            self.revoke_all_for_user(record.user_id, reason="logout")
        else:
            self.revoke_family(record.family_id, reason="logout")

        logger.info("Logout: user_id=%s family_id=%s everywhere=%s", record.user_id, record.family_id, everywhere)
        return record

    def detect_token_reuse(self, record: TokenPairModel) -> bool:
        return self._reuse.detect_token_reuse(record)

    # -------------------------
    # Manutenção
    # -------------------------

    def cleanup_old(self, user_id: int, keep_count: int | None = None) -> int:
        keep = self._config.keep_count if keep_count is None else keep_count
        if keep < 0:
            raise ValueError("keep_count não pode ser negativo.")

        now = self._clock()
        active_ids = self._repo.list_active_ids_for_user(user_id=user_id, now=now)
        revoked = self._repo.revoke_ids(token_ids=active_ids[keep:], now=now, reason="cleanup")
        if revoked:
            logger.info("Cleanup: user_id=%s revogados=%s mantidos=%s", user_id, revoked, keep)
        return revoked

    def extend_refresh(self, record: TokenPairModel, *, days: int = 7) -> bool:
        now = self._clock()
        return self._repo.extend_refresh(
            token_id=record.id,
            refresh_expires_at=now + timedelta(days=days),
            now=now,
        )
