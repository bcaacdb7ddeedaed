# journal_api/services/reuse_detector.py

import logging

from journal_api.core.clock import Clock, utcnow
from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel
from journal_api.repositories.token_pair_repository import TokenPairRepository

logger = logging.getLogger(__name__)

REUSE_REASON = "reuse_detected"


class ReuseDetector:
    """
    Decide se a apresentação de um refresh token indica roubo/replay.

    Clientes legítimos sempre apresentam o segredo mais novo; qualquer
    segredo já revogado (inclusive por rotação normal) é reutilização.
    """

    def __init__(self, *, repo: TokenPairRepository, clock: Clock = utcnow) -> None:
        self._repo = repo
        self._clock = clock

    def handle_revoked_presentation(self, record: TokenPairModel) -> int:
        revoked = self._repo.revoke_family(family_id=record.family_id, now=self._clock(), reason=REUSE_REASON)
        logger.warning(
            "Refresh token reutilizado: user_id=%s family_id=%s token_id=%s registros_revogados=%s",
            record.user_id,
            record.family_id,
            record.id,
            revoked,
        )
        return revoked

    def detect_token_reuse(self, record: TokenPairModel) -> bool:
        # duas linhas vivas na mesma família não deveriam coexistir
        if not record.refresh_secret_digest or not record.family_id:
            return False

        if not self._repo.exists_other_live_in_family(family_id=record.family_id, exclude_id=record.id):
            return False

        self.handle_revoked_presentation(record)
        return True
