# journal_api/services/login_throttle.py

import logging
from datetime import timedelta

from journal_api.core.clock import Clock, utcnow
from journal_api.core.exceptions import TooManyRequestsError
from journal_api.infrastructure.database.models.login_attempt_model import LoginAttemptModel
from journal_api.repositories.login_attempt_repository import LoginAttemptRepository

logger = logging.getLogger(__name__)


class LoginThrottle:
    """
    Limite de tentativas de login por email numa janela deslizante.

    Toda tentativa conta, com senha certa ou errada. A verificação acontece
    antes de conferir a senha; tentativas recusadas com 429 não são gravadas.
    """

    def __init__(
        self,
        *,
        repo: LoginAttemptRepository,
        limit: int,
        window: timedelta,
        clock: Clock = utcnow,
    ) -> None:
        self._repo = repo
        self._limit = limit
        self._window = window
        self._clock = clock

    @staticmethod
    def normalize(email: str) -> str:
        return email.strip().lower()

    def register_attempt(self, email: str) -> LoginAttemptModel:
        key = self.normalize(email)
        now = self._clock()

        if self._repo.count_since(email=key, since=now - self._window) >= self._limit:
            logger.warning("Login bloqueado por excesso de tentativas: limite=%s janela=%s", self._limit, self._window)
            raise TooManyRequestsError(
                "Muitas tentativas. Tente novamente em instantes.",
                retry_after=int(self._window.total_seconds()),
            )

        return self._repo.add(LoginAttemptModel(email=key, succeeded=False, attempted_at=now))

    def mark_succeeded(self, attempt: LoginAttemptModel) -> None:
        self._repo.mark_succeeded(attempt.id)
