# journal_api/repositories/login_attempt_repository.py

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.login_attempt_model import LoginAttemptModel


class LoginAttemptRepository(BaseRepository[LoginAttemptModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def count_since(self, *, email: str, since: datetime) -> int:
        stmt = select(func.count(LoginAttemptModel.id)).where(
            LoginAttemptModel.email == email,
            LoginAttemptModel.attempted_at >= since,
        )
        return int(self._session.execute(stmt).scalar_one())

    def mark_succeeded(self, attempt_id: int) -> None:
        self._session.execute(
            update(LoginAttemptModel).where(LoginAttemptModel.id == attempt_id).values(succeeded=True)
        )
