# journal_api/repositories/user_repository.py

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id, UserModel.is_active.is_(True))
        return self._session.execute(stmt).scalar_one_or_none()

    def delete(self, user_id: int) -> bool:
        # tokens, chats e mensagens saem por ON DELETE CASCADE
        result = self._session.execute(delete(UserModel).where(UserModel.id == user_id))
        return (result.rowcount or 0) > 0
