# journal_api/repositories/message_repository.py

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.chat_model import ChatModel
from journal_api.infrastructure.database.models.message_model import MessageModel


class MessageRepository(BaseRepository[MessageModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def list_by_chat(self, *, chat_id: int, limit: int, offset: int) -> list[MessageModel]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.chat_id == chat_id)
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(self._session.execute(stmt).scalars().all())

    def count_by_chat(self, chat_id: int) -> int:
        stmt = select(func.count(MessageModel.id)).where(MessageModel.chat_id == chat_id)
        return int(self._session.execute(stmt).scalar_one())

    def list_rows_by_user(self, *, user_id: int, limit: int, offset: int):
        stmt = (
            select(MessageModel, ChatModel)
            .join(ChatModel, ChatModel.id == MessageModel.chat_id)
            .where(ChatModel.user_id == user_id)
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(self._session.execute(stmt).all())  # (msg, chat)

    def count_by_user(self, user_id: int) -> int:
        stmt = (
            select(func.count(MessageModel.id))
            .join(ChatModel, ChatModel.id == MessageModel.chat_id)
            .where(ChatModel.user_id == user_id)
        )
        return int(self._session.execute(stmt).scalar_one())

    def first_user_message(self, *, chat_id: int) -> MessageModel | None:
        stmt = (
            select(MessageModel)
            .where(MessageModel.chat_id == chat_id, MessageModel.sender_kind == "user")
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
            .limit(1)
        )
        return self._session.execute(stmt).scalars().first()

    def list_user_contents(self, *, chat_id: int) -> list[str]:
        stmt = (
            select(MessageModel.content)
            .where(MessageModel.chat_id == chat_id, MessageModel.sender_kind == "user")
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def get_owned(self, *, message_id: int, user_id: int) -> MessageModel | None:
        stmt = (
            select(MessageModel)
            .join(ChatModel, ChatModel.id == MessageModel.chat_id)
            .where(MessageModel.id == message_id, ChatModel.user_id == user_id)
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def delete(self, message_id: int) -> bool:
        result = self._session.execute(delete(MessageModel).where(MessageModel.id == message_id))
        return (result.rowcount or 0) > 0

    def delete_by_chat(self, chat_id: int) -> int:
        result = self._session.execute(delete(MessageModel).where(MessageModel.chat_id == chat_id))
        return int(result.rowcount or 0)
