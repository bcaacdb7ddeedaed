# journal_api/repositories/chat_repository.py

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from journal_api.core.base_repository import BaseRepository
from journal_api.infrastructure.database.models.chat_model import ChatModel
from journal_api.infrastructure.database.models.message_model import MessageModel


class ChatRepository(BaseRepository[ChatModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_title(self, *, user_id: int, title: str) -> ChatModel | None:
        stmt = select(ChatModel).where(ChatModel.user_id == user_id, ChatModel.title == title)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_session_rows(self, *, user_id: int):
        # só chats com mensagens, ordenados pela última atividade
        last_message_at = func.max(MessageModel.sent_at).label("last_message_at")
        message_count = func.count(MessageModel.id).label("message_count")

        stmt = (
            select(ChatModel, last_message_at, message_count)
            .join(MessageModel, MessageModel.chat_id == ChatModel.id)
            .where(ChatModel.user_id == user_id)
            .group_by(ChatModel.id)
            .order_by(last_message_at.desc(), ChatModel.id.desc())
        )
        return list(self._session.execute(stmt).all())  # (chat, last_message_at, message_count)

    def delete(self, chat_id: int) -> bool:
        result = self._session.execute(delete(ChatModel).where(ChatModel.id == chat_id))
        return (result.rowcount or 0) > 0
