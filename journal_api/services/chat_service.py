# journal_api/services/chat_service.py

import math
from datetime import timezone
from uuid import uuid4

from journal_api.core.clock import Clock, utcnow
from journal_api.core.exceptions import AppError, NotFoundError
from journal_api.infrastructure.database.models.chat_model import ChatModel
from journal_api.infrastructure.database.models.message_model import MessageModel
from journal_api.repositories.chat_repository import ChatRepository
from journal_api.repositories.message_repository import MessageRepository
from journal_api.services.keyword_extractor import KeywordExtractor

SESSION_PREFIX = "session:"
SENDER_USER = "user"
SENDER_ASSISTANT = "assistant"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_MESSAGE_LENGTH = 10000
PREVIEW_LENGTH = 100


def session_id_of(chat: ChatModel) -> str:
    if chat.title.startswith(SESSION_PREFIX):
        return chat.title[len(SESSION_PREFIX):]
    return f"chat-{chat.id}"


def _truncate(text: str | None, length: int) -> str | None:
    if text is None or len(text) <= length:
        return text
    return text[: length - 3] + "..."


class ChatService:
    """Diário em sessões de chat. A identidade chega já validada pelo require_auth."""

    def __init__(
        self,
        *,
        chat_repo: ChatRepository,
        msg_repo: MessageRepository,
        keyword_extractor: KeywordExtractor | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._chat_repo = chat_repo
        self._msg_repo = msg_repo
        self._keywords = keyword_extractor or KeywordExtractor()
        self._clock = clock

    def _find_session(self, *, user_id: int, session_id: str) -> ChatModel:
        chat = self._chat_repo.get_by_title(user_id=user_id, title=f"{SESSION_PREFIX}{session_id}")
        if chat is None:
            raise NotFoundError("Sessão não encontrada.")
        return chat

    def _find_or_create_session(self, *, user_id: int, session_id: str) -> ChatModel:
        title = f"{SESSION_PREFIX}{session_id}"
        chat = self._chat_repo.get_by_title(user_id=user_id, title=title)
        if chat is not None:
            return chat
        return self._chat_repo.add(ChatModel(user_id=user_id, title=title, created_at=self._clock()))

    def post_message(self, *, user_id: int, content: str, session_id: str | None = None) -> tuple[ChatModel, MessageModel]:
        text = (content or "").strip()
        if not text:
            raise AppError("Mensagem vazia.", status_code=422)
        if len(text) > MAX_MESSAGE_LENGTH:
            raise AppError(f"Mensagem excede {MAX_MESSAGE_LENGTH} caracteres.", status_code=422)

        chat = self._find_or_create_session(user_id=user_id, session_id=session_id or str(uuid4()))

        now = self._clock()
        msg = self._msg_repo.add(
            MessageModel(
                chat_id=chat.id,
                sender_id=user_id,
                sender_kind=SENDER_USER,
                content=text,
                llm_metadata={"timestamp": int(now.replace(tzinfo=timezone.utc).timestamp()), "device": "web"},
                emotion_keywords=None,
                emotion_score=None,
                sent_at=now,
                created_at=now,
            )
        )
        chat.updated_at = now
        return chat, msg

    def list_messages(
        self,
        *,
        user_id: int,
        session_id: str | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> dict:
        page = max(1, page)
        per_page = max(1, min(per_page, MAX_PAGE_SIZE))
        offset = (page - 1) * per_page

        if session_id:
            chat = self._find_session(user_id=user_id, session_id=session_id)
            total = self._msg_repo.count_by_chat(chat.id)
            rows = [(m, chat) for m in self._msg_repo.list_by_chat(chat_id=chat.id, limit=per_page, offset=offset)]
        else:
            total = self._msg_repo.count_by_user(user_id)
            rows = self._msg_repo.list_rows_by_user(user_id=user_id, limit=per_page, offset=offset)

        return {
            "rows": rows,
            "total_count": total,
            "current_page": page,
            "total_pages": math.ceil(total / per_page) if total else 0,
        }

    def list_sessions(self, *, user_id: int) -> list[dict]:
        out = []
        for chat, last_message_at, message_count in self._chat_repo.list_session_rows(user_id=user_id):
            first = self._msg_repo.first_user_message(chat_id=chat.id)
            out.append(
                {
                    "session_id": session_id_of(chat),
                    "chat_id": chat.id,
                    "last_message_at": last_message_at,
                    "message_count": int(message_count),
                    "preview": _truncate(first.content if first else None, PREVIEW_LENGTH),
                }
            )
        return out

    def session_keywords(self, *, user_id: int, session_id: str) -> list[dict]:
        chat = self._find_session(user_id=user_id, session_id=session_id)
        return self._keywords.extract_from_texts(self._msg_repo.list_user_contents(chat_id=chat.id))

    def delete_session(self, *, user_id: int, session_id: str) -> int:
        chat = self._find_session(user_id=user_id, session_id=session_id)
        deleted = self._msg_repo.delete_by_chat(chat.id)
        self._chat_repo.delete(chat.id)
        return deleted

    def delete_message(self, *, user_id: int, message_id: int) -> None:
        msg = self._msg_repo.get_owned(message_id=message_id, user_id=user_id)
        if msg is None:
            raise NotFoundError("Mensagem não encontrada.")
        self._msg_repo.delete(msg.id)
