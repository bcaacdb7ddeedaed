# journal_api/api/routes/chat_routes.py

from flask import Blueprint, g, jsonify, request

from journal_api.api.middlewares.auth_middleware import require_auth
from journal_api.api.schemas.chat_schema import (
    CreateMessageRequest,
    CreateMessageResponse,
    KeywordResponse,
    MessageListResponse,
    MessageResponse,
    SessionResponse,
)
from journal_api.core.audit.audit_actions import AuditAction
from journal_api.core.audit.audit_entities import AuditEntity
from journal_api.infrastructure.database.session import db_session
from journal_api.repositories.audit_log_repository import AuditLogRepository
from journal_api.repositories.chat_repository import ChatRepository
from journal_api.repositories.message_repository import MessageRepository
from journal_api.services.audit_service import AuditService
from journal_api.services.chat_service import DEFAULT_PAGE_SIZE, SENDER_ASSISTANT, SENDER_USER, ChatService, session_id_of

bp_chats = Blueprint("chats", __name__, url_prefix="/chats")


def _build_service(session) -> ChatService:
    return ChatService(chat_repo=ChatRepository(session), msg_repo=MessageRepository(session))


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def _pack_message(msg, chat) -> MessageResponse:
    return MessageResponse(
        id=msg.id,
        content=msg.content,
        role=SENDER_USER if msg.sender_kind == SENDER_USER else SENDER_ASSISTANT,
        session_id=session_id_of(chat),
        metadata=msg.llm_metadata,
        emotions=[
            {
                "name": keyword,
                "label": keyword,
                "intensity": float(msg.emotion_score) if msg.emotion_score is not None else None,
            }
            for keyword in (msg.emotion_keywords or [])
        ],
        created_at=msg.sent_at or msg.created_at,
        updated_at=msg.updated_at,
    )


@bp_chats.post("")
@require_auth
def create_message():
    payload = CreateMessageRequest.model_validate(request.get_json(force=True, silent=True) or {})

    with db_session() as session:
        chat, msg = _build_service(session).post_message(
            user_id=g.auth.user_id,
            content=payload.content,
            session_id=payload.session_id,
        )
        response = CreateMessageResponse(
            session_id=session_id_of(chat),
            chat_id=chat.id,
            user_message=_pack_message(msg, chat),
        )

    return jsonify(response.model_dump()), 201


@bp_chats.get("")
@require_auth
def list_messages():
    with db_session() as session:
        result = _build_service(session).list_messages(
            user_id=g.auth.user_id,
            session_id=request.args.get("session_id") or None,
            page=_int_arg("page", 1),
            per_page=_int_arg("per_page", DEFAULT_PAGE_SIZE),
        )
        response = MessageListResponse(
            messages=[_pack_message(msg, chat) for msg, chat in result["rows"]],
            total_count=result["total_count"],
            current_page=result["current_page"],
            total_pages=result["total_pages"],
        )

    return jsonify(response.model_dump()), 200


@bp_chats.get("/sessions")
@require_auth
def list_sessions():
    with db_session() as session:
        items = _build_service(session).list_sessions(user_id=g.auth.user_id)

    return jsonify({"sessions": [SessionResponse(**item).model_dump() for item in items]}), 200


@bp_chats.get("/sessions/<session_id>/keywords")
@require_auth
def session_keywords(session_id: str):
    with db_session() as session:
        keywords = _build_service(session).session_keywords(user_id=g.auth.user_id, session_id=session_id)

    return jsonify({"keywords": [KeywordResponse(**k).model_dump() for k in keywords]}), 200


@bp_chats.delete("/sessions/<session_id>")
@require_auth
def delete_session(session_id: str):
    with db_session() as session:
        deleted = _build_service(session).delete_session(user_id=g.auth.user_id, session_id=session_id)
        AuditService(AuditLogRepository(session)).log(
            entity_name=AuditEntity.CHAT,
            action_name=AuditAction.DELETED,
            user_id=g.auth.user_id,
            details=f"session_id={session_id} messages={deleted}",
        )

    return jsonify({"message": "Sessão removida.", "deleted_count": deleted}), 200


@bp_chats.delete("/<int:message_id>")
@require_auth
def delete_message(message_id: int):
    with db_session() as session:
        _build_service(session).delete_message(user_id=g.auth.user_id, message_id=message_id)
        AuditService(AuditLogRepository(session)).log(
            entity_name=AuditEntity.MESSAGE,
            entity_id=message_id,
            action_name=AuditAction.DELETED,
            user_id=g.auth.user_id,
        )

    return ("", 204)
