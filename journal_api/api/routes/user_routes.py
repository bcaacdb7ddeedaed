# journal_api/api/routes/user_routes.py

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from journal_api.api.middlewares.auth_middleware import require_auth
from journal_api.api.schemas.user_schema import UpdateProfileRequest, UserDetailResponse
from journal_api.core.audit.audit_actions import AuditAction
from journal_api.core.audit.audit_entities import AuditEntity
from journal_api.infrastructure.database.session import db_session
from journal_api.repositories.audit_log_repository import AuditLogRepository
from journal_api.repositories.user_repository import UserRepository
from journal_api.services.audit_service import AuditService
from journal_api.services.user_service import UserService

bp_users = Blueprint("users", __name__, url_prefix="/users")


def _detail(user) -> dict:
    return UserDetailResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    ).model_dump()


@bp_users.get("/me")
@require_auth
def me():
    return jsonify(_detail(g.current_user)), 200


@bp_users.patch("/me")
@require_auth
def update_me():
    payload = UpdateProfileRequest.model_validate(request.get_json(force=True, silent=True) or {})
    data = payload.model_dump(exclude_none=True)

    with db_session() as session:
        user = UserService(UserRepository(session)).update_profile(user_id=g.auth.user_id, **data)

        AuditService(AuditLogRepository(session)).log(
            entity_name=AuditEntity.USER,
            entity_id=user.id,
            action_name=AuditAction.UPDATED,
            user_id=user.id,
            details=f"fields={','.join(sorted(data))}",
        )
        body = _detail(user)

    return jsonify({"user": body, "message": "Perfil atualizado."}), 200
