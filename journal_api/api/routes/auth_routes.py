from datetime import timedelta

from flask import Blueprint, g, jsonify, request

from journal_api.api.middlewares.auth_middleware import build_token_manager, get_bearer_token, require_auth
from journal_api.api.schemas.auth_schema import (
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    SignupRequest,
    TokenPairResponse,
)
from journal_api.api.schemas.user_schema import UserResponse
from journal_api.config.settings import settings
from journal_api.core.audit.audit_actions import AuditAction
from journal_api.core.audit.audit_entities import AuditEntity
from journal_api.core.exceptions import TokenReuseDetectedError, UnauthorizedError
from journal_api.infrastructure.database.session import db_session
from journal_api.repositories.audit_log_repository import AuditLogRepository
from journal_api.repositories.login_attempt_repository import LoginAttemptRepository
from journal_api.repositories.user_repository import UserRepository
from journal_api.services.audit_service import AuditService
from journal_api.services.login_throttle import LoginThrottle
from journal_api.services.user_service import UserService

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


def _build_user_service(session) -> UserService:
    return UserService(UserRepository(session), password_iterations=settings.password_iterations)


def _build_audit(session) -> AuditService:
    return AuditService(AuditLogRepository(session))


def _build_throttle(session) -> LoginThrottle:
    return LoginThrottle(
        repo=LoginAttemptRepository(session),
        limit=settings.login_rate_limit,
        window=timedelta(seconds=settings.login_rate_window_seconds),
    )


def _user_response(user) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email)


@bp_auth.post("/signup")
def signup():
    payload = SignupRequest.model_validate(request.get_json(force=True, silent=True) or {})

    with db_session() as session:
        user = _build_user_service(session).create_user(
            name=payload.name, email=payload.email, password=payload.password
        )
        pair = build_token_manager(session).issue(user.id)

        _build_audit(session).log_auth(AuditAction.SIGNUP, user_id=user.id, family_id=pair.family_id)
        response = AuthResponse(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            user=_user_response(user),
        )

    return jsonify(response.model_dump()), 201


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(force=True, silent=True) or {})

    # a tentativa e o LOGIN_FAILED precisam sobreviver ao 401
    with db_session(commit_on=(UnauthorizedError,)) as session:
        audit = _build_audit(session)
        throttle = _build_throttle(session)

        # antes da senha: tentativas erradas também contam
        attempt = throttle.register_attempt(payload.email)
        try:
            user = _build_user_service(session).authenticate(email=payload.email, password=payload.password)
        except UnauthorizedError:
            audit.log_auth(AuditAction.LOGIN_FAILED, user_id=None)
            raise

        throttle.mark_succeeded(attempt)
        manager = build_token_manager(session)

        # mantém só os N pares mais recentes ativos
        manager.cleanup_old(user.id)
        pair = manager.issue(user.id)

        audit.log_auth(AuditAction.LOGIN_SUCCESS, user_id=user.id, family_id=pair.family_id)
        response = AuthResponse(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            user=_user_response(user),
        )

    return jsonify(response.model_dump()), 200


@bp_auth.post("/refresh")
def refresh():
    payload = RefreshRequest.model_validate(request.get_json(force=True, silent=True) or {})

    # a revogação da família em caso de reutilização precisa ser persistida
    with db_session(commit_on=(TokenReuseDetectedError,)) as session:
        audit = _build_audit(session)
        manager = build_token_manager(session)
        try:
            pair = manager.rotate(payload.refresh_token)
        except TokenReuseDetectedError as e:
            audit.log(
                entity_name=AuditEntity.TOKEN_PAIR,
                action_name=AuditAction.TOKEN_REUSE,
                user_id=e.user_id,
                details=f"family_id={e.family_id}",
            )
            raise

        audit.log_auth(AuditAction.REFRESH_SUCCESS, user_id=pair.user_id, family_id=pair.family_id)

    return jsonify(TokenPairResponse(access_token=pair.access_token, refresh_token=pair.refresh_token).model_dump()), 200


@bp_auth.post("/logout")
def logout():
    token = get_bearer_token()

    with db_session() as session:
        record = build_token_manager(session).logout(token, everywhere=True)
        _build_audit(session).log_auth(AuditAction.LOGOUT, user_id=record.user_id, family_id=record.family_id)

    return jsonify({"message": "Logout realizado."}), 200


@bp_auth.get("/me")
@require_auth
def me():
    return jsonify(_user_response(g.current_user).model_dump()), 200
