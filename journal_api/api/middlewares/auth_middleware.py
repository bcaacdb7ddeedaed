from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from journal_api.config.settings import settings
from journal_api.core.exceptions import InvalidOrExpiredTokenError, MissingTokenError
from journal_api.infrastructure.database.session import db_session
from journal_api.repositories.token_pair_repository import TokenPairRepository
from journal_api.repositories.user_repository import UserRepository
from journal_api.services.token_pair_manager import TokenPairManager

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    token_id: int
    family_id: str


def get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise MissingTokenError("Cabeçalho de autenticação ausente.")


def build_token_manager(session) -> TokenPairManager:
    return TokenPairManager(repo=TokenPairRepository(session), config=settings.token_config())


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = get_bearer_token()

        with db_session() as session:
            record = build_token_manager(session).authenticate(token)

            user = UserRepository(session).get_by_id(record.user_id)
            if user is None:
                raise InvalidOrExpiredTokenError()

            g.auth = AuthContext(user_id=user.id, token_id=record.id, family_id=record.family_id)
            g.current_user = user

        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
