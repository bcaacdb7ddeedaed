"""
Fixtures compartilhadas: SQLite em memória, app Flask e um relógio controlável.
"""

import os
from datetime import datetime, timedelta

# precisa acontecer antes de importar journal_api (settings/engine leem o ambiente)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PASSWORD_ITERATIONS"] = "1000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from journal_api.config.settings import TokenConfig  # noqa: E402
from journal_api.infrastructure.database.session import drop_db, get_engine, init_db  # noqa: E402
from journal_api.main import API_PREFIX, create_app  # noqa: E402
from journal_api.repositories.token_pair_repository import TokenPairRepository  # noqa: E402
from journal_api.repositories.user_repository import UserRepository  # noqa: E402
from journal_api.services.token_pair_manager import TokenPairManager  # noqa: E402
from journal_api.services.user_service import UserService  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 2, 20, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _fresh_schema():
    drop_db()
    init_db()
    yield


@pytest.fixture(scope="session")
def app():
    flask_app = create_app()
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api():
    return API_PREFIX


@pytest.fixture
def session():
    s = Session(bind=get_engine(), expire_on_commit=False)
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_config():
    return TokenConfig(access_ttl=timedelta(hours=2), refresh_ttl=timedelta(days=7), secret_bytes=32, keep_count=5)


@pytest.fixture
def repo(session):
    return TokenPairRepository(session)


@pytest.fixture
def manager(repo, token_config, clock):
    return TokenPairManager(repo=repo, config=token_config, clock=clock)


def _make_user(session, email: str) -> int:
    user = UserService(UserRepository(session), password_iterations=1000).create_user(
        name="Hana", email=email, password="secret123"
    )
    return user.id


@pytest.fixture
def user_id(session):
    return _make_user(session, "hana@example.com")


@pytest.fixture
def other_user_id(session):
    return _make_user(session, "ken@example.com")


@pytest.fixture
def signup(client, api):
    def _signup(email: str = "hana@example.com", password: str = "secret123", name: str = "Hana"):
        resp = client.post(f"{api}/auth/signup", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _signup


@pytest.fixture
def auth_headers():
    def _headers(access_token: str) -> dict:
        return {"Authorization": f"Bearer {access_token}"}

    return _headers
