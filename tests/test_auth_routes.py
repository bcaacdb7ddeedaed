from journal_api.config.settings import settings
from journal_api.core.audit.audit_actions import AuditAction
from journal_api.infrastructure.database.session import db_session
from journal_api.repositories.audit_log_repository import AuditLogRepository


def _actions() -> list[str]:
    with db_session() as session:
        return [log.action_name for log in AuditLogRepository(session).list_logs(limit=100)]


def test_signup_returns_pair_and_user(client, api, auth_headers, signup):
    body = signup()

    assert body["token_type"] == "Bearer"
    assert body["user"]["email"] == "hana@example.com"
    assert len(body["access_token"]) == 64

    resp = client.get(f"{api}/auth/me", headers=auth_headers(body["access_token"]))
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Hana"

    with db_session() as session:
        (log,) = AuditLogRepository(session).list_logs(action_name=AuditAction.SIGNUP)
        assert log.user_id == body["user"]["id"]
        assert log.details.startswith("family_id=")
        assert body["refresh_token"] not in log.details


def test_signup_duplicate_email(client, api, signup):
    signup()
    resp = client.post(
        f"{api}/auth/signup", json={"name": "Outra", "email": "HANA@example.com", "password": "secret123"}
    )
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_signup_invalid_payload(client, api):
    resp = client.post(f"{api}/auth/signup", json={"name": "", "email": "nope", "password": "1"})
    assert resp.status_code == 422
    assert resp.get_json()["code"] == "validation_error"


def test_login_success_and_failure(client, api, signup):
    signup()

    ok = client.post(f"{api}/auth/login", json={"email": "hana@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.get_json()["user"]["name"] == "Hana"

    bad = client.post(f"{api}/auth/login", json={"email": "hana@example.com", "password": "errada"})
    assert bad.status_code == 401
    assert bad.get_json()["code"] == "unauthorized"

    actions = _actions()
    assert AuditAction.LOGIN_SUCCESS in actions
    assert AuditAction.LOGIN_FAILED in actions


def test_login_rate_limited(client, api, signup, monkeypatch):
    signup()
    monkeypatch.setattr(settings, "login_rate_limit", 2)

    creds = {"email": "hana@example.com", "password": "secret123"}
    assert client.post(f"{api}/auth/login", json=creds).status_code == 200
    assert client.post(f"{api}/auth/login", json=creds).status_code == 200

    resp = client.post(f"{api}/auth/login", json=creds)
    assert resp.status_code == 429
    assert resp.get_json()["code"] == "too_many_requests"
    assert resp.headers["Retry-After"] == str(settings.login_rate_window_seconds)


def test_wrong_passwords_hit_rate_limit(client, api, signup, monkeypatch):
    signup()
    monkeypatch.setattr(settings, "login_rate_limit", 2)

    bad = {"email": "hana@example.com", "password": "errada"}
    codes = [client.post(f"{api}/auth/login", json=bad).status_code for _ in range(5)]
    assert codes == [401, 401, 429, 429, 429]

    # a senha certa também fica bloqueada, mesmo com o email em outra caixa
    good = {"email": "HANA@example.com", "password": "secret123"}
    assert client.post(f"{api}/auth/login", json=good).status_code == 429


def test_unknown_email_attempts_are_limited(client, api, monkeypatch):
    monkeypatch.setattr(settings, "login_rate_limit", 1)

    creds = {"email": "ninguem@example.com", "password": "qualquer"}
    assert client.post(f"{api}/auth/login", json=creds).status_code == 401
    assert client.post(f"{api}/auth/login", json=creds).status_code == 429


def test_refresh_rotates_pair(client, api, auth_headers, signup):
    body = signup()

    resp = client.post(f"{api}/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert resp.status_code == 200
    rotated = resp.get_json()
    assert rotated["refresh_token"] != body["refresh_token"]

    assert client.get(f"{api}/auth/me", headers=auth_headers(rotated["access_token"])).status_code == 200

    old = client.get(f"{api}/auth/me", headers=auth_headers(body["access_token"]))
    assert old.status_code == 401
    assert old.get_json()["code"] == "invalid_or_expired"


def test_refresh_reuse_kills_family(client, api, auth_headers, signup):
    body = signup()
    rotated = client.post(f"{api}/auth/refresh", json={"refresh_token": body["refresh_token"]}).get_json()

    replay = client.post(f"{api}/auth/refresh", json={"refresh_token": body["refresh_token"]})
    assert replay.status_code == 401
    assert replay.get_json()["code"] == "reuse_detected"

    # a revogação foi persistida mesmo com o 401
    resp = client.get(f"{api}/auth/me", headers=auth_headers(rotated["access_token"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_or_expired"

    assert AuditAction.TOKEN_REUSE in _actions()


def test_refresh_missing_token(client, api):
    resp = client.post(f"{api}/auth/refresh", json={"refresh_token": "  "})
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "missing_token"

    resp = client.post(f"{api}/auth/refresh", json={})
    assert resp.get_json()["code"] == "missing_token"


def test_refresh_unknown_token(client, api):
    resp = client.post(f"{api}/auth/refresh", json={"refresh_token": "0" * 64})
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_or_expired"


def test_logout_revokes_every_session(client, api, auth_headers, signup):
    first = signup()
    second = client.post(
        f"{api}/auth/login", json={"email": "hana@example.com", "password": "secret123"}
    ).get_json()

    resp = client.post(f"{api}/auth/logout", headers=auth_headers(first["access_token"]))
    assert resp.status_code == 200

    for token in (first["access_token"], second["access_token"]):
        assert client.get(f"{api}/auth/me", headers=auth_headers(token)).status_code == 401

    assert AuditAction.LOGOUT in _actions()


def test_missing_authorization_header(client, api):
    resp = client.get(f"{api}/auth/me")
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "missing_token"

    resp = client.get(f"{api}/auth/me", headers={"Authorization": "Token abc"})
    assert resp.get_json()["code"] == "missing_token"


def test_health(client):
    from journal_api.main import APP_PREFIX

    assert client.get(f"{APP_PREFIX}/health").get_json()["status"] == "ok"
    assert client.get(f"{APP_PREFIX}/health/db").get_json() == {"db": "ok", "dialect": "sqlite"}
