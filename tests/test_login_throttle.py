from datetime import timedelta

import pytest

from journal_api.core.exceptions import TooManyRequestsError
from journal_api.repositories.login_attempt_repository import LoginAttemptRepository
from journal_api.services.login_throttle import LoginThrottle


@pytest.fixture
def throttle(session, clock):
    return LoginThrottle(repo=LoginAttemptRepository(session), limit=3, window=timedelta(minutes=1), clock=clock)


def test_blocks_after_limit_inside_window(throttle):
    for _ in range(3):
        throttle.register_attempt("hana@example.com")

    with pytest.raises(TooManyRequestsError) as exc:
        throttle.register_attempt("hana@example.com")
    assert exc.value.retry_after == 60


def test_email_is_normalized(throttle):
    throttle.register_attempt("Hana@Example.com")
    throttle.register_attempt("  hana@example.com ")
    throttle.register_attempt("HANA@EXAMPLE.COM")

    with pytest.raises(TooManyRequestsError):
        throttle.register_attempt("hana@example.com")


def test_other_emails_are_independent(throttle):
    for _ in range(3):
        throttle.register_attempt("hana@example.com")

    assert throttle.register_attempt("ken@example.com").email == "ken@example.com"


def test_window_slides(throttle, clock):
    for _ in range(3):
        throttle.register_attempt("hana@example.com")

    clock.advance(seconds=61)
    throttle.register_attempt("hana@example.com")


def test_blocked_attempts_are_not_recorded(throttle, session, clock):
    repo = LoginAttemptRepository(session)
    for _ in range(3):
        throttle.register_attempt("hana@example.com")
    for _ in range(5):
        with pytest.raises(TooManyRequestsError):
            throttle.register_attempt("hana@example.com")

    assert repo.count_since(email="hana@example.com", since=clock.now - timedelta(hours=1)) == 3


def test_mark_succeeded(throttle, session):
    attempt = throttle.register_attempt("hana@example.com")
    throttle.mark_succeeded(attempt)

    session.refresh(attempt)
    assert attempt.succeeded is True
