from journal_api.infrastructure.database.models.token_pair_model import TokenPairModel
from journal_api.infrastructure.security.token_codec import TokenCodec
from journal_api.services.reuse_detector import REUSE_REASON, ReuseDetector


def _live_row(user_id: int, family_id: str, now) -> TokenPairModel:
    return TokenPairModel(
        user_id=user_id,
        family_id=family_id,
        access_secret_digest=TokenCodec.digest(TokenCodec.generate_secret()),
        refresh_secret_digest=TokenCodec.digest(TokenCodec.generate_secret()),
        access_expires_at=now,
        refresh_expires_at=now,
        created_at=now,
        updated_at=now,
    )


def test_handle_revoked_presentation_revokes_whole_family(manager, repo, clock, user_id):
    pair = manager.issue(user_id)
    manager.rotate(pair.refresh_token)
    record = repo.get_by_refresh_digest(TokenCodec.digest(pair.refresh_token))

    detector = ReuseDetector(repo=repo, clock=clock)
    assert detector.handle_revoked_presentation(record) == 1

    family = repo.list_family(record.family_id)
    assert all(r.is_revoked for r in family)
    assert family[-1].revoked_reason == REUSE_REASON


def test_detect_token_reuse_clean_family(manager, repo, clock, user_id):
    pair = manager.issue(user_id)
    record = repo.get_by_refresh_digest(TokenCodec.digest(pair.refresh_token))

    assert manager.detect_token_reuse(record) is False
    assert not record.is_revoked


def test_detect_token_reuse_two_live_rows(manager, repo, clock, user_id):
    pair = manager.issue(user_id)
    record = repo.get_by_refresh_digest(TokenCodec.digest(pair.refresh_token))
    repo.add(_live_row(user_id, record.family_id, clock.now))

    assert manager.detect_token_reuse(record) is True
    assert all(r.is_revoked for r in repo.list_family(record.family_id))


def test_detect_token_reuse_ignores_records_without_refresh(repo, clock, user_id):
    row = _live_row(user_id, "f-1", clock.now)
    row.refresh_secret_digest = None
    repo.add(row)
    repo.add(_live_row(user_id, "f-1", clock.now))

    assert ReuseDetector(repo=repo, clock=clock).detect_token_reuse(row) is False
