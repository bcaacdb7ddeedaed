import re

import pytest

from journal_api.infrastructure.security.token_codec import TokenCodec


def test_generate_secret_is_hex_with_32_bytes_of_entropy():
    secret = TokenCodec.generate_secret()
    assert re.fullmatch(r"[0-9a-f]{64}", secret)


@pytest.mark.parametrize("num_bytes", [0, 16, 31])
def test_generate_secret_rejects_low_entropy(num_bytes):
    with pytest.raises(ValueError):
        TokenCodec.generate_secret(num_bytes)


def test_generate_secret_accepts_larger_sizes():
    assert len(TokenCodec.generate_secret(48)) == 96


def test_no_collisions_in_10000_samples():
    samples = {TokenCodec.generate_secret() for _ in range(10_000)}
    assert len(samples) == 10_000


def test_digest_is_deterministic_sha256_hex():
    secret = "a" * 64
    assert TokenCodec.digest(secret) == TokenCodec.digest(secret)
    assert TokenCodec.digest("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_digest_differs_from_secret_and_between_secrets():
    a, b = TokenCodec.generate_secret(), TokenCodec.generate_secret()
    assert TokenCodec.digest(a) != a
    assert TokenCodec.digest(a) != TokenCodec.digest(b)
    assert len(TokenCodec.digest(a)) == TokenCodec.DIGEST_LENGTH


def test_digest_handles_empty_and_unicode():
    assert len(TokenCodec.digest("")) == 64
    assert len(TokenCodec.digest("日記トークン")) == 64

