# journal_api/infrastructure/security/token_codec.py

import hashlib
import secrets


class TokenCodec:
    """Segredos opacos (CSPRNG) e digest SHA-256 usado como chave de busca."""

    MIN_SECRET_BYTES = 32
    DEFAULT_SECRET_BYTES = 32
    DIGEST_LENGTH = 64

    @classmethod
    def generate_secret(cls, num_bytes: int | None = None) -> str:
        n = cls.DEFAULT_SECRET_BYTES if num_bytes is None else num_bytes
        if n < cls.MIN_SECRET_BYTES:
            raise ValueError(f"Segredo precisa de pelo menos {cls.MIN_SECRET_BYTES} bytes de entropia.")
        return secrets.token_hex(n)

    @staticmethod
    def digest(secret: str) -> str:
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()

