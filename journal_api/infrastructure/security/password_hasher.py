# journal_api/infrastructure/security/password_hasher.py

import base64
import binascii
import hashlib
import hmac
import secrets


class PasswordHasher:
    DEFAULT_ALGO = "pbkdf2_sha256"
    DEFAULT_ITERATIONS = 600_000
    SALT_BYTES = 16
    MIN_LENGTH = 6

    @classmethod
    def hash_password(
        cls, password: str, *, iterations: int | None = None
    ) -> tuple[str, str, str, int]:
        if not password or len(password) < cls.MIN_LENGTH:
            raise ValueError(f"Senha inválida (mín. {cls.MIN_LENGTH} caracteres).")

        it = iterations or cls.DEFAULT_ITERATIONS
        salt = secrets.token_bytes(cls.SALT_BYTES)
        dk = cls._derive(password, salt, it)

        return (
            base64.b64encode(dk).decode("utf-8"),
            base64.b64encode(salt).decode("utf-8"),
            cls.DEFAULT_ALGO,
            it,
        )

    @classmethod
    def verify_password(
        cls,
        password: str,
        *,
        password_hash: str,
        password_salt: str,
        iterations: int,
        algo: str,
    ) -> bool:
        if algo != cls.DEFAULT_ALGO:
            return False

        try:
            salt = base64.b64decode(password_salt.encode("utf-8"), validate=True)
            expected = base64.b64decode(password_hash.encode("utf-8"), validate=True)
        except (binascii.Error, ValueError):
            return False

        return hmac.compare_digest(cls._derive(password, salt, iterations), expected)

    @staticmethod
    def _derive(password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
