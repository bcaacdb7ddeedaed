# journal_api/core/exceptions.py

class AppError(Exception):
    code = "error"

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    code = "not_found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ConflictError(AppError):
    code = "conflict"

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class UnauthorizedError(AppError):
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    code = "forbidden"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=403)


class TooManyRequestsError(AppError):
    code = "too_many_requests"

    def __init__(self, message: str = "Too many requests", *, retry_after: int | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


# -------------------------
# Tokens
# -------------------------

class MissingTokenError(UnauthorizedError):
    code = "missing_token"

    def __init__(self, message: str = "Token ausente.") -> None:
        super().__init__(message)


class InvalidOrExpiredTokenError(UnauthorizedError):
    # mensagem única: não revela se o token não existe, expirou ou foi revogado
    code = "invalid_or_expired"

    def __init__(self, message: str = "Token inválido ou expirado.") -> None:
        super().__init__(message)


class TokenReuseDetectedError(UnauthorizedError):
    code = "reuse_detected"

    def __init__(
        self,
        message: str = "Reutilização de token detectada.",
        *,
        family_id: str | None = None,
        user_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.family_id = family_id
        self.user_id = user_id


class IntegrityViolationError(AppError):
    code = "integrity_violation"

    def __init__(self, message: str = "Violação de integridade no armazenamento de tokens.") -> None:
        super().__init__(message, status_code=500)
