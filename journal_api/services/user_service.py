# journal_api/services/user_service.py

from journal_api.core.clock import Clock, utcnow
from journal_api.core.exceptions import AppError, ConflictError, NotFoundError, UnauthorizedError
from journal_api.infrastructure.database.models.user_model import UserModel
from journal_api.infrastructure.security.password_hasher import PasswordHasher
from journal_api.repositories.user_repository import UserRepository


class UserService:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        password_iterations: int | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._user_repository = user_repository
        self._password_iterations = password_iterations
        self._clock = clock

    def create_user(self, *, name: str, email: str, password: str) -> UserModel:
        normalized = email.strip().lower()
        if self._user_repository.get_by_email(normalized) is not None:
            raise ConflictError("Email já cadastrado.")

        try:
            password_hash, password_salt, algo, iterations = PasswordHasher.hash_password(
                password, iterations=self._password_iterations
            )
        except ValueError as e:
            raise AppError(str(e), status_code=422) from e

        model = UserModel(
            name=name.strip(),
            email=normalized,
            password_algo=algo,
            password_iterations=iterations,
            password_hash=password_hash,
            password_salt=password_salt,
            created_at=self._clock(),
            updated_at=None,
            last_login=None,
            is_active=True,
        )
        return self._user_repository.add(model)

    def get_user(self, user_id: int) -> UserModel:
        user = self._user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("Usuário não encontrado.")
        return user

    def update_profile(self, *, user_id: int, name: str | None = None, email: str | None = None) -> UserModel:
        user = self.get_user(user_id)

        if email is not None and email.strip().lower() != user.email:
            if self._user_repository.get_by_email(email) is not None:
                raise ConflictError("Email já cadastrado.")
            user.email = email.strip().lower()

        if name is not None:
            user.name = name.strip()

        user.updated_at = self._clock()
        return user

    def authenticate(self, *, email: str, password: str) -> UserModel:
        user = self._user_repository.get_by_email(email)
        if user is None or not user.is_active:
            raise UnauthorizedError("Credenciais inválidas.")

        ok = PasswordHasher.verify_password(
            password,
            password_hash=user.password_hash,
            password_salt=user.password_salt,
            iterations=user.password_iterations,
            algo=user.password_algo,
        )
        if not ok:
            raise UnauthorizedError("Credenciais inválidas.")

        user.last_login = self._clock()
        return user
