# journal_api/config/settings.py
import os
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class TokenConfig:
    """Parâmetros do par access/refresh, injetados no TokenPairManager."""

    access_ttl: timedelta
    refresh_ttl: timedelta
    secret_bytes: int = 32
    keep_count: int = 5


class Settings(BaseSettings):
    # 🔵 Banco principal (PostgreSQL); DATABASE_URL tem prioridade
    database_url_override: str | None = os.getenv("DATABASE_URL")
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "journal"
    db_user: str = "postgres"
    db_password: str = ""

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    app_prefix: str = ""
    cors_origins_raw: str = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")

    # 🟢 Tokens opacos (access curto, refresh longo)
    access_token_ttl_minutes: int = 120
    refresh_token_ttl_minutes: int = 60 * 24 * 7
    token_secret_bytes: int = 32
    token_keep_count: int = 5

    password_iterations: int = 600_000

    login_rate_limit: int = 10
    login_rate_window_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("token_secret_bytes")
    @classmethod
    def min_entropy(cls, v: int) -> int:
        if v < 32:
            raise ValueError("token_secret_bytes deve ser >= 32.")
        return v

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]

    def token_config(self) -> TokenConfig:
        return TokenConfig(
            access_ttl=timedelta(minutes=self.access_token_ttl_minutes),
            refresh_ttl=timedelta(minutes=self.refresh_token_ttl_minutes),
            secret_bytes=self.token_secret_bytes,
            keep_count=self.token_keep_count,
        )


settings = Settings()
