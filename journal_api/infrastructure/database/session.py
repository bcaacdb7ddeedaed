# journal_api/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from journal_api.config.settings import settings
from journal_api.infrastructure.database.base_model import BaseModel


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # testes/dev: uma única conexão compartilhada para o ":memory:"
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


_engine = _build_engine(settings.database_url)

_SessionLocal = sessionmaker(
    bind=_engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_engine() -> Engine:
    return _engine


def init_db() -> None:
    import journal_api.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.create_all(_engine)


def drop_db() -> None:
    import journal_api.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.drop_all(_engine)


@contextmanager
def db_session(*, commit_on: tuple[type[BaseException], ...] = ()) -> Iterator[Session]:
    """
    Commit no sucesso, rollback em erro.

    Exceções listadas em `commit_on` confirmam o que já foi escrito antes de
    propagar (ex.: revogação da família em reutilização de refresh token).
    """
    session: Session = _SessionLocal()
    try:
        yield session
        session.commit()
    except commit_on:
        session.commit()
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
