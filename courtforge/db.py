"""Database setup for Courtforge using SQLAlchemy 2.0 style.

Provides an engine factory (SQLite by default, any SQLAlchemy URL via
DATABASE_URL), a Session factory, the Base declarative class and a
schema bootstrap for dev and tests.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import get_settings


class Base(DeclarativeBase):
    """Base declarative class for all ORM models."""


def get_engine(echo: bool | None = None, url: str | None = None) -> Engine:
    settings = get_settings()
    database_url = url or settings.database_url
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(
        database_url,
        echo=echo if echo is not None else settings.echo_sql,
        connect_args=connect_args,
        future=True,
    )


SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Example:
        with session_scope() as session:
            session.add(obj)
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema() -> None:
    """Create all tables on the current engine (dev/test convenience; prod uses alembic)."""
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(get_engine())
