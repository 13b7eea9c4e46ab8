"""Database engine and session helpers for the sample API."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from errorguard.core.errors import DatabaseError


class Base(DeclarativeBase):
    """Declarative base for sample ORM models."""


def build_engine(database_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def database_operation(session: Session, action: str) -> Generator[None, None, None]:
    """Roll back on SQLAlchemy failures and surface them as :class:`DatabaseError`.

    Integrity violations are re-raised untouched so callers can map them to
    a domain error.
    """
    try:
        yield
    except IntegrityError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        raise DatabaseError(f"Failed to {action}") from exc
