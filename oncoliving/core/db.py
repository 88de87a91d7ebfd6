# oncoliving/core/db.py
"""
Engine and session handling.

The app runs on one process-wide engine, created lazily from
settings.DATABASE_URL. `use_engine` swaps it (tests, one-off scripts against
another database) and hands back the previous one so it can be restored.
"""
from __future__ import annotations

from typing import Any, Generator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from oncoliving.core.settings import settings

# every table must be on SQLModel.metadata before create_all
from oncoliving.models import db_models  # noqa: F401

_IN_MEMORY = ("sqlite://", "sqlite:///:memory:")

_engine: Optional[Engine] = None


def make_engine(url: Optional[str] = None, **kwargs: Any) -> Engine:
    """
    Build an engine for `url` (default: settings.DATABASE_URL).

    sqlite connections are shared across the threadpool FastAPI runs sync
    endpoints in; an in-memory database keeps one connection so every
    session sees the same data.
    """
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {}).setdefault("check_same_thread", False)
        if url in _IN_MEMORY:
            kwargs.setdefault("poolclass", StaticPool)
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = make_engine()
    return _engine


def use_engine(engine: Optional[Engine]) -> Optional[Engine]:
    """Install `engine` as the app engine; returns the one it replaces."""
    global _engine
    previous, _engine = _engine, engine
    return previous


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Create missing tables. Production schemas are owned by Alembic;
    this covers local sqlite and tests.
    """
    SQLModel.metadata.create_all(engine or get_engine())


def get_session() -> Generator[Session, None, None]:
    """Request-scoped session for Depends(get_session)."""
    with Session(get_engine()) as session:
        yield session
