"""Database session management for the SQLite media store.

Engines and session factories are cached per resolved database path so
every store opened on the same file shares one connection pool.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from redate.db.schema import Base

DEFAULT_DB_PATH = Path("data/redate.db")

_engine_cache: dict[str, Engine] = {}


def get_engine(db_path: Path | None = None) -> Engine:
    """Get the cached SQLAlchemy engine for a database file.

    File databases use the default connection pool, so each thread checks
    out its own sqlite3 connection. SqliteAssetStore additionally confines
    all of its statements to its worker thread; check_same_thread=False only
    lets pooled connections be reused by a later worker after close.

    Args:
        db_path: Path to SQLite database file. Defaults to data/redate.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    db_path = Path(db_path or DEFAULT_DB_PATH)
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    _engine_cache[cache_key] = engine
    return engine


def create_memory_engine() -> Engine:
    """Create a private in-memory engine with the schema installed.

    An in-memory database lives in a single connection, hence StaticPool.
    Callers must not use it from two threads at once.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine.

    Objects stay loaded after commit so domain conversion can happen
    outside the transaction.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def transaction(factory: sessionmaker) -> Generator[Session, None, None]:
    """Run a unit of work in one transaction.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with transaction(factory) as session:
            session.add(record)
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create the schema if it does not exist yet."""
    Base.metadata.create_all(engine)
