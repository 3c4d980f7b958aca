from __future__ import annotations

import os
import threading

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import StaticPool

# Seconds a SQLite writer waits on the file lock before failing.
SQLITE_BUSY_TIMEOUT_SECONDS = 15

_engines: dict[tuple[str, int], Engine] = {}
_engines_lock = threading.Lock()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set")
    return url


def _is_in_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def _create_sqlite_engine(url: URL) -> Engine:
    # Sync route handlers run on a thread pool, so connections cross threads.
    connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS}
    if _is_in_memory(url):
        # Every session must see the same in-memory database.
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args)


def _create_engine(database_url: str, connect_timeout: int) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return _create_sqlite_engine(url)
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": connect_timeout},
    )


def get_engine(timeout_seconds: float = 1.0) -> Engine:
    """Return the engine for ``DATABASE_URL``, building it on first use."""
    key = (_database_url(), max(1, int(timeout_seconds)))
    with _engines_lock:
        engine = _engines.get(key)
        if engine is None:
            engine = _create_engine(*key)
            _engines[key] = engine
        return engine


def dispose_engines() -> None:
    """Close every cached engine; the next ``get_engine`` rereads ``DATABASE_URL``."""
    with _engines_lock:
        engines = list(_engines.values())
        _engines.clear()
    for engine in engines:
        engine.dispose()


def ping_database(timeout_seconds: float = 1.0) -> bool:
    try:
        with get_engine(timeout_seconds).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
