"""Owner of the shared SQLAlchemy engine.

A :class:`Database` opens its engine lazily and keeps it until
:meth:`Database.close` is called. Record stores only borrow the engine;
whoever built the ``Database`` decides when it goes away.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from macstore.config import StoreConfig
from macstore.models.db_models import Base

logger = logging.getLogger(__name__)


def _ensure_sqlite_parent(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


class Database:
    """Open-on-first-use wrapper around an SQLAlchemy :class:`Engine`."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: StoreConfig) -> "Database":
        return cls(config.database_url, echo=config.echo_sql)

    @property
    def engine(self) -> Engine:
        with self._lock:
            if self._engine is None:
                _ensure_sqlite_parent(self.url)
                self._engine = create_engine(self.url, echo=self.echo)
                logger.debug("Opened database %s", self.url)
                Base.metadata.create_all(self._engine)
            return self._engine

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def close(self) -> None:
        with self._lock:
            if self._engine is None:
                return
            self._engine.dispose()
            self._engine = None
            logger.debug("Closed database %s", self.url)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# Process-wide default handle, shared by every store that asks for it
_default: Optional[Database] = None
_default_url: Optional[str] = None
_default_lock = threading.Lock()


def set_default_database_url(url: Optional[str]) -> None:
    """Point the default handle at ``url`` (``None`` falls back to the environment).

    An already opened default handle is closed.
    """
    global _default, _default_url
    with _default_lock:
        previous = _default
        _default = None
        _default_url = url
    if previous is not None:
        previous.close()


def get_database() -> Database:
    """Return the shared default :class:`Database`, creating it on first call."""
    global _default
    with _default_lock:
        if _default is None:
            config = StoreConfig.from_env()
            if _default_url:
                config.database_url = _default_url
            _default = Database.from_config(config)
        return _default


def close_default_database() -> None:
    global _default
    with _default_lock:
        previous = _default
        _default = None
    if previous is not None:
        previous.close()


__all__ = [
    "Database",
    "get_database",
    "set_default_database_url",
    "close_default_database",
]
