"""Environment-driven settings for macstore."""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DATABASE_URL = "sqlite:///macs.sqlite3"
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class StoreConfig:
    """Settings bundle used by :class:`macstore.database.Database` and the CLI."""

    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            database_url=os.getenv("MACSTORE_DATABASE_URL", DEFAULT_DATABASE_URL),
            echo_sql=os.getenv("MACSTORE_ECHO_SQL", "").strip().lower() in _TRUTHY,
            api_host=os.getenv("MACSTORE_API_HOST", DEFAULT_API_HOST),
            api_port=int(os.getenv("MACSTORE_API_PORT", str(DEFAULT_API_PORT))),
        )


__all__ = ["StoreConfig", "DEFAULT_DATABASE_URL"]
