"""Database infrastructure for the result store.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine backing the key-value store. It belongs to the infrastructure layer
because it deals with external systems (SQLite or a server database).
"""

import os
from pathlib import Path
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.settings import STORE_URL_ENV, default_store_url


def _get_env_var(name: str, default: str | None = None) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.
        default: Value used when the variable is not set at all.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the variable is empty, or missing without default.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if value is None and default is not None:
        return default
    if not value or not value.strip():
        raise RuntimeError(f"Missing environment variable: {name}")
    return value.strip()


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the store database.

    SQLite files get their parent directory created and keep the default
    pool; server databases use a small health-checked QueuePool.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_store_engine: Optional[Engine] = None


def get_store_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the result store.

    Returns:
        Engine: Lazily initialized engine connected to the store database.
    """
    global _store_engine
    if _store_engine is None:
        db_url = _get_env_var(STORE_URL_ENV, default=default_store_url())
        _store_engine = _create_engine(db_url)
    return _store_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """Adapter exposing the store engine through the database port."""

    def __init__(self, db_url: str | None = None) -> None:
        """Initialize the adapter.

        Args:
            db_url: Optional explicit URL; the shared engine is used
                otherwise.
        """
        self._db_url = db_url
        self._engine: Optional[Engine] = None

    def get_store_engine(self) -> Engine:
        """Return the engine for the result store."""
        if self._db_url is None:
            return get_store_engine()
        if self._engine is None:
            self._engine = _create_engine(self._db_url)
        return self._engine


__all__ = ["get_store_engine", "SqlAlchemyDatabaseEngineAdapter"]
