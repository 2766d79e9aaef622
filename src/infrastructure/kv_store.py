"""Key-value store adapters caching serialized analysis results."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.key_value_store import (
    KeyValueStorePort,
    StoredValue,
)
from src.infrastructure.logging.logger import get_app_logger

CREATE_KV_STORE_SQL = """
CREATE TABLE IF NOT EXISTS analyzer_kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

SELECT_VALUE_SQL = text(
    """
    SELECT value
    FROM analyzer_kv_store
    WHERE key = :key
    """
)

DELETE_VALUE_SQL = text(
    """
    DELETE FROM analyzer_kv_store
    WHERE key = :key
    """
)

INSERT_VALUE_SQL = text(
    """
    INSERT INTO analyzer_kv_store (key, value)
    VALUES (:key, :value)
    """
)


class SqlAlchemyKeyValueStore(KeyValueStorePort):
    """Key-value store backed by a single SQL table."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the store engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._table_ready = False

    def get(self, key: str) -> StoredValue | None:
        """Return the value stored under ``key``, if any."""
        engine = self._ensure_table()
        with engine.connect() as conn:
            row = conn.execute(SELECT_VALUE_SQL, {"key": key}).first()
        if row is None:
            return None
        return StoredValue(value=row.value)

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key`` in one transaction."""
        engine = self._ensure_table()
        with engine.begin() as conn:
            conn.execute(DELETE_VALUE_SQL, {"key": key})
            conn.execute(INSERT_VALUE_SQL, {"key": key, "value": value})
        self._logger.debug(f"Stored key '{key}'")

    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        engine = self._ensure_table()
        with engine.begin() as conn:
            conn.execute(DELETE_VALUE_SQL, {"key": key})
        self._logger.debug(f"Deleted key '{key}'")

    def _ensure_table(self):
        engine = self._db_port.get_store_engine()
        if not self._table_ready:
            with engine.begin() as conn:
                conn.execute(text(CREATE_KV_STORE_SQL))
            self._table_ready = True
        return engine


class InMemoryKeyValueStore(KeyValueStorePort):
    """Process-local store, used when no database is wanted."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> StoredValue | None:
        if key not in self._values:
            return None
        return StoredValue(value=self._values[key])

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


__all__ = ["SqlAlchemyKeyValueStore", "InMemoryKeyValueStore"]
