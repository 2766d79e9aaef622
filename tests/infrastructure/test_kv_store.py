"""Tests for the key-value store adapters."""

from unittest.mock import MagicMock

import pytest

from src.application.ports.key_value_store import StoredValue
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.kv_store import (
    InMemoryKeyValueStore,
    SqlAlchemyKeyValueStore,
)


@pytest.fixture
def sqlite_store(tmp_path):
    adapter = SqlAlchemyDatabaseEngineAdapter(
        f"sqlite:///{tmp_path / 'store' / 'analyzer.db'}"
    )
    yield SqlAlchemyKeyValueStore(adapter, logger=MagicMock())
    adapter.get_store_engine().dispose()


def test_sqlalchemy_store_round_trip(sqlite_store) -> None:
    """Values should be stored, replaced, and deleted."""
    assert sqlite_store.get("last") is None

    sqlite_store.set("last", '{"a": 1}')
    sqlite_store.set("last", '{"a": 2}')
    sqlite_store.set("other", "x")

    assert sqlite_store.get("last") == StoredValue(value='{"a": 2}')
    assert sqlite_store.get("other") == StoredValue(value="x")

    sqlite_store.delete("last")
    sqlite_store.delete("missing")

    assert sqlite_store.get("last") is None
    assert sqlite_store.get("other") == StoredValue(value="x")


def test_sqlalchemy_store_creates_table_once() -> None:
    """The table should be created on first use only."""
    engine = MagicMock()
    db_port = MagicMock()
    db_port.get_store_engine.return_value = engine
    conn = engine.begin.return_value.__enter__.return_value
    store = SqlAlchemyKeyValueStore(db_port, logger=MagicMock())

    store.delete("a")
    store.delete("b")

    create_calls = [
        call
        for call in conn.execute.call_args_list
        if "CREATE TABLE" in str(call.args[0])
    ]
    assert len(create_calls) == 1


def test_in_memory_store() -> None:
    """The in-memory store should honour the same contract."""
    store = InMemoryKeyValueStore()

    assert store.get("k") is None
    store.set("k", "v")
    assert store.get("k") == StoredValue(value="v")
    store.delete("k")
    store.delete("k")
    assert store.get("k") is None
