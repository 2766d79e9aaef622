"""Database ports for the portfolio analyzer.

This module defines the application-layer protocol for accessing the
database engine backing the result store. Infrastructure implementations
provide concrete adapters that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the result store database."""

    def get_store_engine(self) -> Engine:
        """Get the engine for the result store.

        Returns:
            Engine: SQLAlchemy engine connected to the store database.
        """


__all__ = ["DatabaseEnginePort"]
