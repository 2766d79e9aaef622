"""Port for the opaque key-value store caching imported results."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredValue:
    """Value read back from the store."""

    value: str


class KeyValueStorePort(Protocol):
    """Port exposing get/set/delete over string values."""

    def get(self, key: str) -> StoredValue | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


__all__ = ["StoredValue", "KeyValueStorePort"]
