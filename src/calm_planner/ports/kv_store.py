"""Key-value store interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Interface for a scoped string key-value store."""

    def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        ...
