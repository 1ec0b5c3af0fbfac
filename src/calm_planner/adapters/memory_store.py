"""In-memory key-value storage adapter."""


class MemoryKeyValueStore:
    """Implements KeyValueStore protocol with a plain dict. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
