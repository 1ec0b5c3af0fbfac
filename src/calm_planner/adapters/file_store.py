"""File-based key-value storage adapter."""

import re
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileKeyValueStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. The directory is the scope; each
    key gets its own JSON file.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory).expanduser()

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for_key(key)
        # Write beside the target, then swap it in
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
