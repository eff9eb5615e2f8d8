"""JSON file key-value store.

Persists string values in a single JSON object on disk. Every write rewrites
the file through a temporary sibling and an atomic rename, so a crash never
leaves a half-written store behind.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStore:
    """KeyValueStore implementation backed by a JSON file."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file. Created on first write.
        """
        self.path = path

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        # Ensure parent directory exists
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_path, self.path)

    def save(self, key: str, blob: str) -> None:
        data = self._read()
        data[key] = blob
        self._write(data)

    def load(self, key: str) -> str | None:
        return self._read().get(key)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
        else:
            logger.debug("Key %s not in %s, nothing to delete", key, self.path)

    def contains(self, key: str) -> bool:
        return key in self._read()
