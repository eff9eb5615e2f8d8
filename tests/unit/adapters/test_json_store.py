"""Tests for the JSON file key-value store."""

import json
from pathlib import Path

import pytest

from linkwatch.adapters.persistence import JsonFileStore


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "backup.json"


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_missing_file_is_empty(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        assert store.load("missing") is None
        assert store.contains("missing") is False
        assert not store_path.exists()

    def test_save_creates_parent_dirs(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        store.save("key", "value")

        assert store_path.exists()
        assert json.loads(store_path.read_text()) == {"key": "value"}

    def test_save_and_load(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        store.save("a", "1")
        store.save("b", "2")
        store.save("a", "3")

        assert store.load("a") == "3"
        assert store.load("b") == "2"
        assert store.contains("a") is True

    def test_values_survive_new_instance(self, store_path: Path) -> None:
        JsonFileStore(store_path).save("owner", "player-1")
        assert JsonFileStore(store_path).load("owner") == "player-1"

    def test_delete(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        store.save("a", "1")
        store.save("b", "2")

        store.delete("a")

        assert store.contains("a") is False
        assert store.load("b") == "2"

    def test_delete_missing_key_is_noop(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        store.delete("missing")
        assert not store_path.exists()

    def test_no_temp_file_left_behind(self, store_path: Path) -> None:
        store = JsonFileStore(store_path)
        store.save("a", "1")
        assert list(store_path.parent.iterdir()) == [store_path]

    def test_invalid_json_raises_value_error(self, store_path: Path) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            JsonFileStore(store_path).load("a")

    def test_non_object_raises_value_error(self, store_path: Path) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_text("[1, 2, 3]")

        with pytest.raises(ValueError, match="JSON object"):
            JsonFileStore(store_path).contains("a")
