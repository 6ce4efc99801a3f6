"""Unit tests for the storage port and workspace."""

from __future__ import annotations

import json
import threading

import pytest

from query_genie.storage import (
    API_KEY_SLOT,
    SCHEMA_SLOT,
    JsonFileStorage,
    MemoryStorage,
    StoragePort,
    Workspace,
)


@pytest.fixture(params=["memory", "file"])
def storage(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return JsonFileStorage(tmp_path / "nested" / "state.json")


class TestStoragePort:
    """Behaviour shared by every backend."""

    def test_satisfies_protocol(self, storage):
        assert isinstance(storage, StoragePort)

    def test_empty_slot(self, storage):
        assert storage.get("missing") is None

    def test_set_get_remove(self, storage):
        storage.set("slot", "value")
        assert storage.get("slot") == "value"
        storage.set("slot", "other")
        assert storage.get("slot") == "other"
        storage.remove("slot")
        assert storage.get("slot") is None

    def test_remove_missing_is_noop(self, storage):
        storage.remove("missing")
        assert storage.get("missing") is None

    def test_slots_are_independent(self, storage):
        storage.set("a", "1")
        storage.set("b", "2")
        storage.remove("a")
        assert storage.get("b") == "2"


class TestJsonFileStorage:
    """Tests specific to the JSON file backend."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileStorage(path).set(SCHEMA_SLOT, "CREATE TABLE t (\n  a INT\n);")
        assert JsonFileStorage(path).get(SCHEMA_SLOT) == "CREATE TABLE t (\n  a INT\n);"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            SCHEMA_SLOT: "CREATE TABLE t (\n  a INT\n);"
        }

    def test_unreadable_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileStorage(path)
        assert storage.get(API_KEY_SLOT) is None
        storage.set(API_KEY_SLOT, "sk-test")
        assert storage.get(API_KEY_SLOT) == "sk-test"

    def test_non_object_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStorage(path).get(API_KEY_SLOT) is None

    def test_concurrent_writes_to_different_slots(self, tmp_path):
        path = tmp_path / "state.json"

        for i in range(50):
            path.unlink(missing_ok=True)
            barrier = threading.Barrier(2)

            def write(slot, value):
                barrier.wait()
                JsonFileStorage(path).set(slot, value)

            threads = [
                threading.Thread(target=write, args=(API_KEY_SLOT, f"sk-{i}")),
                threading.Thread(target=write, args=(SCHEMA_SLOT, f"schema-{i}")),
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            storage = JsonFileStorage(path)
            assert storage.get(API_KEY_SLOT) == f"sk-{i}"
            assert storage.get(SCHEMA_SLOT) == f"schema-{i}"


class TestWorkspace:
    """Tests for the Workspace wrapper."""

    def test_defaults(self):
        workspace = Workspace(MemoryStorage())
        assert workspace.api_key == ""
        assert workspace.schema_text == ""

    def test_api_key_is_trimmed_on_read(self):
        storage = MemoryStorage()
        workspace = Workspace(storage)
        workspace.save_api_key("  sk-test \n")
        assert storage.get(API_KEY_SLOT) == "  sk-test \n"
        assert workspace.api_key == "sk-test"

    def test_clear(self):
        workspace = Workspace(MemoryStorage({API_KEY_SLOT: "sk", SCHEMA_SLOT: "x"}))
        workspace.clear_schema()
        assert workspace.schema_text == ""
        assert workspace.api_key == "sk"
        workspace.clear_api_key()
        assert workspace.api_key == ""

    def test_import_schema_file_is_verbatim(self, tmp_path):
        text = "-- exported\nCREATE TABLE accounts (\n  id INT PRIMARY KEY\n);\n\n"
        path = tmp_path / "schema.sql"
        path.write_text(text, encoding="utf-8")

        workspace = Workspace(MemoryStorage({SCHEMA_SLOT: "old"}))
        assert workspace.import_schema_file(path) == text
        assert workspace.schema_text == text

    def test_import_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.sql"
        path.write_bytes("-- caf\xe9\nCREATE TABLE accounts (\n  id INT PRIMARY KEY\n);\n".encode("latin-1"))

        workspace = Workspace(MemoryStorage())
        schema_text = workspace.import_schema_file(path)
        assert schema_text.startswith("-- caf\ufffd\n")
        assert workspace.schema_text == schema_text

    def test_import_missing_file_keeps_schema(self, tmp_path):
        workspace = Workspace(MemoryStorage({SCHEMA_SLOT: "old"}))
        with pytest.raises(FileNotFoundError):
            workspace.import_schema_file(tmp_path / "nope.sql")
        assert workspace.schema_text == "old"
