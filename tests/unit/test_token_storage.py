import json
import os
import stat
from unittest.mock import MagicMock

import pytest

from webmonitor.adapters.token_storage import FletClientStorage, InMemoryStorage, JsonFileStorage


def test_in_memory_storage_roundtrip():
    storage = InMemoryStorage({"token": "abc"})
    assert storage.get("token") == "abc"

    storage.remove("token")
    storage.remove("token")
    assert storage.get("token") is None


def test_json_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"

    JsonFileStorage(path).set("token", "abc")

    assert JsonFileStorage(path).get("token") == "abc"
    assert json.loads(path.read_text()) == {"token": "abc"}


def test_json_file_storage_remove(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")
    storage.set("token", "abc")
    storage.set("other", "x")

    storage.remove("token")

    assert storage.get("token") is None
    assert storage.get("other") == "x"


def test_json_file_storage_reads_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")

    storage = JsonFileStorage(path)

    assert storage.get("token") is None
    storage.set("token", "fresh")
    assert storage.get("token") == "fresh"


def test_flet_client_storage_delegates():
    client_storage = MagicMock()
    client_storage.get.return_value = "abc"
    client_storage.contains_key.return_value = True
    storage = FletClientStorage(client_storage)

    assert storage.get("token") == "abc"
    storage.set("token", "new")
    storage.remove("token")

    client_storage.set.assert_called_once_with("token", "new")
    client_storage.remove.assert_called_once_with("token")


def test_flet_client_storage_skips_missing_key_on_remove():
    client_storage = MagicMock()
    client_storage.get.return_value = None
    client_storage.contains_key.return_value = False
    storage = FletClientStorage(client_storage)

    assert storage.get("token") is None
    storage.remove("token")

    client_storage.remove.assert_not_called()


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_json_file_storage_is_owner_only(tmp_path):
    path = tmp_path / "storage.json"
    previous = os.umask(0o022)
    try:
        JsonFileStorage(path).set("token", "secret")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
