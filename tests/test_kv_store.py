"""Tests for the JSON key-value store"""

import json

import pytest

from beauty_booking.storage.kv_store import JsonFileStore


def test_missing_key_returns_default(store):
    assert store.get("nope", []) == []
    assert store.get("nope") is None


def test_set_then_get(store):
    store.set("lbc_users", [{"id": "u1", "name": "Ann"}])
    assert store.get("lbc_users", []) == [{"id": "u1", "name": "Ann"}]


def test_corrupt_entry_returns_default(store):
    (store.data_dir / "lbc_bookings.json").write_text("{not json", encoding="utf-8")
    assert store.get("lbc_bookings", []) == []


def test_null_entry_returns_default(store):
    store.set("lbc_session", None)
    assert store.get("lbc_session", "fallback") == "fallback"


def test_values_survive_new_instance(tmp_path):
    JsonFileStore(tmp_path).set("k", {"a": 1})
    assert JsonFileStore(tmp_path).get("k") == {"a": 1}


def test_written_file_is_plain_json(store):
    store.set("k", [1, 2, 3])
    assert json.loads((store.data_dir / "k.json").read_text(encoding="utf-8")) == [1, 2, 3]
    assert [p.name for p in store.data_dir.iterdir()] == ["k.json"]


def test_ensure_only_seeds_empty_keys(store):
    store.ensure("lbc_users", [])
    assert store.get("lbc_users") == []

    store.set("lbc_bookings", [{"id": "b1"}])
    store.ensure("lbc_bookings", [])
    assert store.get("lbc_bookings") == [{"id": "b1"}]


def test_failed_move_keeps_previous_value(store, monkeypatch):
    import shutil

    from beauty_booking.utils.exceptions import StorageError

    store.set("lbc_bookings", [{"id": "b1"}])

    def broken_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(shutil, "move", broken_move)
    with pytest.raises(StorageError, match="Failed to save lbc_bookings"):
        store.set("lbc_bookings", [{"id": "b1"}, {"id": "b2"}])

    assert store.get("lbc_bookings") == [{"id": "b1"}]
    assert list(store.data_dir.glob("*.tmp")) == []


def test_failed_write_leaves_no_temp_file(store, monkeypatch):
    import tempfile

    from beauty_booking.utils.exceptions import StorageError

    real_named_temp = tempfile.NamedTemporaryFile

    class _FailingWrite:
        def __init__(self, *args, **kwargs):
            self._file = real_named_temp(*args, **kwargs)
            self.name = self._file.name

        def write(self, data):
            raise OSError("no space left")

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self._file.close()
            return False

    monkeypatch.setattr(tempfile, "NamedTemporaryFile", _FailingWrite)
    with pytest.raises(StorageError):
        store.set("lbc_users", [])

    assert list(store.data_dir.iterdir()) == []


@pytest.mark.parametrize("value", [5, "text", {"id": "b1"}])
def test_get_list_ignores_wrong_shape(store, value):
    store.set("lbc_bookings", value)
    assert store.get_list("lbc_bookings") == []


def test_get_list_returns_stored_list(store):
    store.set("lbc_bookings", [{"id": "b1"}])
    assert store.get_list("lbc_bookings") == [{"id": "b1"}]
