"""
Tests for the Store engine.
"""

import os

import pytest

import kvdb
from kvdb import KeyNotFoundError, KeyVal, Store


class TestStore:
    """Tests for the main Store class."""

    def test_put_and_get(self, store):
        """Test basic put and get operations."""
        store.put(b"key1", b"value1")
        store.put(b"key2", b"value2")

        assert store.get(b"key1") == KeyVal(b"key1", b"value1")
        assert store.get(b"key2").val == b"value2"

    def test_update(self, store):
        """Last write wins."""
        store.put(b"key1", b"value1")
        store.put(b"key1", b"value2")

        assert store.get(b"key1").val == b"value2"
        assert len(store) == 1

    def test_missing_key(self, store):
        """get on a never-inserted key raises KeyNotFoundError."""
        with pytest.raises(KeyNotFoundError) as exc_info:
            store.get(b"Missing")
        assert exc_info.value.key == b"Missing"

    def test_missing_key_is_key_error(self, store):
        """KeyNotFoundError can be caught as KeyError."""
        with pytest.raises(KeyError):
            store.get(b"nope")

    def test_empty_key_and_value(self, store):
        """Empty byte strings are valid keys and values."""
        store.put(b"", b"")
        store.put(b"k", b"")

        assert store.get(b"") == KeyVal(b"", b"")
        assert store.get(b"k").val == b""

    def test_binary_safety(self, store, all_bytes):
        """Every byte value 0-255 survives put/get."""
        store.put(all_bytes, all_bytes[::-1])
        store.put(b"\x00", b"\x00\x00")

        assert store.get(all_bytes).val == all_bytes[::-1]
        assert store.get(b"\x00").val == b"\x00\x00"

    def test_bytes_like_input(self, store):
        """bytearray and memoryview are accepted and stored as bytes."""
        store.put(bytearray(b"key"), memoryview(b"value"))

        kv = store.get(b"key")
        assert kv.val == b"value"
        assert type(kv.key) is bytes
        assert type(kv.val) is bytes

    def test_rejects_text(self, store):
        """str keys and values are rejected."""
        with pytest.raises(TypeError):
            store.put("key", b"value")
        with pytest.raises(TypeError):
            store.put(b"key", "value")
        assert len(store) == 0

    def test_contains_and_len(self, store):
        """Membership and size reflect the index."""
        store.put(b"a", b"1")
        store.put(b"b", b"2")

        assert b"a" in store
        assert b"c" not in store
        assert "a" not in store
        assert len(store) == 2

    def test_scenario(self, store_path):
        """The documented example session."""
        db = kvdb.open(store_path)
        assert len(db) == 0

        db.put(b"Hello", b"World")
        db.put(b"Name", b"Aziz")

        assert db.get(b"Hello") == KeyVal(b"Hello", b"World")
        with pytest.raises(KeyNotFoundError):
            db.get(b"Missing")


class TestStorePersistence:
    """Tests for persistence across handles."""

    def test_persistence(self, store_path, sample_entries):
        """Data persists across store restarts."""
        db = Store(store_path)
        for key, val in sample_entries.items():
            db.put(key, val)
        del db

        db = kvdb.open(store_path)
        for key, val in sample_entries.items():
            assert db.get(key) == KeyVal(key, val)
        assert len(db) == len(sample_entries)

    def test_last_write_wins_after_reopen(self, store_path):
        """Overwrites persist, not the first value."""
        db = Store(store_path, fsync=False)
        db.put(b"k", b"v1")
        db.put(b"k", b"v2")

        assert Store(store_path).get(b"k").val == b"v2"

    def test_binary_persistence(self, store_path, all_bytes):
        """Binary data survives a restart unchanged."""
        Store(store_path).put(all_bytes, all_bytes)

        assert Store(store_path).get(all_bytes).val == all_bytes

    def test_open_empty_location(self, store_path):
        """Opening a fresh path gives an empty store and writes nothing."""
        db = Store(store_path)

        assert len(db) == 0
        assert not os.path.exists(store_path)

    def test_first_put_creates_snapshot(self, store_path):
        """The snapshot file appears on the first put."""
        db = Store(store_path)
        db.put(b"k", b"v")

        assert os.path.isfile(store_path)
        assert db.path == store_path

    def test_directory_location(self, temp_dir):
        """An existing directory holds the snapshot inside it."""
        db = Store(temp_dir)
        db.put(b"k", b"v")

        expected = os.path.join(temp_dir, "store.kvdb")
        assert db.path == expected
        assert os.path.isfile(expected)
        assert Store(temp_dir).get(b"k").val == b"v"

    def test_trailing_separator_location(self, temp_dir):
        """A new path ending in a separator is treated as a directory."""
        location = os.path.join(temp_dir, "newdb") + os.sep
        db = Store(location)

        assert not os.path.exists(location)

        db.put(b"k", b"v")

        expected = os.path.join(location, "store.kvdb")
        assert db.path == expected
        assert os.path.isfile(expected)
        assert Store(location).get(b"k").val == b"v"

    def test_missing_parent_directories(self, temp_dir):
        """Parent directories are created on first write."""
        path = os.path.join(temp_dir, "a", "b", "db")
        db = Store(path)
        db.put(b"k", b"v")

        assert Store(path).get(b"k").val == b"v"

    def test_pathlike_location(self, tmp_path):
        """os.PathLike locations are accepted."""
        db = Store(tmp_path / "db")
        db.put(b"k", b"v")

        assert Store(tmp_path / "db").get(b"k").val == b"v"

    def test_independent_handles(self, store_path):
        """Each open performs a fresh load."""
        first = Store(store_path)
        first.put(b"a", b"1")

        second = Store(store_path)
        assert second.get(b"a").val == b"1"

        # Second handle does not see writes made after it was opened
        first.put(b"b", b"2")
        assert b"b" not in second


class TestStoreConfiguration:
    """Tests for constructor validation."""

    def test_empty_location(self):
        """Empty locations are rejected."""
        with pytest.raises(ValueError):
            Store("")
        with pytest.raises(ValueError):
            kvdb.open("   ")

    def test_fsync_must_be_bool(self, store_path):
        """fsync is a flag, not an interval."""
        with pytest.raises(TypeError):
            Store(store_path, fsync=1)

    def test_repr(self, store):
        """repr shows the snapshot path and entry count."""
        store.put(b"k", b"v")
        assert repr(store) == f"Store({store.path!r}, entries=1)"
