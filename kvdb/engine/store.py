"""
Store - Main key-value store API.
"""

import logging
import os
import threading

from kvdb.engine.loader import StoreLoader
from kvdb.models import record_codec
from kvdb.models.exceptions import KeyNotFoundError
from kvdb.models.key_val import KeyVal, as_bytes

logger = logging.getLogger(__name__)

# Sentinel for an absent key
_MISSING = object()


class Store:
    """
    Embedded key-value store bound to one filesystem location.

    Provides:
    - put(key, val): Insert or overwrite a key-value pair
    - get(key): Retrieve a KeyVal by key

    Architecture:
    - The whole index lives in memory as a dict
    - Every put rewrites the full snapshot via temp file + atomic rename
    - open() always reloads the snapshot from disk

    There is no cross-process locking. Two processes that open the same
    location keep separate indexes, and whichever writes last wins.
    """

    def __init__(self, location: str | os.PathLike, fsync: bool = True) -> None:
        """
        Open a store.

        Args:
            location: Snapshot file path, or an existing directory to hold it.
            fsync: Sync to disk on every put (default: True).

        Raises:
            StorageIOError: If the location cannot be read or written.
            CorruptFormatError: If existing data does not parse.
            RecordEncodingError: If a stored key or value cannot be decoded.
        """
        if not isinstance(fsync, bool):
            raise TypeError(f"fsync must be a bool, got {type(fsync).__name__}")

        loader = StoreLoader(location, fsync=fsync)
        self._location = loader.location
        self._snapshot = loader.snapshot
        self._index: dict[bytes, bytes] = loader.load()

        # Guards the index and the snapshot write path; readers take it too
        # so they never see a value that a failed put is about to roll back
        self._lock = threading.Lock()

    @property
    def location(self) -> str:
        return self._location

    @property
    def path(self) -> str:
        """The snapshot file backing this store."""
        return self._snapshot.file_path

    def put(self, key: bytes, val: bytes) -> None:
        """
        Insert or overwrite a key-value pair and persist the store.

        The call returns only after the new snapshot has replaced the old
        one on disk. If the write fails the in-memory index is rolled back.

        Args:
            key: Arbitrary bytes, may be empty.
            val: Arbitrary bytes, may be empty.

        Raises:
            StorageIOError: If the snapshot could not be written.
        """
        key = as_bytes(key, "key")
        val = as_bytes(val, "val")

        with self._lock:
            previous = self._index.get(key, _MISSING)
            self._index[key] = val
            try:
                self._snapshot.write(record_codec.encode(self._index))
            except Exception:
                if previous is _MISSING:
                    del self._index[key]
                else:
                    self._index[key] = previous
                raise

        logger.debug(f"put {len(key)}-byte key, {len(val)}-byte value ({len(self._index)} entries)")

    def get(self, key: bytes) -> KeyVal:
        """
        Retrieve a key-value pair.

        Args:
            key: The key to look up.

        Returns:
            The stored KeyVal.

        Raises:
            KeyNotFoundError: If the key was never put.
        """
        key = as_bytes(key, "key")
        with self._lock:
            val = self._index.get(key, _MISSING)
        if val is _MISSING:
            raise KeyNotFoundError(key)
        return KeyVal(key, val)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray, memoryview)):
            return False
        with self._lock:
            return bytes(key) in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Store({self.path!r}, entries={len(self._index)})"


def open(location: str | os.PathLike, *, fsync: bool = True) -> Store:
    """
    Open the store at location, loading any persisted state.

    Args:
        location: Snapshot file path, or an existing directory to hold it.
        fsync: Sync to disk on every put (default: True).

    Returns:
        A Store handle.
    """
    return Store(location, fsync=fsync)
