"""
Embedded key-value database.

This package provides a process-local store bound to one file:
- open(location) - Load persisted state, or start empty
- put(key, val) - Insert or overwrite, persisted atomically before returning
- get(key) - Point lookup returning a KeyVal

Keys and values are arbitrary bytes.
"""

from kvdb.engine.store import Store, open
from kvdb.models.exceptions import (
    CorruptFormatError,
    KeyNotFoundError,
    KVError,
    RecordEncodingError,
    StorageIOError,
)
from kvdb.models.key_val import KeyVal

__all__ = [
    "open",
    "Store",
    "KeyVal",
    "KVError",
    "StorageIOError",
    "CorruptFormatError",
    "RecordEncodingError",
    "KeyNotFoundError",
]
