"""
Data models for the key-value store.
"""

from kvdb.models.exceptions import (
    CorruptFormatError,
    KeyNotFoundError,
    KVError,
    RecordEncodingError,
    StorageIOError,
)
from kvdb.models.key_val import KeyVal
from kvdb.models.snapshot import SnapshotFile

__all__ = [
    "KeyVal",
    "SnapshotFile",
    "KVError",
    "StorageIOError",
    "CorruptFormatError",
    "RecordEncodingError",
    "KeyNotFoundError",
]
