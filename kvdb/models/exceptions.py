"""
Custom exceptions for the key-value store.
"""


class KVError(Exception):
    """Base class for all store errors."""


class StorageIOError(KVError):
    """
    Raised when the store location cannot be read or written.

    The underlying OSError is chained as __cause__.
    """

    def __init__(self, path: str, message: str):
        """
        Initialize I/O error.

        Args:
            path: The file or directory that failed.
            message: What was being attempted.
        """
        self.path = path
        super().__init__(f"{message}: {path}")


class CorruptFormatError(KVError):
    """
    Raised when persisted bytes do not parse as a store snapshot.

    This is a fail-fast error; the store never falls back to an empty index.
    """

    def __init__(self, reason: str, path: str | None = None):
        self.reason = reason
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Corrupt snapshot{where}: {reason}")


class RecordEncodingError(KVError):
    """Raised when a key or value cannot be reconstructed byte-for-byte."""

    def __init__(self, field: str, entry_index: int, reason: str):
        """
        Initialize encoding error.

        Args:
            field: Which part of the record failed ("key" or "val").
            entry_index: Position of the record in the snapshot.
            reason: Decoder message.
        """
        self.field = field
        self.entry_index = entry_index
        super().__init__(
            f"Cannot decode {field} of entry {entry_index}: {reason}"
        )


class KeyNotFoundError(KVError, KeyError):
    """Raised by get() when no entry exists for the key."""

    def __init__(self, key: bytes):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key not found: {self.key!r}"
