"""
StoreLoader - Resolve a store location and rebuild its index.
"""

import logging
import os

from kvdb.models import record_codec
from kvdb.models.exceptions import CorruptFormatError, StorageIOError
from kvdb.models.snapshot import SnapshotFile

logger = logging.getLogger(__name__)


class StoreLoader:
    """
    Handles store startup.

    Responsibilities:
    - Map the user-supplied location to a snapshot file
    - Check that the snapshot can be written later
    - Clean up after interrupted writes
    - Decode the snapshot into the in-memory index
    """

    # Snapshot file name used when the location is a directory
    SNAPSHOT_NAME = "store.kvdb"

    def __init__(self, location: str | os.PathLike, fsync: bool = True) -> None:
        """
        Initialize the loader.

        Args:
            location: A snapshot file path, or an existing directory.
            fsync: Passed through to the SnapshotFile.
        """
        location = os.fspath(location)
        if not location or not location.strip():
            raise ValueError("location cannot be empty")

        self.location = location
        self.snapshot = SnapshotFile(self.resolve(location), fsync=fsync)

    @classmethod
    def resolve(cls, location: str) -> str:
        """
        Return the snapshot file path for a location.

        Existing directories, and paths ending in a separator, hold the
        snapshot inside them. A missing directory is created on first write.
        """
        separators = tuple(s for s in (os.sep, os.altsep) if s)
        if os.path.isdir(location) or location.endswith(separators):
            return os.path.join(location, cls.SNAPSHOT_NAME)
        return location

    def _check_writable(self) -> None:
        """
        Verify the snapshot directory, or its nearest existing ancestor,
        is a writable directory.

        Raises:
            StorageIOError: If future writes could not succeed.
        """
        directory = os.path.dirname(os.path.abspath(self.snapshot.file_path))
        while not os.path.exists(directory):
            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

        if not os.path.isdir(directory):
            raise StorageIOError(directory, "Not a directory")
        if not os.access(directory, os.W_OK):
            raise StorageIOError(directory, "Directory not writable")

    def load(self) -> dict[bytes, bytes]:
        """
        Load the persisted index.

        Returns:
            The key -> value mapping, empty if nothing was persisted yet.

        Raises:
            StorageIOError: If the location cannot be read or written.
            CorruptFormatError: If the snapshot does not parse.
            RecordEncodingError: If a key or value cannot be reconstructed.
        """
        self._check_writable()
        self.snapshot.cleanup_temp()

        data = self.snapshot.read()
        if data is None:
            logger.debug(f"No snapshot at {self.snapshot.file_path}, starting empty")
            return {}

        try:
            index = record_codec.decode(data)
        except CorruptFormatError as e:
            raise CorruptFormatError(e.reason, self.snapshot.file_path) from e

        logger.debug(f"Loaded {len(index)} entries from {self.snapshot.file_path}")
        return index
