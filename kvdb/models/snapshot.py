import logging
import os
from pathlib import Path

from kvdb.models.exceptions import StorageIOError

logger = logging.getLogger(__name__)


class SnapshotFile:
    """
    The single on-disk container for a store.

    Every write replaces the whole file: data goes to a sibling temp file,
    is synced, then renamed over the snapshot. Readers see either the old
    complete contents or the new complete contents.
    """

    TEMP_SUFFIX = ".tmp"

    def __init__(self, file_path: str, fsync: bool = True) -> None:
        """
        Initialize SnapshotFile.

        Args:
            file_path: Path to the snapshot file.
            fsync: Sync file data and the directory entry on every write.
        """
        self.file_path = file_path
        self.temp_path = file_path + self.TEMP_SUFFIX
        self._fsync = fsync

    def read(self) -> bytes | None:
        """
        Read the snapshot.

        Returns:
            The raw bytes, or None if no snapshot has been written yet.

        Raises:
            StorageIOError: If the file exists but cannot be read.
        """
        try:
            with open(self.file_path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageIOError(self.file_path, "Cannot read snapshot") from e

    def write(self, data: bytes) -> None:
        """
        Atomically replace the snapshot with data.

        Raises:
            StorageIOError: If the snapshot was not replaced. The previous
                snapshot is left untouched and the temp file is removed.
        """
        try:
            Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
            with open(self.temp_path, "wb") as f:
                f.write(data)
                self._perform_flush(f)
            os.replace(self.temp_path, self.file_path)
        except OSError as e:
            logger.error(f"Snapshot write failed for {self.file_path}: {e}")
            self._remove_temp()
            raise StorageIOError(self.file_path, "Cannot write snapshot") from e

        # The rename already happened; a failed directory sync cannot undo it
        if self._fsync:
            try:
                self._sync_directory()
            except OSError as e:
                logger.warning(f"Directory sync failed for {self.file_path}: {e}")

        logger.debug(f"Wrote snapshot {self.file_path} ({len(data)} bytes)")

    def cleanup_temp(self) -> None:
        """Remove a temp file left behind by an interrupted write."""
        if not os.path.exists(self.temp_path):
            return
        try:
            os.remove(self.temp_path)
            logger.warning(f"Removed stale temp file {self.temp_path}")
        except OSError as e:
            logger.warning(f"Failed to remove stale temp file {self.temp_path}: {e}")

    def _perform_flush(self, f) -> None:
        """Push the temp file from Python user space -> OS kernel -> disk."""
        f.flush()
        if self._fsync:
            # Use fdatasync if available (Linux), fallback to fsync (macOS/Windows)
            _sync_data = getattr(os, "fdatasync", os.fsync)
            _sync_data(f.fileno())

    def _sync_directory(self) -> None:
        """Persist the rename itself (POSIX only)."""
        if os.name != "posix":
            return
        directory = os.path.dirname(os.path.abspath(self.file_path))
        fd = os.open(directory, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)

    def _remove_temp(self) -> None:
        try:
            os.remove(self.temp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove temp file {self.temp_path}: {e}")
