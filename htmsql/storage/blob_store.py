"""Durable storage for the serialized content database.

The whole SQLite database image is kept as one opaque blob under a fixed
name. There is a single logical writer, so no locking or versioning is done;
writes go through a temporary file and an atomic rename so that a failed save
never damages the previous blob.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from htmsql.exceptions import PersistError

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "htmsql-content-db"
DEFAULT_STORE_KEY = "main"
BLOB_SUFFIX = ".sqlite"


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for a single-key binary blob store."""

    def load(self) -> bytes | None:
        """Return the stored blob, or None if nothing was ever saved."""
        ...

    def save(self, data: bytes) -> None:
        """Replace the stored blob. Raises PersistError on failure."""
        ...


class FileBlobStore:
    """Blob store backed by one file under ``root/name/key.sqlite``."""

    def __init__(
        self,
        root: Path,
        name: str = DEFAULT_STORE_NAME,
        key: str = DEFAULT_STORE_KEY,
    ) -> None:
        self.directory = root / name
        self.path = self.directory / f"{key}{BLOB_SUFFIX}"

    def load(self) -> bytes | None:
        if not self.path.exists():
            logger.debug("No stored content database at %s", self.path)
            return None
        data = self.path.read_bytes()
        return data or None

    def save(self, data: bytes) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistError(f"Cannot prepare blob store at {self.directory}: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            tmp_path.replace(self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise PersistError(f"Failed to save content database to {self.path}: {exc}") from exc
        logger.debug("Saved content database (%d bytes) to %s", len(data), self.path)


class MemoryBlobStore:
    """Process-local blob store, used for ephemeral runs and tests."""

    def __init__(self, data: bytes | None = None) -> None:
        self.data = data
        self.save_count = 0

    def load(self) -> bytes | None:
        return self.data

    def save(self, data: bytes) -> None:
        self.data = bytes(data)
        self.save_count += 1
