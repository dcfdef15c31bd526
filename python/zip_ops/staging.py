"""
Disposable staging directory used as the mirror target.

The staging directory lives directly under the temporary root with a random
UUID name. The archive built from it is written beside it as ``<uuid>.zip``,
so releasing the staging directory removes both.
"""

import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Optional

from colored_logger import get_colored_logger
from .errors import FilesystemError

logger = get_colored_logger(__name__)


class StagingDirectory:
    """Owns one staging directory from acquire() to release()."""

    def __init__(self, temp_root: Optional[str] = None):
        self.temp_root = Path(temp_root or tempfile.gettempdir())
        self.path: Optional[Path] = None

    @property
    def archive_path(self) -> Path:
        """Path of the archive built from this staging directory."""
        if self.path is None:
            raise RuntimeError("Staging directory has not been acquired")
        return self.path.with_name(f"{self.path.name}.zip")

    def acquire(self) -> Path:
        if self.path is not None:
            raise RuntimeError(f"Staging directory already acquired: {self.path}")

        candidate = self.temp_root / str(uuid.uuid4()).upper()
        try:
            # No exist_ok: a collision must fail instead of sharing a directory
            candidate.mkdir(parents=False)
        except OSError as e:
            raise FilesystemError("create staging directory", candidate, e) from e

        self.path = candidate
        logger.debug("Acquired staging directory %s", candidate)
        return candidate

    def release(self) -> None:
        """Remove the staging directory and its archive. Safe to call twice."""
        if self.path is None:
            return

        archive_path = self.archive_path
        try:
            if self.path.exists():
                shutil.rmtree(self.path)
            if archive_path.exists():
                os.remove(archive_path)
        except OSError as e:
            raise FilesystemError("remove staging directory", self.path, e) from e

        logger.debug("Released staging directory %s", self.path)
        self.path = None

    def __enter__(self) -> "StagingDirectory":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is None:
            self.release()
            return False

        try:
            self.release()
        except FilesystemError as e:
            # Do not hide the error that is already propagating
            logger.warning("%s", e)
        return False
