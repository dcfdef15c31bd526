"""
Path utilities for archive placement.

The finished archive sits beside the input directory and is named after it.
It is built in the temporary area first and moved into place at the end.
"""

import errno
import os
import shutil
from pathlib import Path

from colored_logger import get_colored_logger
from .errors import FilesystemError, UsageError

logger = get_colored_logger(__name__)

ARCHIVE_EXTENSION = ".zip"


class ArchivePathGenerator:
    """Derives where the archive for an input directory ends up."""

    def output_path_for(self, input_directory) -> Path:
        """Return ``<parent>/<name>.zip`` for the given directory."""
        # Symlinks are kept so the archive lands beside the path the user gave
        source_path = Path(os.path.abspath(os.path.expanduser(str(input_directory))))
        if not source_path.name:
            raise UsageError(f"Cannot derive an archive name for {source_path}")
        return source_path.with_name(source_path.name + ARCHIVE_EXTENSION)


def relocate_archive(src_path, dest_path) -> Path:
    """
    Move the built archive to its final location, replacing an existing file.

    Falls back to copy-and-delete when the temporary area is on another
    filesystem.
    """
    src_path = Path(src_path)
    dest_path = Path(dest_path)

    if dest_path.is_dir():
        raise FilesystemError(
            "move archive to",
            dest_path,
            IsADirectoryError(errno.EISDIR, "a directory is in the way", str(dest_path)),
        )

    try:
        os.replace(src_path, dest_path)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise FilesystemError("move archive to", dest_path, e) from e

        logger.debug("Cross-device move of %s, copying instead", src_path)
        try:
            shutil.copyfile(src_path, dest_path)
            os.remove(src_path)
        except OSError as copy_error:
            raise FilesystemError("move archive to", dest_path, copy_error) from copy_error

    return dest_path
