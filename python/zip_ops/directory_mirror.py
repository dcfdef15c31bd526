"""
Depth-limited mirroring of a source directory into the staging area.

The mirror copies regular files and plain directories under their transcoded
names. It walks at most MAX_DEPTH levels: the source directory's entries and
the entries of its immediate subdirectories. Symlinks, devices, sockets and
FIFOs are skipped at every level, as are names matched by the exclusion
patterns.
"""

import os
import shutil
from pathlib import Path
from typing import Any, Dict

from colored_logger import get_colored_logger
from .errors import FilesystemError
from .exclusions import ExclusionMatcher
from .name_transcoder import NameTranscoder

logger = get_colored_logger(__name__)

MAX_DEPTH = 2


class MirrorReport:
    """Counters for a single mirror pass."""

    def __init__(self):
        self.files_copied = 0
        self.directories_created = 0
        self.bytes_copied = 0
        self.excluded = 0
        self.special_skipped = 0
        self.depth_skipped = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_copied": self.files_copied,
            "directories_created": self.directories_created,
            "bytes_copied": self.bytes_copied,
            "excluded": self.excluded,
            "special_skipped": self.special_skipped,
            "depth_skipped": self.depth_skipped,
        }


class DirectoryMirror:
    """Reproduces a source tree under transcoded names."""

    def __init__(
        self,
        transcoder: NameTranscoder,
        matcher: ExclusionMatcher,
        max_depth: int = MAX_DEPTH,
    ):
        if not 1 <= max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH}")
        self.transcoder = transcoder
        self.matcher = matcher
        self.max_depth = max_depth

    def mirror(self, source_directory, staging_directory) -> MirrorReport:
        """
        Mirror ``source_directory`` into the existing ``staging_directory``.

        Raises:
            NameTranscodeError: a name cannot be represented in the encoding
            FilesystemError: listing, copying or creating an entry failed
        """
        report = MirrorReport()
        self._mirror_level(Path(source_directory), Path(staging_directory), 1, report)
        logger.debug("Mirror finished: %s", report.to_dict())
        return report

    def _mirror_level(
        self, source: Path, target: Path, depth: int, report: MirrorReport
    ) -> None:
        try:
            entries = list(os.scandir(source))
        except OSError as e:
            raise FilesystemError("list directory", source, e) from e

        # Listing order is kept as reported by the filesystem
        for entry in entries:
            if depth == 1:
                logger.progress("Processing %s", entry.name)

            if self.matcher.is_excluded(entry.name):
                logger.debug("Excluded %s", entry.path)
                report.excluded += 1
                continue

            try:
                is_file = entry.is_file(follow_symlinks=False)
                is_dir = not is_file and entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise FilesystemError("inspect", entry.path, e) from e

            if is_file:
                self._copy_file(entry, target / self._staged_name(entry.name), report)
            elif is_dir:
                if depth >= self.max_depth:
                    logger.debug("Skipping %s beyond depth %d", entry.path, self.max_depth)
                    report.depth_skipped += 1
                    continue
                staged_dir = target / self._staged_name(entry.name)
                self._make_directory(staged_dir, report)
                self._mirror_level(Path(entry.path), staged_dir, depth + 1, report)
            else:
                logger.debug("Skipping special file %s", entry.path)
                report.special_skipped += 1

    def _staged_name(self, name: str) -> str:
        return self.transcoder.transcode_or_raise(name)

    def _copy_file(self, entry: os.DirEntry, destination: Path, report: MirrorReport) -> None:
        # Two source names may transcode to the same staged name
        if os.path.lexists(destination):
            raise FilesystemError(
                "copy file", entry.path, FileExistsError(f"{destination} already staged")
            )
        try:
            shutil.copy2(entry.path, destination, follow_symlinks=False)
            size = destination.stat().st_size
        except OSError as e:
            raise FilesystemError("copy file", entry.path, e) from e

        report.files_copied += 1
        report.bytes_copied += size

    def _make_directory(self, destination: Path, report: MirrorReport) -> None:
        try:
            destination.mkdir()
        except OSError as e:
            raise FilesystemError("create directory", destination, e) from e
        report.directories_created += 1
