"""
Archive Manager - sequences one legacy-encoded zip run.

The manager validates the input, resolves the password, mirrors the input
into a staging directory under transcoded names, archives the staging
directory and moves the archive beside the input. The staging directory is
released on every exit path.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from colored_logger import get_colored_logger

from .archive_creators import LegacyZipArchiveCreator
from .archive_verifier import ArchiveVerifier
from .config import ZipSettings
from .directory_mirror import DirectoryMirror, MirrorReport
from .exclusions import ExclusionMatcher
from .name_transcoder import NameTranscoder
from .password import PasswordDecision, PasswordGenerator, resolve_password
from .path_utils import ArchivePathGenerator, relocate_archive
from .staging import StagingDirectory

logger = get_colored_logger(__name__)


@dataclass(frozen=True)
class ArchiveResult:
    """Outcome of a successful run."""

    archive_path: Path
    password: PasswordDecision
    mirror_report: MirrorReport
    archive_size: int


class ArchiveManager:
    """
    Orchestrates archive creation using the zip_ops components.

    - Name handling: NameTranscoder and ExclusionMatcher
    - Staging: StagingDirectory and DirectoryMirror
    - Archive creation: LegacyZipArchiveCreator
    - Integrity verification: ArchiveVerifier
    - Placement: ArchivePathGenerator
    """

    def __init__(
        self,
        settings: Optional[ZipSettings] = None,
        password_generator: Optional[PasswordGenerator] = None,
    ):
        self.settings = settings or ZipSettings()

        self.transcoder = NameTranscoder(self.settings.encoding)
        self.matcher = ExclusionMatcher.with_defaults(self.settings.exclude_patterns)
        self.mirror = DirectoryMirror(self.transcoder, self.matcher)
        self.creator = LegacyZipArchiveCreator(
            encoding=self.transcoder.encoding,
            compression_level=self.settings.compression_level,
        )
        self.verifier = ArchiveVerifier(self.transcoder.encoding)
        self.path_generator = ArchivePathGenerator()
        self.password_generator = password_generator or PasswordGenerator()

        logger.debug(
            "ArchiveManager initialized: encoding=%s, level=%d, excludes=%s",
            self.transcoder.encoding,
            self.settings.compression_level,
            self.matcher.patterns,
        )

    def _validate_input(self, input_directory) -> Optional[Path]:
        source_path = Path(input_directory).expanduser()
        if not source_path.exists():
            logger.error("Input directory does not exist: %s", input_directory)
            return None
        if not source_path.is_dir():
            logger.error("Input path is not a directory: %s", input_directory)
            return None
        return Path(os.path.abspath(source_path))

    def _progress_callback(self, current: int, total: int) -> None:
        logger.progress("Archiving progress: %d/%d entries", current, total)

    def _verify(self, archive_path: str, decision: PasswordDecision) -> None:
        if not self.settings.verify:
            return
        if self.verifier.verify_integrity(archive_path, decision.password):
            logger.debug("Archive integrity verified")
        else:
            logger.warning("Archive integrity check failed: %s", archive_path)

    def create_archive(
        self,
        input_directory,
        password: Optional[str] = None,
        password_length: Optional[int] = None,
    ) -> Optional[ArchiveResult]:
        """
        Create ``<input_directory>.zip`` beside the input directory.

        Args:
            input_directory: Directory to archive
            password: Explicit password; takes priority over password_length
            password_length: Length of a password to generate

        Returns:
            ArchiveResult, or None when the input is missing or not a directory

        Raises:
            UsageError: invalid password options
            NameTranscodeError: a name cannot be represented in the encoding
            FilesystemError: staging, copying or moving failed
            ArchiveError: the archive could not be written
        """
        source_path = self._validate_input(input_directory)
        if source_path is None:
            return None

        # Resolved before touching the filesystem
        decision = resolve_password(password, password_length, self.password_generator)
        output_path = self.path_generator.output_path_for(source_path)
        start_time = time.time()

        with StagingDirectory(self.settings.temp_dir) as staging:
            report = self.mirror.mirror(source_path, staging.path)
            logger.info(
                "Staged %d files in %d directories (%d excluded, %d skipped)",
                report.files_copied,
                report.directories_created,
                report.excluded,
                report.special_skipped + report.depth_skipped,
            )

            logger.info("Creating zip archive...")
            built_path = self.creator.create_archive(
                staging.path,
                staging.archive_path,
                password=decision.password,
                progress_callback=self._progress_callback,
            )
            self._verify(built_path, decision)

            relocate_archive(built_path, output_path)

        archive_size = output_path.stat().st_size
        logger.success(
            "Archive created successfully: %s (%.2f MB, %.2f seconds)",
            output_path,
            archive_size / (1024 * 1024),
            time.time() - start_time,
        )

        if decision.generated:
            # The only record of a generated password
            logger.notice("Generated password: %s", decision.password)

        return ArchiveResult(
            archive_path=output_path,
            password=decision,
            mirror_report=report,
            archive_size=archive_size,
        )
