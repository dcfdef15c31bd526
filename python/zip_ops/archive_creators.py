"""
ZIP archive creation with legacy-encoded entry names.

Entry names are written in the target encoding with the UTF-8 flag cleared,
which is how archives produced on Japanese Windows look to extraction tools.
Password protected archives use WinZip AES-256 through pyzipper.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pyzipper
from pyzipper.zipfile_aes import AESZipFile, AESZipInfo

from colored_logger import get_colored_logger
from .errors import ArchiveError
from .name_transcoder import DEFAULT_ENCODING

logger = get_colored_logger(__name__)

# General purpose bit 11: file name and comment are UTF-8
UTF8_FLAG = 0x800


class LegacyNameZipInfo(AESZipInfo):
    """ZipInfo that encodes its file name with ``name_encoding``."""

    name_encoding = DEFAULT_ENCODING

    def _encodeFilenameFlags(self):
        return self.filename.encode(self.name_encoding), self.flag_bits & ~UTF8_FLAG


@lru_cache(maxsize=None)
def legacy_zipinfo_class(encoding: str) -> type:
    return type(
        f"LegacyNameZipInfo_{encoding}",
        (LegacyNameZipInfo,),
        {"name_encoding": encoding},
    )


class LegacyNameZipFile(AESZipFile):
    """AESZipFile whose written entries carry legacy-encoded names."""

    def __init__(self, file, mode="r", name_encoding=DEFAULT_ENCODING, **kwargs):
        self.zipinfo_cls = legacy_zipinfo_class(name_encoding)
        super().__init__(file, mode, **kwargs)


class ProgressReporter:
    """Decides when to report archive progress (about twenty updates per run)."""

    def should_report_progress(self, current_index: int, total_entries: int) -> bool:
        return (
            current_index % max(1, total_entries // 20) == 0
            or current_index == total_entries - 1
        )


class LegacyZipArchiveCreator:
    """Creates a ZIP archive of a staged directory."""

    def __init__(
        self,
        encoding: str = DEFAULT_ENCODING,
        compression_level: int = 6,
    ):
        self.encoding = encoding
        self.compression_level = compression_level
        self.progress_reporter = ProgressReporter()

    def collect_entries(self, source_path: Path) -> List[Tuple[Path, str]]:
        """Return (path, archive name) pairs for every directory and file."""
        entries = []
        for dirpath, dirnames, filenames in os.walk(source_path):
            dirnames.sort()
            current = Path(dirpath)
            for dirname in dirnames:
                path = current / dirname
                entries.append((path, path.relative_to(source_path).as_posix() + "/"))
            for filename in sorted(filenames):
                path = current / filename
                entries.append((path, path.relative_to(source_path).as_posix()))
        return entries

    def _create_zipfile_instance(
        self, temp_archive_path: str, password: Optional[str]
    ) -> LegacyNameZipFile:
        zipf = LegacyNameZipFile(
            temp_archive_path,
            "w",
            name_encoding=self.encoding,
            compression=pyzipper.ZIP_DEFLATED,
            compresslevel=self.compression_level,
            encryption=pyzipper.WZ_AES if password is not None else None,
        )
        if password is not None:
            zipf.setpassword(password.encode("utf-8"))
        return zipf

    def _cleanup_temp_file(self, temp_file_path: str) -> None:
        if os.path.exists(temp_file_path):
            try:
                os.remove(temp_file_path)
            except OSError as e:
                logger.debug("Failed to cleanup temp file %s: %s", temp_file_path, e)

    def create_archive(
        self,
        from_directory,
        output_path,
        password: Optional[str] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> str:
        """
        Archive everything under ``from_directory`` into ``output_path``.

        Args:
            from_directory: Directory whose contents become the archive root
            output_path: Archive file to write (replaced if it exists)
            password: Encrypt entries with AES-256 when given
            progress_callback: Called with (current, total) entry counts

        Returns:
            Path of the written archive

        Raises:
            ArchiveError: The archive could not be written
        """
        source_path = Path(from_directory)
        archive_path = str(output_path)
        if not source_path.is_dir():
            raise ArchiveError(f"Archive source is not a directory: {source_path}")

        temp_archive_path = f"{archive_path}.tmp.{os.getpid()}"

        try:
            entries = self.collect_entries(source_path)
            with self._create_zipfile_instance(temp_archive_path, password) as zipf:
                for i, (entry_path, archive_name) in enumerate(entries):
                    zipf.write(entry_path, archive_name)

                    if progress_callback and self.progress_reporter.should_report_progress(
                        i, len(entries)
                    ):
                        progress_callback(i + 1, len(entries))

            os.replace(temp_archive_path, archive_path)

        except (OSError, ValueError, RuntimeError, pyzipper.BadZipFile) as e:
            # UnicodeEncodeError is a ValueError
            self._cleanup_temp_file(temp_archive_path)
            raise ArchiveError(f"Failed to create archive {archive_path}: {e}") from e
        except BaseException:
            self._cleanup_temp_file(temp_archive_path)
            raise

        logger.debug(
            "Wrote %d entries to %s (encrypted=%s)",
            len(entries),
            archive_path,
            password is not None,
        )
        return archive_path
