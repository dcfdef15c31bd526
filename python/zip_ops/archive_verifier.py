"""
Archive integrity verification.

Reads back an archive produced by LegacyZipArchiveCreator, checking entry
CRCs and recovering the legacy-encoded entry names.
"""

from typing import Any, Dict, List, Optional

import pyzipper

from colored_logger import get_colored_logger
from .archive_creators import UTF8_FLAG
from .name_transcoder import DEFAULT_ENCODING

logger = get_colored_logger(__name__)

# Names without the UTF-8 flag are decoded as cp437 by the zip reader
READER_FALLBACK_ENCODING = "cp437"


def decode_entry_name(info, encoding: str = DEFAULT_ENCODING) -> str:
    """Recover an entry name written in ``encoding``."""
    if info.flag_bits & UTF8_FLAG:
        return info.filename
    return info.filename.encode(READER_FALLBACK_ENCODING).decode(encoding)


class ArchiveVerifier:
    """Verifies ZIP archive integrity and lists legacy-encoded names."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def verify_integrity(self, archive_path: str, password: Optional[str] = None) -> bool:
        try:
            with pyzipper.AESZipFile(archive_path, "r") as zipf:
                if password is not None:
                    zipf.setpassword(password.encode("utf-8"))
                bad_file = zipf.testzip()
                if bad_file is not None:
                    logger.debug("ZIP integrity check failed on file: %s", bad_file)
                    return False
                return True
        except (OSError, RuntimeError, ValueError, pyzipper.BadZipFile) as e:
            logger.debug("ZIP integrity verification failed: %s", e)
            return False

    def read_entry_names(self, archive_path: str) -> List[str]:
        with pyzipper.AESZipFile(archive_path, "r") as zipf:
            return [decode_entry_name(info, self.encoding) for info in zipf.infolist()]

    def get_archive_info(self, archive_path: str) -> Dict[str, Any]:
        with pyzipper.AESZipFile(archive_path, "r") as zipf:
            file_list = zipf.infolist()
            return {
                "entry_count": len(file_list),
                "encrypted": any(info.flag_bits & 0x1 for info in file_list),
                "compressed_size": sum(info.compress_size for info in file_list),
                "uncompressed_size": sum(info.file_size for info in file_list),
            }
