from .errors import (
    JipperError,
    UsageError,
    NameTranscodeError,
    FilesystemError,
    ArchiveError,
)

# Leaf components
from .name_transcoder import NameTranscoder, TranscodeResult, replace_unsafe_characters
from .exclusions import ExclusionMatcher, DEFAULT_EXCLUDE_PATTERNS
from .password import (
    PasswordGenerator,
    PasswordDecision,
    PasswordSource,
    PASSWORD_ALPHABET,
    resolve_password,
)
from .staging import StagingDirectory

# Mirroring and archiving
from .directory_mirror import DirectoryMirror, MirrorReport, MAX_DEPTH
from .archive_creators import LegacyZipArchiveCreator, LegacyNameZipFile
from .archive_verifier import ArchiveVerifier, decode_entry_name
from .path_utils import ArchivePathGenerator, relocate_archive
from .config import ZipSettings, load_config

# Orchestration
from .archive_manager import ArchiveManager, ArchiveResult

__all__ = [
    # Errors
    "JipperError",
    "UsageError",
    "NameTranscodeError",
    "FilesystemError",
    "ArchiveError",
    # Leaf components
    "NameTranscoder",
    "TranscodeResult",
    "replace_unsafe_characters",
    "ExclusionMatcher",
    "DEFAULT_EXCLUDE_PATTERNS",
    "PasswordGenerator",
    "PasswordDecision",
    "PasswordSource",
    "PASSWORD_ALPHABET",
    "resolve_password",
    "StagingDirectory",
    # Mirroring and archiving
    "DirectoryMirror",
    "MirrorReport",
    "MAX_DEPTH",
    "LegacyZipArchiveCreator",
    "LegacyNameZipFile",
    "ArchiveVerifier",
    "decode_entry_name",
    "ArchivePathGenerator",
    "relocate_archive",
    # Configuration
    "ZipSettings",
    "load_config",
    # Orchestration
    "ArchiveManager",
    "ArchiveResult",
]
