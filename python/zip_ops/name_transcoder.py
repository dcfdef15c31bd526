"""
Name transcoding for legacy-encoded archives.

Names are first made filesystem safe by swapping reserved characters for
their full-width forms, then round-tripped through the target encoding.
A name that does not survive the round trip is reported as a failure rather
than being silently altered.
"""

import codecs
from dataclasses import dataclass
from typing import Optional

from colored_logger import get_colored_logger
from .errors import NameTranscodeError, UsageError

logger = get_colored_logger(__name__)

DEFAULT_ENCODING = "cp932"

# Reserved on Windows or used as a path separator somewhere
UNSAFE_CHARACTERS = '<>:"/\\|?*'

# Offset between printable ASCII and the Halfwidth and Fullwidth Forms block
FULLWIDTH_OFFSET = 0xFEE0

_FULLWIDTH_TABLE = str.maketrans(
    {c: chr(ord(c) + FULLWIDTH_OFFSET) for c in UNSAFE_CHARACTERS}
)


def replace_unsafe_characters(name: str) -> str:
    """Replace each reserved character with its full-width counterpart."""
    return name.translate(_FULLWIDTH_TABLE)


@dataclass(frozen=True)
class TranscodeResult:
    """Outcome of transcoding one name."""

    original: str
    name: Optional[str] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.name is not None


class NameTranscoder:
    """Converts display names into names representable in a legacy encoding."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        try:
            self.encoding = codecs.lookup(encoding).name
        except LookupError as e:
            raise UsageError(f"Unknown target encoding: {encoding}") from e

    def transcode(self, name: str) -> TranscodeResult:
        sanitized = replace_unsafe_characters(name)
        try:
            encoded = sanitized.encode(self.encoding)
            decoded = encoded.decode(self.encoding)
        except UnicodeError as e:
            logger.debug("Name %r is not representable in %s: %s", name, self.encoding, e)
            return TranscodeResult(original=name, reason=str(e))

        return TranscodeResult(original=name, name=decoded)

    def transcode_or_raise(self, name: str) -> str:
        """Return the transcoded name or raise NameTranscodeError."""
        result = self.transcode(name)
        if not result.ok:
            raise NameTranscodeError(name, self.encoding, result.reason)
        return result.name
