"""
Error taxonomy for the zip tool.

Every failure surfaced by a run derives from ``JipperError`` so the CLI can
report it with a single handler. Skipping excluded names and special files
is policy and never raises.
"""

from typing import Optional


class JipperError(Exception):
    """Base class for all errors raised during a run."""


class UsageError(JipperError):
    """Invalid arguments or configuration values."""


class NameTranscodeError(JipperError):
    """A name cannot be represented in the target legacy encoding."""

    def __init__(self, name: str, encoding: str, reason: str = ""):
        self.name = name
        self.encoding = encoding
        self.reason = reason
        message = f"Cannot transcode name {name!r} to {encoding}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FilesystemError(JipperError):
    """A copy, create, list, move or remove operation failed."""

    def __init__(
        self, operation: str, path, cause: Optional[BaseException] = None
    ):
        self.operation = operation
        self.path = path
        self.cause = cause
        message = f"Failed to {operation} {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ArchiveError(JipperError):
    """The archive writer could not produce the archive."""
