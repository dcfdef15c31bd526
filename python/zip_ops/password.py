"""
Random password generation and password precedence.

The generator is a convenience for producing a shareable archive password.
It draws from the OS-seeded ``random.SystemRandom`` but makes no claim to be
a security-grade secret generator; callers that need one should supply their
own password.
"""

import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import UsageError

PASSWORD_SYMBOLS = "!@#$%^&*"
PASSWORD_ALPHABET = (
    string.ascii_lowercase + string.ascii_uppercase + string.digits + PASSWORD_SYMBOLS
)


class PasswordGenerator:
    """Draws characters uniformly, with replacement, from a fixed alphabet."""

    def __init__(self, alphabet: str = PASSWORD_ALPHABET, rng=None):
        self.alphabet = alphabet
        self._rng = rng or random.SystemRandom()

    def generate(self, length: int) -> str:
        if isinstance(length, bool) or not isinstance(length, int):
            raise UsageError(f"Password length must be an integer, got {length!r}")
        if length <= 0:
            raise UsageError(f"Password length must be at least 1, got {length}")
        return "".join(self._rng.choice(self.alphabet) for _ in range(length))


class PasswordSource(Enum):
    NONE = "none"
    EXPLICIT = "explicit"
    GENERATED = "generated"


@dataclass(frozen=True)
class PasswordDecision:
    """Which password (if any) protects the archive, and where it came from."""

    source: PasswordSource
    password: Optional[str] = None

    @property
    def encrypted(self) -> bool:
        return self.password is not None

    @property
    def generated(self) -> bool:
        return self.source is PasswordSource.GENERATED

    def __repr__(self) -> str:
        # keep passwords out of debug logs
        return f"PasswordDecision(source={self.source.value})"


def resolve_password(
    password: Optional[str] = None,
    length: Optional[int] = None,
    generator: Optional[PasswordGenerator] = None,
) -> PasswordDecision:
    """
    Resolve the password for a run.

    An explicit password always wins; the length is then ignored and nothing
    is generated. Otherwise a length produces a generated password, and with
    neither the archive is left unencrypted.
    """
    if password is not None:
        if password == "":
            raise UsageError("Password must not be empty")
        return PasswordDecision(PasswordSource.EXPLICIT, password)

    if length is not None:
        generator = generator or PasswordGenerator()
        return PasswordDecision(PasswordSource.GENERATED, generator.generate(length))

    return PasswordDecision(PasswordSource.NONE)
