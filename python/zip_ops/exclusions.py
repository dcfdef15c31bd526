"""Glob-based exclusion of OS metadata entries."""

import fnmatch
import re
from typing import Iterable, List, Optional

DEFAULT_EXCLUDE_PATTERNS = [
    ".DS_Store",  # macOS Finder metadata file
    "__MACOSX",  # macOS resource fork directory found in extracted zips
]


class ExclusionMatcher:
    """Decides whether a single entry name should be left out of the mirror."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = list(
            DEFAULT_EXCLUDE_PATTERNS if patterns is None else patterns
        )
        # fnmatch.translate keeps case; compiled without IGNORECASE on purpose
        self._regexes = [re.compile(fnmatch.translate(p)) for p in self.patterns]

    @classmethod
    def with_defaults(cls, extra_patterns: Optional[Iterable[str]] = None):
        patterns = list(DEFAULT_EXCLUDE_PATTERNS)
        for pattern in extra_patterns or []:
            if pattern not in patterns:
                patterns.append(pattern)
        return cls(patterns)

    def is_excluded(self, name: str) -> bool:
        return any(regex.match(name) for regex in self._regexes)
