"""Lazily compiled regular expressions for catalog records.

Catalog patterns are plain strings; each one is compiled on first use and
kept for the lifetime of the cache. A pattern that fails to compile is
remembered as ``None`` so the record simply never matches.
"""

import re
import threading
from collections.abc import Callable, Hashable


class PatternCache:
    """Compiled pattern store keyed by (purpose, record kind, record name)."""

    def __init__(self) -> None:
        self._patterns: dict[Hashable, re.Pattern[str] | None] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, build: Callable[[], str]) -> re.Pattern[str] | None:
        """Return the compiled pattern for ``key``, building its source if needed.

        Args:
            key: Cache key identifying the record and what the pattern is for
            build: Returns the pattern source when the key is not cached yet

        Returns:
            The compiled pattern, or None if the source is not a valid regex
        """
        try:
            return self._patterns[key]
        except KeyError:
            pass

        try:
            compiled: re.Pattern[str] | None = re.compile(build())
        except re.error:
            compiled = None

        with self._lock:
            return self._patterns.setdefault(key, compiled)

    def __len__(self) -> int:
        return len(self._patterns)
