"""Result memoization for wikiprojects.

Each resolver owns one cache per operation. Entries are written once
(insert-if-absent) and never evicted; misses are cached as well. Reads hand
out deep copies so a caller mutating a result cannot affect other callers.
"""

import copy
import threading
from collections.abc import Callable, Hashable
from typing import Any


_MISSING = object()


class ResultCache:
    """Unbounded key -> result table with copy-on-read."""

    def __init__(self, copy_on_read: bool = True) -> None:
        """Initialize the cache.

        Args:
            copy_on_read: Deep-copy values handed out. Disable for values
                that are immutable or meant to be shared (e.g. functions).
        """
        self.copy_on_read = copy_on_read
        self._entries: dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def _out(self, value: Any) -> Any:
        return copy.deepcopy(value) if self.copy_on_read else value

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, computing and storing it on a miss."""
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            computed = compute()
            with self._lock:
                value = self._entries.setdefault(key, computed)
        return self._out(value)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()
