"""Record id generation."""

from __future__ import annotations

import time
from collections.abc import Callable


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class IdGenerator:
    """Timestamp-derived record ids that never repeat within a process.

    Ids are the epoch milliseconds as a string. When two ids are requested
    within the same millisecond (or the clock steps backwards) the next id
    is the previous one plus one.
    """

    def __init__(self, *, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, existing_id: str) -> None:
        """Make sure future ids sort after *existing_id* when it is numeric."""
        if existing_id.isdigit():
            self._last = max(self._last, int(existing_id))

    def __call__(self) -> str:
        candidate = self._clock()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)
