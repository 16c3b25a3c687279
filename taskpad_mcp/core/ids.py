"""Identity source for tasks, subtasks and templates."""

import time
from collections.abc import Iterable


class IdSource:
    """
    Monotonic integer ids derived from the wall clock.

    Ids look like creation timestamps in milliseconds but never repeat: two
    calls within the same millisecond get consecutive values.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0

    def next(self) -> int:
        now_ms = int(self._clock() * 1000)
        self._last = max(self._last + 1, now_ms)
        return self._last

    def observe(self, ids: Iterable[int]) -> None:
        """Make sure future ids are above every id already in use."""
        for value in ids:
            if value > self._last:
                self._last = value
