"""Access to the system clock, kept behind an object so tests can pin time."""

import time


class System2:
    """Supplies the current time in epoch milliseconds."""

    def now(self) -> int:
        return int(time.time() * 1000)


class FixedClock(System2):
    """Clock returning a settable instant. Used by tests and dry runs."""

    def __init__(self, now_ms: int = 0):
        self._now = now_ms

    def now(self) -> int:
        return self._now

    def set_now(self, now_ms: int) -> None:
        self._now = now_ms

    def advance(self, delta_ms: int) -> None:
        self._now += delta_ms
