"""Injectable time source so resolution can be tested against a fixed "now"."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Default implementation: the system wall clock."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """
    Clock frozen at a given instant. `advance` moves it forward, which is how
    tests simulate elapsed time.
    """

    def __init__(self, now_ms: int) -> None:
        self._now_ms = int(now_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, ms: int) -> None:
        self._now_ms += int(ms)


_system_clock = SystemClock()


# PUBLIC_INTERFACE
def get_clock() -> Clock:
    """FastAPI dependency returning the process clock; override it in tests."""
    return _system_clock
