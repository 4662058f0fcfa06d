"""
Timers for the round controller.

`Scheduler` keeps a virtual clock measured in game time units. Callbacks
never fire on their own: the owner advances the clock and due callbacks run
in order, on the caller's thread. Callbacks may schedule further timers;
those fire within the same advance if they fall due before its target time.

`ClockScheduler` maps a wall clock onto that virtual time so the API can
catch a session up to "now" at the start of each request.
"""

from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class TimerToken:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<TimerToken due={self.due:g} {state}>"


class Scheduler:
    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: List[Tuple[float, int, TimerToken]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerToken:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        token = TimerToken(self._now + delay, callback)
        # seq keeps same-due timers in scheduling order
        heapq.heappush(self._queue, (token.due, next(self._seq), token))
        return token

    def cancel(self, token: Optional[TimerToken]) -> None:
        if token is not None:
            token.cancelled = True

    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if t.active)

    def advance_to(self, when: float) -> int:
        """Run every callback due at or before `when`; returns how many fired."""
        fired = 0
        while self._queue and self._queue[0][0] <= when:
            due, _, token = heapq.heappop(self._queue)
            if token.cancelled:
                continue
            self._now = max(self._now, due)
            # spent tokens count as cancelled so a late cancel() is harmless
            token.cancelled = True
            token.callback()
            fired += 1
        self._now = max(self._now, when)
        return fired

    def advance(self, delta: float) -> int:
        return self.advance_to(self._now + delta)


class ClockScheduler(Scheduler):
    """Scheduler whose virtual time follows `clock()` at `unit_seconds` per unit."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        unit_seconds: float = 1.0,
    ):
        if unit_seconds <= 0:
            raise ValueError("unit_seconds must be > 0")
        super().__init__()
        self._clock = clock
        self._unit = unit_seconds
        self._origin = clock()

    def sync(self) -> int:
        return self.advance_to((self._clock() - self._origin) / self._unit)
