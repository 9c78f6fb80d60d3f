"""
Deterministic time mocking utilities for tests.

Provides a frozen clock and a manual timer registry so timer-driven plugin
behavior can be tested without sleeping.
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, List


class FrozenTime:
    """
    Time controller for deterministic testing.

    Allows tests to freeze time at a specific point and advance it
    programmatically, eliminating timing-related flakiness.
    """

    def __init__(self, initial_timestamp: float = 1000.0):
        self._timestamp = initial_timestamp

    def now(self) -> float:
        """Get current frozen timestamp."""
        return self._timestamp

    def advance(self, seconds: float) -> None:
        """Advance time by specified seconds."""
        self._timestamp += seconds

    def set_time(self, timestamp: float) -> None:
        """Set time to specific timestamp."""
        self._timestamp = timestamp


@dataclass(order=True)
class ManualTimer:
    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    name: str = field(compare=False, default="timer")
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerRegistry:
    """
    Drop-in replacement for TimerRegistry driven by a FrozenTime.

    Timers only fire from `advance`, in due order, with the clock set to
    each timer's due time while its callback runs.
    """

    def __init__(self, frozen: FrozenTime):
        self.frozen = frozen
        self._timers: List[ManualTimer] = []
        self._seq = itertools.count()

    def schedule(
        self, delay: float, callback: Callable[[], None], name: str = "timer"
    ) -> ManualTimer:
        timer = ManualTimer(
            when=self.frozen.now() + max(0.0, delay),
            seq=next(self._seq),
            callback=callback,
            name=name,
        )
        self._timers.append(timer)
        return timer

    def cancel(self, handle: ManualTimer) -> None:
        handle.cancel()
        if handle in self._timers:
            self._timers.remove(handle)

    def cancel_all(self) -> int:
        count = len(self._timers)
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        return count

    @property
    def pending(self) -> int:
        return len(self._timers)

    @property
    def names(self) -> List[str]:
        return [timer.name for timer in sorted(self._timers)]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that comes due."""
        target = self.frozen.now() + seconds
        while True:
            due = [timer for timer in self._timers if timer.when <= target]
            if not due:
                break
            timer = min(due)
            self._timers.remove(timer)
            self.frozen.set_time(max(self.frozen.now(), timer.when))
            timer.callback()
        self.frozen.set_time(target)
