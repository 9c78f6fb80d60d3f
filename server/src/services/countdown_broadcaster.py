"""
Countdown broadcasts for the new match block window.

Each style is a strategy producing the "seconds remaining" marks at which a
broadcast fires. Styles are mutually exclusive and selected by configuration.
"""

import math
from typing import Callable, Dict, List, Tuple

from ..core.constants import COUNTDOWN_MESSAGE, CountdownStyle, plural
from ..core.logging_config import get_logger
from ..core.timers import TimerRegistry

logger = get_logger(__name__)


class CountdownStrategy:
    """Base strategy: no broadcasts."""

    def marks(self, duration: float) -> List[float]:
        """Seconds remaining at each broadcast, in firing order."""
        return []

    def schedule(self, duration: float) -> List[Tuple[float, float]]:
        """(delay, remaining) pairs for a block of `duration` seconds."""
        return [(duration - remaining, remaining) for remaining in self.marks(duration)]


class IntervalCountdown(CountdownStrategy):
    """One broadcast every `interval` seconds after the match starts."""

    def __init__(self, interval: float = 5):
        self.interval = interval

    def marks(self, duration: float) -> List[float]:
        marks = []
        elapsed = self.interval
        while duration - elapsed > 0:
            marks.append(duration - elapsed)
            elapsed += self.interval
        return marks


class DecileCountdown(CountdownStrategy):
    """One broadcast at every multiple of 10 seconds remaining."""

    def marks(self, duration: float) -> List[float]:
        top = math.ceil(duration / 10) * 10 - 10
        return [float(remaining) for remaining in range(int(top), 0, -10)]


class ThresholdCountdown(CountdownStrategy):
    """A single broadcast `threshold` seconds before the block expires."""

    def __init__(self, threshold: float = 10):
        self.threshold = threshold

    def marks(self, duration: float) -> List[float]:
        return [self.threshold] if duration > self.threshold else []


def build_strategy(
    style: CountdownStyle, interval: float = 5, threshold: float = 10
) -> CountdownStrategy:
    strategies: Dict[CountdownStyle, Callable[[], CountdownStrategy]] = {
        CountdownStyle.INTERVAL: lambda: IntervalCountdown(interval),
        CountdownStyle.DECILE: DecileCountdown,
        CountdownStyle.THRESHOLD: lambda: ThresholdCountdown(threshold),
    }
    return strategies[CountdownStyle(style)]()


class CountdownBroadcaster:
    """
    Schedules countdown broadcasts on the plugin's timer registry.

    Cancellation happens through the registry, together with every other
    timer the plugin owns.
    """

    def __init__(
        self,
        strategy: CountdownStrategy,
        timers: TimerRegistry,
        broadcast: Callable[[str], None],
        squad_kind: str = "Custom",
    ):
        self.strategy = strategy
        self.timers = timers
        self.broadcast = broadcast
        self.squad_kind = squad_kind

    def format_message(self, remaining: float) -> str:
        seconds = math.ceil(remaining)
        return COUNTDOWN_MESSAGE.format(
            kind=self.squad_kind, seconds=seconds, plural=plural(seconds)
        )

    def arm(self, duration: float) -> int:
        """
        Schedule the countdown for a block of `duration` seconds.

        Returns:
            Number of broadcasts scheduled
        """
        schedule = self.strategy.schedule(duration)
        for delay, remaining in schedule:
            message = self.format_message(remaining)
            self.timers.schedule(
                delay,
                lambda message=message: self.broadcast(message),
                name=f"countdown-{math.ceil(remaining)}",
            )

        logger.debug(
            "Countdown broadcasts scheduled",
            extra={
                "strategy": type(self.strategy).__name__,
                "duration": duration,
                "count": len(schedule),
            },
        )
        return len(schedule)
