"""
Per-player sliding windows for squad creation.

SquadCreationRateLimiter applies a short-term backoff to players creating
squads too quickly. AbuseTracker watches a wider window and flags players
for a kick when their total creation rate is excessive.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict

from ..core.logging_config import get_logger
from ..schemas.admission import RateLimitResult

logger = get_logger(__name__)


def _prune(timestamps: Deque[float], now: float, window: float) -> None:
    while timestamps and now - timestamps[0] >= window:
        timestamps.popleft()


@dataclass
class RateLimitRecord:
    timestamps: Deque[float] = field(default_factory=deque)
    backoff_until: float = 0.0


@dataclass
class AbuseTrackerRecord:
    timestamps: Deque[float] = field(default_factory=deque)
    kicked: bool = False


class SquadCreationRateLimiter:
    """
    Sliding-window limiter keyed by player identifier.

    Once a player fills the window they are backed off for `backoff_time`
    seconds. Entering backoff empties the window, so the first attempt after
    the backoff elapses is admitted.
    """

    def __init__(
        self,
        window: float,
        max_squads: int,
        backoff_time: float,
        clock: Callable[[], float] = time.time,
    ):
        self.window = window
        self.max_squads = max_squads
        self.backoff_time = backoff_time
        self._clock = clock
        self._records: Dict[str, RateLimitRecord] = {}

    def check_and_register(self, player_id: str) -> RateLimitResult:
        """
        Register an attempt unless the player is backed off or over the limit.

        Args:
            player_id: Player identifier

        Returns:
            RateLimitResult, with the seconds left when backed off
        """
        now = self._clock()
        record = self._records.setdefault(player_id, RateLimitRecord())

        if now < record.backoff_until:
            return RateLimitResult.backoff(record.backoff_until - now)

        _prune(record.timestamps, now, self.window)

        if len(record.timestamps) >= self.max_squads:
            record.backoff_until = max(record.backoff_until, now + self.backoff_time)
            record.timestamps.clear()
            logger.info(
                "Player exceeded squad creation rate, backing off",
                extra={
                    "player_id": player_id,
                    "max_squads": self.max_squads,
                    "window": self.window,
                    "backoff_until": record.backoff_until,
                },
            )
            return RateLimitResult.backoff(record.backoff_until - now)

        record.timestamps.append(now)
        return RateLimitResult.ok()

    def backoff_remaining(self, player_id: str) -> float:
        """Seconds of backoff left for the player, 0 if none."""
        record = self._records.get(player_id)
        if record is None:
            return 0.0
        return max(0.0, record.backoff_until - self._clock())

    def recent_attempts(self, player_id: str) -> int:
        record = self._records.get(player_id)
        if record is None:
            return 0
        _prune(record.timestamps, self._clock(), self.window)
        return len(record.timestamps)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class AbuseTracker:
    """
    Detects excessive total squad creation within `window` seconds.

    `register` returns True once per burst: when the count first exceeds
    `max_squads`. The burst ends when the window drains empty or the
    tracker is cleared.
    """

    def __init__(
        self,
        window: float,
        max_squads: int,
        clock: Callable[[], float] = time.time,
    ):
        self.window = window
        self.max_squads = max_squads
        self._clock = clock
        self._records: Dict[str, AbuseTrackerRecord] = {}

    def register(self, player_id: str) -> bool:
        now = self._clock()
        record = self._records.setdefault(player_id, AbuseTrackerRecord())

        _prune(record.timestamps, now, self.window)
        if not record.timestamps:
            record.kicked = False

        record.timestamps.append(now)

        if len(record.timestamps) > self.max_squads and not record.kicked:
            record.kicked = True
            logger.warning(
                "Excessive squad creation detected",
                extra={
                    "player_id": player_id,
                    "count": len(record.timestamps),
                    "window": self.window,
                },
            )
            return True
        return False

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
