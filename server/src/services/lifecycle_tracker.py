"""
Lifecycle tracker for squad creation blocking.

Derives the current block phase from match lifecycle signals.
"""

import time
from typing import Callable

from ..core.constants import BlockPhase
from ..core.logging_config import get_logger
from ..core.metrics import metrics

logger = get_logger(__name__)


class LifecycleTracker:
    """
    Holds the single block phase of a plugin instance.

    A NEW_MATCH_BLOCK whose expiry time has passed reads as UNBLOCKED even
    before the expiry timer fires.
    """

    def __init__(self, block_duration: float, clock: Callable[[], float] = time.time):
        self.block_duration = block_duration
        self._clock = clock
        self._phase = BlockPhase.UNBLOCKED
        self._expires_at = 0.0

    def start_new_match(self) -> float:
        """
        Enter the new match block window.

        Returns:
            Timestamp at which the block expires
        """
        self._phase = BlockPhase.NEW_MATCH_BLOCK
        self._expires_at = self._clock() + self.block_duration
        metrics.set_block_phase(self._phase)
        logger.info(
            "New match started, squad creation blocked",
            extra={"block_duration": self.block_duration, "expires_at": self._expires_at},
        )
        return self._expires_at

    def end_round(self) -> None:
        """Block squad creation until the next match starts."""
        self._phase = BlockPhase.ROUND_END_BLOCK
        self._expires_at = 0.0
        metrics.set_block_phase(self._phase)
        logger.info("Round ended, squad creation blocked until next match")

    def expire(self) -> bool:
        """
        Lift the new match block.

        Returns:
            True if the phase changed
        """
        if self._phase != BlockPhase.NEW_MATCH_BLOCK:
            return False
        self._phase = BlockPhase.UNBLOCKED
        metrics.set_block_phase(self._phase)
        logger.info("New match block expired, squad creation unlocked")
        return True

    def current_phase(self) -> BlockPhase:
        if (
            self._phase == BlockPhase.NEW_MATCH_BLOCK
            and self._clock() >= self._expires_at
        ):
            return BlockPhase.UNBLOCKED
        return self._phase

    def time_remaining(self) -> float:
        """Seconds until the new match block expires, 0 in other phases."""
        if self._phase != BlockPhase.NEW_MATCH_BLOCK:
            return 0.0
        return max(0.0, self._expires_at - self._clock())
