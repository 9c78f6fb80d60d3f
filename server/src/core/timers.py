"""
Cancelable timer registry.

All delayed callbacks owned by a plugin instance (block expiry, countdown
broadcasts) are scheduled here so they can be cancelled as a group when the
phase changes or the plugin is unmounted.
"""

import asyncio
import traceback
from typing import Callable, Optional, Set

from server.src.core.logging_config import get_logger

logger = get_logger(__name__)


class TimerRegistry:
    """
    Registry of pending one-shot timers on the running asyncio loop.

    Handles leave the registry when they fire or are cancelled, so `pending`
    always reflects timers that can still run.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handles: Set[asyncio.TimerHandle] = set()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(
        self, delay: float, callback: Callable[[], None], name: str = "timer"
    ) -> asyncio.TimerHandle:
        """
        Run `callback` once after `delay` seconds.

        Args:
            delay: Seconds to wait, negative values run on the next loop iteration
            callback: Zero-argument callable
            name: Label used in log output

        Returns:
            The scheduled handle
        """
        handle: Optional[asyncio.TimerHandle] = None

        def _fire():
            self._handles.discard(handle)
            try:
                callback()
            except Exception as e:
                logger.error(
                    "Timer callback failed",
                    extra={
                        "timer": name,
                        "error": str(e),
                        "error_type": type(e).__name__,
                        "traceback": traceback.format_exc(),
                    },
                )

        handle = self._get_loop().call_later(max(0.0, delay), _fire)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
        self._handles.discard(handle)

    def cancel_all(self) -> int:
        """
        Cancel every pending timer.

        Returns:
            Number of timers cancelled
        """
        count = len(self._handles)
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        if count:
            logger.debug("Cancelled pending timers", extra={"count": count})
        return count

    @property
    def pending(self) -> int:
        return len(self._handles)
