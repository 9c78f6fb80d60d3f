"""
Admin console (RCON) command service.

Formats the squad creation blocker's commands and issues them as
fire-and-forget tasks on an injected transport. Commands are best-effort:
failures are logged and counted, never retried.
"""

import asyncio
import traceback
from typing import Protocol, Set

from ..core.constants import (
    BROADCAST_COMMAND,
    DISBAND_SQUAD_COMMAND,
    KICK_COMMAND,
    WARN_COMMAND,
)
from ..core.logging_config import get_logger
from ..core.metrics import metrics

logger = get_logger(__name__)


class RconTransport(Protocol):
    """Delivers a raw admin console command to the game server."""

    async def execute(self, command: str) -> str: ...


class LoggingRconTransport:
    """
    Dry-run transport that only logs commands.

    Used when no game server connection is injected.
    """

    async def execute(self, command: str) -> str:
        logger.info("RCON command (dry run)", extra={"command": command})
        return ""


class RconService:
    """Issues disband, warn, broadcast and kick commands."""

    def __init__(self, transport: RconTransport):
        self.transport = transport
        self._tasks: Set[asyncio.Task] = set()

    def disband_squad(self, team_id: int, squad_id: int) -> None:
        self._dispatch(
            "disband", DISBAND_SQUAD_COMMAND.format(team_id=team_id, squad_id=squad_id)
        )

    def warn(self, player_id: str, message: str) -> None:
        self._dispatch("warn", WARN_COMMAND.format(player_id=player_id, message=message))

    def broadcast(self, message: str) -> None:
        self._dispatch("broadcast", BROADCAST_COMMAND.format(message=message))

    def kick(self, player_id: str, reason: str) -> None:
        self._dispatch("kick", KICK_COMMAND.format(player_id=player_id, reason=reason))

    def _dispatch(self, action: str, command: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run(action, command))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, action: str, command: str) -> None:
        try:
            await self.transport.execute(command)
            metrics.track_rcon_command(action, "success")
        except Exception as e:
            metrics.track_rcon_command(action, "error")
            logger.warning(
                "RCON command failed",
                extra={
                    "action": action,
                    "command": command,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "traceback": traceback.format_exc(),
                },
            )

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight command to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
