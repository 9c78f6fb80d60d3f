"""
Squad creation blocker plugin.

Prevents squads with custom names from being created within a configured
time after a new game starts and at the end of a round. Either broadcasts
countdown messages or warns individual players, and can rate limit and kick
players who spam squad creation.
"""

import time
from typing import Any, Callable, Dict, Optional, Protocol

from pydantic import ValidationError

from ..core.config import Settings
from ..core.constants import ROUND_END_BROADCAST_MESSAGE, UNLOCKED_MESSAGE
from ..core.logging_config import get_logger
from ..core.metrics import metrics
from ..core.timers import TimerRegistry
from ..schemas.admission import Decision
from ..schemas.events import HostEvent, HostEventType, SquadCreatedEvent
from .admission_policy import AdmissionPolicy, whole_seconds
from .countdown_broadcaster import CountdownBroadcaster, build_strategy
from .lifecycle_tracker import LifecycleTracker
from .rate_limiter import AbuseTracker, SquadCreationRateLimiter

logger = get_logger(__name__)


class CommandSink(Protocol):
    """Outbound admin commands, issued fire-and-forget."""

    def disband_squad(self, team_id: int, squad_id: int) -> None: ...

    def warn(self, player_id: str, message: str) -> None: ...

    def broadcast(self, message: str) -> None: ...

    def kick(self, player_id: str, reason: str) -> None: ...


class SquadCreationBlocker:
    """
    Plugin instance owning the block phase, per-player windows and timers.

    Disabled by default; events are ignored until `mount()` is called.
    """

    description = (
        "Prevents squads with custom names from being created within a specified "
        "time after a new game starts and at the end of a round."
    )

    def __init__(
        self,
        settings: Settings,
        commands: CommandSink,
        timers: Optional[TimerRegistry] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings
        self.commands = commands
        self.timers = timers if timers is not None else TimerRegistry()
        self.clock = clock
        self.mounted = False

        self.tracker = LifecycleTracker(settings.BLOCK_DURATION, clock=clock)
        self.rate_limiter: Optional[SquadCreationRateLimiter] = None
        if settings.RATE_LIMIT_ENFORCED:
            self.rate_limiter = SquadCreationRateLimiter(
                window=settings.RATE_LIMIT_WINDOW,
                max_squads=settings.RATE_LIMIT_MAX_SQUADS,
                backoff_time=settings.RATE_LIMIT_BACKOFF_TIME,
                clock=clock,
            )
        self.abuse_tracker: Optional[AbuseTracker] = None
        if settings.ENFORCE_MAX_SQUAD_CREATION_KICK:
            self.abuse_tracker = AbuseTracker(
                window=settings.TIME_WINDOW_FOR_KICK,
                max_squads=settings.MAX_SQUADS_IN_TIME_WINDOW,
                clock=clock,
            )

        self.policy = AdmissionPolicy(
            settings, self.tracker, self.rate_limiter, self.abuse_tracker
        )
        self.countdown = CountdownBroadcaster(
            build_strategy(
                settings.COUNTDOWN_STYLE,
                interval=settings.COUNTDOWN_INTERVAL,
                threshold=settings.COUNTDOWN_THRESHOLD,
            ),
            self.timers,
            self._countdown_broadcast,
            squad_kind=settings.squad_kind,
        )

    # ------------------------------------------------------------------
    # Plugin lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        self.mounted = True
        logger.info(
            "Squad creation blocker mounted",
            extra={
                "block_duration": self.settings.BLOCK_DURATION,
                "broadcast_mode": self.settings.BROADCAST_MODE,
                "rate_limit": self.rate_limiter is not None,
                "kick_policy": self.abuse_tracker is not None,
            },
        )

    def unmount(self) -> None:
        self.mounted = False
        cancelled = self.timers.cancel_all()
        logger.info("Squad creation blocker unmounted", extra={"cancelled_timers": cancelled})

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def dispatch(self, raw: Dict[str, Any]) -> bool:
        """
        Validate and route a raw host event.

        Args:
            raw: Event envelope, {"event": ..., "data": {...}}

        Returns:
            True if the event was handled, False if it was ignored
        """
        if not self.mounted:
            logger.debug("Event ignored, plugin not mounted", extra={"raw_event": raw})
            return False

        try:
            event = HostEvent.model_validate(raw)
            if event.event == HostEventType.NEW_GAME:
                self.handle_new_game()
            elif event.event == HostEventType.ROUND_ENDED:
                self.handle_round_end()
            else:
                self.handle_squad_created(SquadCreatedEvent.model_validate(event.data))
        except ValidationError as e:
            logger.warning(
                "Ignoring malformed host event",
                extra={"raw_event": raw, "errors": e.errors(include_url=False)},
            )
            return False
        return True

    def handle_new_game(self) -> None:
        self.timers.cancel_all()
        if self.rate_limiter is not None:
            self.rate_limiter.clear()
        if self.abuse_tracker is not None:
            self.abuse_tracker.clear()

        self.tracker.start_new_match()
        duration = self.settings.BLOCK_DURATION

        if self.settings.BROADCAST_MODE:
            self.countdown.arm(duration)

        self.timers.schedule(duration, self._expire_block, name="block-expiry")

    def handle_round_end(self) -> None:
        self.tracker.end_round()
        self.timers.cancel_all()
        if self.abuse_tracker is not None:
            self.abuse_tracker.clear()

        if self.settings.ROUND_END_BROADCAST:
            self._broadcast(ROUND_END_BROADCAST_MESSAGE, "round_end")

    def handle_squad_created(self, attempt: SquadCreatedEvent) -> Decision:
        decision = self.policy.evaluate(attempt)
        metrics.track_attempt(decision.reason.value)

        if decision.disband:
            self.commands.disband_squad(attempt.team_id, attempt.squad_id)
            metrics.track_disband()
            if decision.feedback is not None:
                self.commands.warn(attempt.player_id, decision.feedback)
                metrics.track_warning()
            logger.info(
                "Squad disbanded",
                extra={
                    "player_id": attempt.player_id,
                    "team_id": attempt.team_id,
                    "squad_id": attempt.squad_id,
                    "squad_name": attempt.squad_name,
                    "reason": decision.reason.value,
                },
            )

        if decision.kick_reason is not None:
            self.commands.kick(attempt.player_id, decision.kick_reason)
            metrics.track_kick()
            logger.info(
                "Player kicked for excessive squad creation",
                extra={"player_id": attempt.player_id},
            )

        return decision

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "mounted": self.mounted,
            "phase": self.tracker.current_phase().value,
            "seconds_remaining": whole_seconds(self.tracker.time_remaining()),
            "pending_timers": self.timers.pending,
            "rate_limited_players": (
                len(self.rate_limiter) if self.rate_limiter is not None else 0
            ),
        }

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _expire_block(self) -> None:
        if self.tracker.expire():
            self._broadcast(
                UNLOCKED_MESSAGE.format(kind=self.settings.squad_kind), "unlocked"
            )

    def _countdown_broadcast(self, message: str) -> None:
        self._broadcast(message, "countdown")

    def _broadcast(self, message: str, kind: str) -> None:
        self.commands.broadcast(message)
        metrics.track_broadcast(kind)
