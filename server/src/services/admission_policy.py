"""
Admission policy for squad creation attempts.

Decides, for each attempt, whether the squad may stay and what feedback the
player gets. Evaluation order:

1. Unblocked and not backed off: allow.
2. Default squad name exemption (when enabled): allow, even during backoff.
3. Rate limiter backoff (when enabled): deny.
4. Round end block: deny.
5. New match block: deny with the seconds remaining.

Every attempt, allowed or not, is registered with the abuse tracker when the
kick policy is enforced.
"""

import math
from typing import Optional

from ..core.config import Settings
from ..core.constants import (
    BlockPhase,
    DEFAULT_SQUAD_NAME_PATTERN,
    KICK_REASON,
    NEW_MATCH_WARNING,
    RATE_LIMIT_WARNING,
    ROUND_END_WARNING,
    plural,
)
from ..core.logging_config import get_logger
from ..schemas.admission import Decision, DecisionReason
from ..schemas.events import SquadCreatedEvent
from .lifecycle_tracker import LifecycleTracker
from .rate_limiter import AbuseTracker, SquadCreationRateLimiter

logger = get_logger(__name__)


def is_default_squad_name(squad_name: str) -> bool:
    """True for auto-assigned names such as "Squad 3"."""
    return bool(DEFAULT_SQUAD_NAME_PATTERN.match(squad_name))


def whole_seconds(seconds: float) -> int:
    return max(0, math.ceil(seconds))


class AdmissionPolicy:
    """Evaluates squad creation attempts against the current block phase."""

    def __init__(
        self,
        settings: Settings,
        tracker: LifecycleTracker,
        rate_limiter: Optional[SquadCreationRateLimiter] = None,
        abuse_tracker: Optional[AbuseTracker] = None,
    ):
        self.settings = settings
        self.tracker = tracker
        self.rate_limiter = rate_limiter
        self.abuse_tracker = abuse_tracker

    def evaluate(self, attempt: SquadCreatedEvent) -> Decision:
        decision = self._admit(attempt)

        if self.abuse_tracker is not None and self.abuse_tracker.register(attempt.player_id):
            decision.kick_reason = KICK_REASON

        logger.debug(
            "Squad creation evaluated",
            extra={
                "player_id": attempt.player_id,
                "squad_name": attempt.squad_name,
                "allowed": decision.allowed,
                "reason": decision.reason.value,
                "kick": decision.kick_reason is not None,
            },
        )
        return decision

    def _admit(self, attempt: SquadCreatedEvent) -> Decision:
        phase = self.tracker.current_phase()
        backed_off = (
            self.rate_limiter is not None
            and self.rate_limiter.backoff_remaining(attempt.player_id) > 0
        )

        if phase == BlockPhase.UNBLOCKED and not backed_off:
            return Decision.allow(DecisionReason.UNBLOCKED)

        if self.settings.ALLOW_DEFAULT_SQUAD_NAMES and is_default_squad_name(attempt.squad_name):
            return Decision.allow(DecisionReason.DEFAULT_NAME_EXEMPT)

        if self.rate_limiter is not None:
            result = self.rate_limiter.check_and_register(attempt.player_id)
            if not result.allowed:
                seconds = whole_seconds(result.remaining)
                return self._deny(
                    DecisionReason.RATE_LIMITED,
                    RATE_LIMIT_WARNING.format(seconds=seconds, plural=plural(seconds)),
                )

        if phase == BlockPhase.ROUND_END_BLOCK:
            return self._deny(
                DecisionReason.ROUND_END,
                ROUND_END_WARNING.format(kind=self.settings.squad_kind),
            )

        if phase == BlockPhase.NEW_MATCH_BLOCK:
            seconds = whole_seconds(self.tracker.time_remaining())
            return self._deny(
                DecisionReason.NEW_MATCH_BLOCK,
                NEW_MATCH_WARNING.format(
                    kind=self.settings.squad_kind,
                    duration=_format_duration(self.settings.BLOCK_DURATION),
                    seconds=seconds,
                    plural=plural(seconds),
                ),
            )

        return Decision.allow(DecisionReason.UNBLOCKED)

    def _deny(self, reason: DecisionReason, feedback: str) -> Decision:
        if self.settings.BROADCAST_MODE:
            return Decision.deny(reason)
        return Decision.deny(reason, feedback)


def _format_duration(seconds: float) -> str:
    return str(int(seconds)) if float(seconds).is_integer() else str(seconds)
