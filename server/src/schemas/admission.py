"""
Structured admission results for squad creation attempts.

The admission policy returns a Decision; the plugin resolves it into
admin console commands.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DecisionReason(str, Enum):
    """Why an attempt was allowed or denied."""
    UNBLOCKED = "unblocked"
    DEFAULT_NAME_EXEMPT = "default_name_exempt"
    RATE_LIMITED = "rate_limited"
    ROUND_END = "round_end"
    NEW_MATCH_BLOCK = "new_match_block"


@dataclass
class Decision:
    """
    Outcome of evaluating one squad creation attempt.

    A denied attempt always disbands the squad. `feedback` is the warning for
    the player, None in broadcast mode. `kick_reason` is set when the abuse
    tracker decided to kick the player on this attempt.
    """
    allowed: bool
    reason: DecisionReason
    feedback: Optional[str] = None
    kick_reason: Optional[str] = None

    @classmethod
    def allow(cls, reason: DecisionReason) -> 'Decision':
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: DecisionReason, feedback: Optional[str] = None) -> 'Decision':
        return cls(allowed=False, reason=reason, feedback=feedback)

    @property
    def disband(self) -> bool:
        return not self.allowed


@dataclass
class RateLimitResult:
    """Result of registering an attempt with the rate limiter."""
    allowed: bool
    remaining: float = 0.0

    @classmethod
    def ok(cls) -> 'RateLimitResult':
        return cls(allowed=True)

    @classmethod
    def backoff(cls, remaining: float) -> 'RateLimitResult':
        return cls(allowed=False, remaining=remaining)
