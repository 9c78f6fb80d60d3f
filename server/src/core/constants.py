"""
Shared constants and enums used across multiple layers.

This module contains enums, patterns and message templates that are needed by:
- Config (settings validation)
- Schemas (event and decision types)
- Services (admission logic and command formatting)

Placing them here avoids circular imports and cross-layer dependencies.
"""

import re
from enum import Enum


class BlockPhase(str, Enum):
    """Squad creation restriction states."""
    UNBLOCKED = "unblocked"
    NEW_MATCH_BLOCK = "new_match_block"
    ROUND_END_BLOCK = "round_end_block"


class CountdownStyle(str, Enum):
    """Countdown broadcast strategies."""
    INTERVAL = "interval"
    DECILE = "decile"
    THRESHOLD = "threshold"


# Auto-assigned squad names, e.g. "Squad 3"
DEFAULT_SQUAD_NAME_PATTERN = re.compile(r"^[Ss]quad \d+$")

# Player-facing messages
UNLOCKED_MESSAGE = "{kind} squad creation is now unlocked!"
COUNTDOWN_MESSAGE = "{kind} squad creation unlocked in {seconds} second{plural}!"
ROUND_END_BROADCAST_MESSAGE = "Squad creation is currently blocked until the next round starts."
NEW_MATCH_WARNING = (
    "{kind} squad creation is blocked for the first {duration} seconds of the game. "
    "Please wait {seconds} second{plural}."
)
ROUND_END_WARNING = "{kind} squad creation is not allowed at the end of a round."
RATE_LIMIT_WARNING = (
    "You have exceeded the squad creation limit. Please wait {seconds} second{plural}."
)
KICK_REASON = (
    "Excessive squad creations at round start. Please avoid spamming squad creations."
)

# Admin console commands
DISBAND_SQUAD_COMMAND = "AdminDisbandSquad {team_id} {squad_id}"
WARN_COMMAND = 'AdminWarn "{player_id}" {message}'
BROADCAST_COMMAND = "AdminBroadcast {message}"
KICK_COMMAND = 'AdminKick "{player_id}" {reason}'


def plural(count: int) -> str:
    """Suffix for "second"/"seconds"."""
    return "" if count == 1 else "s"
