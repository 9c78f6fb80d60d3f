"""
Test fixtures for unit tests.

Fast fixtures on the frozen clock that don't need a plugin instance.
"""

import pytest

from server.src.services.rate_limiter import AbuseTracker, SquadCreationRateLimiter
from server.src.tests.utils.time_mock import FrozenTime


@pytest.fixture
def limiter(frozen: FrozenTime) -> SquadCreationRateLimiter:
    """Rate limiter with the default options: 3 squads per 2s, 10s backoff."""
    return SquadCreationRateLimiter(
        window=2, max_squads=3, backoff_time=10, clock=frozen.now
    )


@pytest.fixture
def abuse_tracker(frozen: FrozenTime) -> AbuseTracker:
    """Abuse tracker kicking above 3 squads in 5s."""
    return AbuseTracker(window=5, max_squads=3, clock=frozen.now)
