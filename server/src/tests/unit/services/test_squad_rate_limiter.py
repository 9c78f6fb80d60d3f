"""
Unit tests for SquadCreationRateLimiter and AbuseTracker.

These tests verify the sliding windows, backoff and kick detection on a
frozen clock.
"""

import pytest

from server.src.services.rate_limiter import SquadCreationRateLimiter


class TestSquadCreationRateLimiter:
    """Tests for the per-player backoff limiter."""

    def test_attempts_under_limit_allowed(self, limiter):
        """Up to max_squads attempts within the window are allowed."""
        results = [limiter.check_and_register("player1") for _ in range(3)]

        assert all(result.allowed for result in results)
        assert limiter.recent_attempts("player1") == 3

    def test_attempt_over_limit_sets_backoff(self, limiter):
        """The (max+1)-th attempt within the window is denied and starts a backoff."""
        for _ in range(3):
            limiter.check_and_register("player1")

        result = limiter.check_and_register("player1")

        assert result.allowed is False
        assert result.remaining == pytest.approx(10)
        assert limiter.backoff_remaining("player1") == pytest.approx(10)

    def test_backoff_denies_until_expired(self, limiter, frozen):
        """Attempts during backoff are denied with the time left."""
        for _ in range(4):
            limiter.check_and_register("player1")

        frozen.advance(4)
        result = limiter.check_and_register("player1")

        assert result.allowed is False
        assert result.remaining == pytest.approx(6)

    def test_backoff_not_extended_by_attempts_during_backoff(self, limiter, frozen):
        """Attempts while backed off do not move backoff_until."""
        for _ in range(4):
            limiter.check_and_register("player1")

        frozen.advance(5)
        limiter.check_and_register("player1")
        limiter.check_and_register("player1")

        assert limiter.backoff_remaining("player1") == pytest.approx(5)

    def test_allowed_again_after_backoff(self, limiter, frozen):
        """After backoff expiry the window is empty and attempts are allowed."""
        for _ in range(4):
            limiter.check_and_register("player1")

        frozen.advance(10)
        result = limiter.check_and_register("player1")

        assert result.allowed is True
        assert limiter.recent_attempts("player1") == 1

    def test_allowed_after_short_backoff(self, frozen):
        """A backoff shorter than the window still starts from an empty window."""
        limiter = SquadCreationRateLimiter(
            window=10, max_squads=2, backoff_time=1, clock=frozen.now
        )
        for _ in range(3):
            limiter.check_and_register("player1")

        frozen.advance(1)

        assert limiter.check_and_register("player1").allowed is True

    def test_old_timestamps_pruned(self, limiter, frozen):
        """Attempts older than the window no longer count."""
        for _ in range(3):
            limiter.check_and_register("player1")

        frozen.advance(2)

        assert limiter.recent_attempts("player1") == 0
        assert limiter.check_and_register("player1").allowed is True

    def test_players_independent(self, limiter):
        """Each player has their own window."""
        for _ in range(4):
            limiter.check_and_register("player1")

        assert limiter.check_and_register("player2").allowed is True
        assert limiter.backoff_remaining("player2") == 0

    def test_unknown_player_has_no_backoff(self, limiter):
        assert limiter.backoff_remaining("nobody") == 0
        assert len(limiter) == 0

    def test_clear_resets_all_players(self, limiter):
        for _ in range(4):
            limiter.check_and_register("player1")

        limiter.clear()

        assert limiter.backoff_remaining("player1") == 0
        assert len(limiter) == 0


class TestAbuseTracker:
    """Tests for excessive squad creation detection."""

    def test_within_threshold_no_kick(self, abuse_tracker):
        assert [abuse_tracker.register("player1") for _ in range(3)] == [False, False, False]

    def test_exceeding_threshold_kicks_once(self, abuse_tracker):
        """The (K+1)-th attempt triggers a kick; further attempts in the burst do not."""
        results = [abuse_tracker.register("player1") for _ in range(8)]

        assert results == [False, False, False, True, False, False, False, False]

    def test_slow_attempts_never_kick(self, abuse_tracker, frozen):
        for _ in range(10):
            assert abuse_tracker.register("player1") is False
            frozen.advance(2)

    def test_new_burst_after_window_drains(self, abuse_tracker, frozen):
        """Once the window empties, a fresh burst can trigger another kick."""
        for _ in range(4):
            abuse_tracker.register("player1")

        frozen.advance(5)
        results = [abuse_tracker.register("player1") for _ in range(4)]

        assert results == [False, False, False, True]

    def test_clear_resets_burst(self, abuse_tracker):
        for _ in range(4):
            abuse_tracker.register("player1")

        abuse_tracker.clear()
        results = [abuse_tracker.register("player1") for _ in range(4)]

        assert results[-1] is True

    def test_players_independent(self, abuse_tracker):
        for _ in range(4):
            abuse_tracker.register("player1")

        assert abuse_tracker.register("player2") is False
        assert len(abuse_tracker) == 2
