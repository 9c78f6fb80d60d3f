"""
Prometheus metrics configuration for the squad creation blocker.

This module provides metrics collection for monitoring admission decisions,
issued admin commands, and the current block phase.
"""

from prometheus_client import (
    Counter,
    Gauge,
    Info,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from server.src.core.constants import BlockPhase
from server.src.core.logging_config import get_logger

logger = get_logger(__name__)

# Create a custom registry for our metrics
REGISTRY = CollectorRegistry()

# =============================================================================
# APPLICATION INFO METRICS
# =============================================================================

app_info = Info(
    "squadblock_info", "Squad creation blocker information", registry=REGISTRY
)

# =============================================================================
# ADMISSION METRICS
# =============================================================================

squad_creation_attempts_total = Counter(
    "squadblock_squad_creation_attempts_total",
    "Total number of squad creation attempts evaluated",
    ["reason"],
    registry=REGISTRY,
)

block_phase = Gauge(
    "squadblock_block_phase",
    "Current block phase (1 for the active phase, 0 otherwise)",
    ["phase"],
    registry=REGISTRY,
)

# =============================================================================
# COMMAND METRICS
# =============================================================================

squads_disbanded_total = Counter(
    "squadblock_squads_disbanded_total",
    "Total number of squads disbanded",
    registry=REGISTRY,
)

player_warnings_total = Counter(
    "squadblock_player_warnings_total",
    "Total number of warnings sent to players",
    registry=REGISTRY,
)

broadcasts_total = Counter(
    "squadblock_broadcasts_total",
    "Total number of server-wide broadcasts",
    ["kind"],
    registry=REGISTRY,
)

players_kicked_total = Counter(
    "squadblock_players_kicked_total",
    "Total number of players kicked for excessive squad creation",
    registry=REGISTRY,
)

rcon_commands_total = Counter(
    "squadblock_rcon_commands_total",
    "Total number of admin console commands issued",
    ["command", "status"],
    registry=REGISTRY,
)

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def init_metrics(version: str = "0.1.0", environment: str = "development"):
    """Initialize metrics with application information."""
    app_info.info(
        {
            "version": version,
            "service": "squad-creation-blocker",
            "environment": environment,
        }
    )
    MetricsHelper.set_block_phase(BlockPhase.UNBLOCKED)
    logger.info("Prometheus metrics initialized")


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST


# =============================================================================
# HELPER FUNCTIONS FOR MANUAL METRICS
# =============================================================================


class MetricsHelper:
    """Helper class for manual metrics tracking."""

    @staticmethod
    def track_attempt(reason: str):
        """Track an evaluated squad creation attempt."""
        squad_creation_attempts_total.labels(reason=reason).inc()

    @staticmethod
    def set_block_phase(phase: BlockPhase):
        """Mark the given phase as the active one."""
        for candidate in BlockPhase:
            block_phase.labels(phase=candidate.value).set(
                1 if candidate == phase else 0
            )

    @staticmethod
    def track_disband():
        squads_disbanded_total.inc()

    @staticmethod
    def track_warning():
        player_warnings_total.inc()

    @staticmethod
    def track_broadcast(kind: str):
        """Track a broadcast by kind (countdown, unlocked, round_end)."""
        broadcasts_total.labels(kind=kind).inc()

    @staticmethod
    def track_kick():
        players_kicked_total.inc()

    @staticmethod
    def track_rcon_command(command: str, status: str):
        """Track an admin console command outcome (success, error)."""
        rcon_commands_total.labels(command=command, status=status).inc()


# Global metrics helper instance
metrics = MetricsHelper()
