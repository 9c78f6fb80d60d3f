import yaml
from pathlib import Path
from typing import Dict, Any
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from server.src.core.constants import CountdownStyle


def load_plugin_config() -> Dict[str, Any]:
    """Load squad creation blocker options from config.yml"""
    config_path = Path("/app/server/config.yml")
    if not config_path.exists():
        # Fallback to relative path for development
        config_path = Path("server/config.yml")

    if config_path.exists():
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return data.get("squad_creation_blocker", {}) or {}
    return {}


# Load plugin options from YAML
plugin_config = load_plugin_config()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Plugin switch
    ENABLED: bool = plugin_config.get("enabled", False)

    # New match block window
    BLOCK_DURATION: float = Field(
        default=plugin_config.get("block_duration", 15), ge=0
    )

    # Countdown broadcasts vs. per-player warnings
    BROADCAST_MODE: bool = plugin_config.get("broadcast_mode", False)
    COUNTDOWN_STYLE: CountdownStyle = CountdownStyle(
        plugin_config.get("countdown", {}).get("style", CountdownStyle.INTERVAL.value)
    )
    COUNTDOWN_INTERVAL: float = Field(
        default=plugin_config.get("countdown", {}).get("interval", 5), gt=0
    )
    COUNTDOWN_THRESHOLD: float = Field(
        default=plugin_config.get("countdown", {}).get("threshold", 10), gt=0
    )
    ROUND_END_BROADCAST: bool = plugin_config.get("round_end_broadcast", True)

    ALLOW_DEFAULT_SQUAD_NAMES: bool = plugin_config.get(
        "allow_default_squad_names", True
    )

    # Rate limiter settings from config.yml with fallbacks
    RATE_LIMIT_ENFORCED: bool = plugin_config.get("rate_limit", {}).get(
        "enforced", False
    )
    RATE_LIMIT_WINDOW: float = Field(
        default=plugin_config.get("rate_limit", {}).get("window", 2), gt=0
    )
    RATE_LIMIT_MAX_SQUADS: int = Field(
        default=plugin_config.get("rate_limit", {}).get("max_squads", 3), gt=0
    )
    RATE_LIMIT_BACKOFF_TIME: float = Field(
        default=plugin_config.get("rate_limit", {}).get("backoff_time", 10), gt=0
    )

    # Kick policy settings from config.yml with fallbacks
    ENFORCE_MAX_SQUAD_CREATION_KICK: bool = plugin_config.get("kick", {}).get(
        "enforced", False
    )
    MAX_SQUADS_IN_TIME_WINDOW: int = Field(
        default=plugin_config.get("kick", {}).get("max_squads", 10), gt=0
    )
    TIME_WINDOW_FOR_KICK: float = Field(
        default=plugin_config.get("kick", {}).get("time_window", 5), gt=0
    )

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    @model_validator(mode="after")
    def validate_kick_window(self) -> "Settings":
        """The kick window must not be narrower than the rate limit window."""
        if (
            self.ENFORCE_MAX_SQUAD_CREATION_KICK
            and self.RATE_LIMIT_ENFORCED
            and self.TIME_WINDOW_FOR_KICK < self.RATE_LIMIT_WINDOW
        ):
            raise ValueError(
                "TIME_WINDOW_FOR_KICK must be at least RATE_LIMIT_WINDOW when both "
                "the kick policy and the rate limiter are enforced."
            )
        return self

    @property
    def squad_kind(self) -> str:
        """Label used in player-facing messages."""
        return "Custom" if self.ALLOW_DEFAULT_SQUAD_NAMES else "New"


settings = Settings()
