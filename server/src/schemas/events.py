"""
Pydantic models (schemas) for host lifecycle events.
Used to validate event payloads before they reach the plugin.
"""

from enum import Enum
from typing import Any, Dict, Annotated

from pydantic import BaseModel, ConfigDict, Field


class HostEventType(str, Enum):
    """
    Lifecycle signals emitted by the game server host.
    """

    NEW_GAME = "NEW_GAME"
    ROUND_ENDED = "ROUND_ENDED"
    SQUAD_CREATED = "SQUAD_CREATED"


class HostEvent(BaseModel):
    """
    Envelope for every event the host sends.
    """

    event: HostEventType
    data: Dict[str, Any] = Field(default_factory=dict)


class SquadCreatedEvent(BaseModel):
    """
    A player created a squad. Consumed synchronously, never stored.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    player_id: Annotated[str, Field(min_length=1)]
    team_id: Annotated[int, Field(ge=0)]
    squad_id: Annotated[int, Field(ge=0)]
    squad_name: str


class EventAck(BaseModel):
    """
    Response to a delivered host event.
    """

    accepted: bool


class BlockerStatus(BaseModel):
    """
    Snapshot of the plugin state.
    """

    description: str
    mounted: bool
    phase: str
    seconds_remaining: int
    pending_timers: int
    rate_limited_players: int
