"""
Host event ingress.

The game server host posts lifecycle events here; each one is handed to the
squad creation blocker on the event loop.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status

from server.src.core.logging_config import get_logger
from server.src.schemas.events import BlockerStatus, EventAck
from server.src.services.squad_creation_blocker import SquadCreationBlocker

router = APIRouter()
logger = get_logger(__name__)


def get_blocker(request: Request) -> SquadCreationBlocker:
    """Plugin instance created by the application lifespan."""
    return request.app.state.blocker


@router.post(
    "/events",
    response_model=EventAck,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Deliver a host lifecycle event",
)
async def receive_event(
    *,
    blocker: SquadCreationBlocker = Depends(get_blocker),
    event: Dict[str, Any] = Body(...),
) -> EventAck:
    """
    Hand a host event to the plugin.

    - **event**: `NEW_GAME`, `ROUND_ENDED` or `SQUAD_CREATED`.
    - **data**: event payload; `SQUAD_CREATED` needs `player_id`, `team_id`,
      `squad_id` and `squad_name`.

    Malformed events are ignored and acknowledged with `accepted: false`.
    """
    logger.debug("Host event received", extra={"event_type": event.get("event")})
    accepted = blocker.dispatch(event)
    return EventAck(accepted=accepted)


@router.get("/status", response_model=BlockerStatus, summary="Current block phase")
async def read_status(
    blocker: SquadCreationBlocker = Depends(get_blocker),
) -> BlockerStatus:
    return BlockerStatus(**blocker.status())
