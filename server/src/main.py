"""
Main server entrypoint.
Initializes the FastAPI application, the squad creation blocker plugin and
the API routers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Response
from server.src.api import events
from server.src.core.config import settings
from server.src.core.logging_config import setup_logging, get_logger
from server.src.core.metrics import init_metrics, get_metrics, get_metrics_content_type
from server.src.core.timers import TimerRegistry
from server.src.services.rcon_service import LoggingRconTransport, RconService
from server.src.services.squad_creation_blocker import SquadCreationBlocker

VERSION = "0.1.0"

# Initialize logging and metrics as early as possible
setup_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
init_metrics(version=VERSION, environment=settings.ENVIRONMENT)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Squad creation blocker starting up", extra={"version": VERSION})

    rcon = getattr(app.state, "rcon", None) or RconService(LoggingRconTransport())
    blocker = SquadCreationBlocker(settings, rcon, timers=TimerRegistry())
    app.state.rcon = rcon
    app.state.blocker = blocker

    if settings.ENABLED:
        blocker.mount()
    else:
        logger.warning("Squad creation blocker is disabled, host events will be ignored")

    yield
    # Shutdown
    blocker.unmount()
    await rcon.drain()
    logger.info("Squad creation blocker shutting down")


app_description = """
Squad creation blocker for a game server control layer.

## Features
- **Host events**: `POST /events` receives `NEW_GAME`, `ROUND_ENDED` and `SQUAD_CREATED`.
- **Blocking**: squads are disbanded during the new match window and at round end.
- **Status**: `GET /status` reports the current block phase.
"""

app = FastAPI(
    title="Squad Creation Blocker",
    description=app_description,
    version=VERSION,
    lifespan=lifespan,
)


@app.get("/metrics", summary="Prometheus metrics endpoint", tags=["Monitoring"])
def get_metrics_endpoint():
    """
    Prometheus metrics endpoint.
    Returns plugin metrics in Prometheus format for monitoring and alerting.
    """
    logger.debug("Metrics endpoint accessed")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


@app.get("/", summary="Health check endpoint", tags=["Status"])
def read_root():
    """Root endpoint for health checks."""
    logger.debug("Health check endpoint accessed")
    return {"status": "ok"}


@app.get("/version", summary="Get server version", tags=["Status"])
def read_version():
    """Returns the current version of the server application."""
    logger.debug("Version endpoint accessed")
    return {"version": VERSION}


# Include API routers
app.include_router(events.router, tags=["Events"])
