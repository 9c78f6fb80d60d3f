import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable
from httpx import AsyncClient, ASGITransport

from server.src.main import app
from server.src.services.squad_creation_blocker import SquadCreationBlocker
from server.src.tests.utils.command_sink import RecordingCommandSink
from server.src.tests.utils.settings_factory import make_settings
from server.src.tests.utils.time_mock import FrozenTime, ManualTimerRegistry


@pytest.fixture
def frozen() -> FrozenTime:
    """Frozen clock starting at t=1000."""
    return FrozenTime(1000.0)


@pytest.fixture
def timers(frozen: FrozenTime) -> ManualTimerRegistry:
    return ManualTimerRegistry(frozen)


@pytest.fixture
def sink() -> RecordingCommandSink:
    return RecordingCommandSink()


@pytest.fixture
def make_blocker(
    frozen: FrozenTime, timers: ManualTimerRegistry, sink: RecordingCommandSink
) -> Callable[..., SquadCreationBlocker]:
    """
    Fixture factory for a mounted blocker on the frozen clock.
    Keyword arguments override BASE_SETTINGS.
    """

    def _make(**overrides) -> SquadCreationBlocker:
        blocker = SquadCreationBlocker(
            make_settings(**overrides), sink, timers=timers, clock=frozen.now
        )
        blocker.mount()
        return blocker

    return _make


@pytest_asyncio.fixture
async def client(make_blocker) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client against the app with a test blocker installed.
    ASGITransport does not run the lifespan, so the blocker is set directly.
    """
    app.state.blocker = make_blocker()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    # Clean up
    del app.state.blocker
