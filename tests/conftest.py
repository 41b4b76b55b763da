"""Shared test fixtures for the FastAPI test client and in-memory outbound clients."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from commit_relay.dependencies import get_relay_pipeline
from commit_relay.main import app
from commit_relay.services.github_client import InMemoryCommitSource
from commit_relay.services.monday_client import InMemoryBoardClient
from commit_relay.services.relay import RelayConfig, RelayPipeline

TEST_BOARD_ID = "1234567890"


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio, the event loop the relay targets."""
    return "asyncio"


@pytest.fixture
def mock_commit_source() -> InMemoryCommitSource:
    """Create a fresh in-memory commit source for test inspection."""
    return InMemoryCommitSource()


@pytest.fixture
def mock_board_client() -> InMemoryBoardClient:
    """Create a fresh in-memory board client for test inspection."""
    return InMemoryBoardClient()


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(board_id=TEST_BOARD_ID)


@pytest.fixture
def pipeline(
    relay_config: RelayConfig,
    mock_commit_source: InMemoryCommitSource,
    mock_board_client: InMemoryBoardClient,
) -> RelayPipeline:
    return RelayPipeline(relay_config, mock_commit_source, mock_board_client)


@pytest.fixture
async def client(pipeline: RelayPipeline) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient with the relay pipeline overridden.

    The pipeline is wired to in-memory doubles, so no test touches the
    network or the process environment.
    """
    app.dependency_overrides[get_relay_pipeline] = lambda: pipeline
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

