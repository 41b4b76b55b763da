"""Centralized FastAPI dependencies for use with Depends()."""

import httpx

from commit_relay.config import Settings
from commit_relay.services.github_client import CommitSource, InMemoryCommitSource
from commit_relay.services.monday_client import BoardClient, InMemoryBoardClient
from commit_relay.services.relay import RelayConfig, RelayPipeline

_commit_source: CommitSource = InMemoryCommitSource()
_board_client: BoardClient = InMemoryBoardClient()
_relay_config: RelayConfig = RelayConfig(board_id="")


def init_production_deps(settings: Settings, client: httpx.AsyncClient) -> None:
    """Swap InMemory test doubles for the GitHub and Monday.com clients.

    ``client`` is the application's shared httpx client; its lifetime is
    owned by the caller.
    """
    global _commit_source, _board_client, _relay_config  # noqa: PLW0603

    from commit_relay.services.github_client import GitHubCommitSource
    from commit_relay.services.monday_client import MondayBoardClient

    _commit_source = GitHubCommitSource(
        client,
        settings.github_token,
        base_url=settings.github_api_url,
        user_agent=settings.user_agent,
    )
    _board_client = MondayBoardClient(
        client,
        settings.monday_api_token,
        api_url=settings.monday_api_url,
    )
    _relay_config = RelayConfig.from_settings(settings)


def get_commit_source() -> CommitSource:
    """Return the application commit source.

    Defaults to InMemoryCommitSource for development and testing.
    Swapped to production implementations by ``init_production_deps()``.
    """
    return _commit_source


def get_board_client() -> BoardClient:
    """Return the application board client.

    Defaults to InMemoryBoardClient for development and testing.
    Swapped to production implementations by ``init_production_deps()``.
    """
    return _board_client


def get_relay_pipeline() -> RelayPipeline:
    """Build the relay pipeline from the current configuration and clients."""
    return RelayPipeline(_relay_config, get_commit_source(), get_board_client())


__all__ = [
    "get_board_client",
    "get_commit_source",
    "get_relay_pipeline",
    "init_production_deps",
]
