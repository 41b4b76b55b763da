"""Push-to-board relay pipeline: filter, enrich with LOC, forward.

``RelayPipeline`` receives its configuration and both outbound clients at
construction, so nothing here reads the process environment.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field

import structlog

from commit_relay.config import DEFAULT_COLUMN_IDS, Settings
from commit_relay.schemas.relay import BoardItemResult, EnrichedCommit
from commit_relay.schemas.webhooks import Commit, PushEvent
from commit_relay.services.github_client import CommitSource
from commit_relay.services.monday_client import BoardClient

logger = structlog.get_logger()


@dataclass(frozen=True)
class RelayConfig:
    """The settings the pipeline needs, detached from the environment."""

    board_id: str
    bot_username: str = "Devtools"
    column_ids: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_COLUMN_IDS))

    @classmethod
    def from_settings(cls, settings: Settings) -> RelayConfig:
        return cls(
            board_id=settings.monday_board_id,
            bot_username=settings.bot_username,
            column_ids={**DEFAULT_COLUMN_IDS, **settings.monday_column_ids},
        )


def format_date(timestamp: str) -> str:
    """Keep the date part of an ISO-8601 timestamp (text before the first ``T``)."""
    return timestamp.split("T", 1)[0]


def build_column_values(commit: EnrichedCommit, column_ids: Mapping[str, str]) -> dict[str, str]:
    """Map an enriched commit onto the board's column ids, every value a string."""
    values = {
        "author": commit.author,
        "username": commit.username,
        "url": commit.url,
        "date": format_date(commit.timestamp),
        "repository": commit.repository,
        "loc": str(commit.loc),
    }
    return {column_ids[key]: value for key, value in values.items()}


async def calculate_loc(source: CommitSource, owner: str, repo: str, sha: str) -> int:
    """Return additions minus deletions for a commit, or 0 if the lookup fails."""
    try:
        files = await source.fetch_commit_diff(owner, repo, sha)
    except Exception:
        logger.exception("loc_lookup_failed", owner=owner, repo=repo, sha=sha)
        return 0
    additions = sum(f.additions for f in files)
    deletions = sum(f.deletions for f in files)
    return additions - deletions


class RelayPipeline:
    """Turns a validated push event into board items."""

    def __init__(self, config: RelayConfig, commits: CommitSource, board: BoardClient) -> None:
        self.config = config
        self._commits = commits
        self._board = board

    def filter_commits(self, commits: list[Commit]) -> list[Commit]:
        """Drop commits authored by the bot account.

        A commit without a username is kept.
        """
        return [c for c in commits if c.author.username != self.config.bot_username]

    async def _enrich_one(self, event: PushEvent, commit: Commit) -> EnrichedCommit:
        loc = await calculate_loc(
            self._commits,
            event.repository.owner.handle,
            event.repository.name,
            commit.id,
        )
        return EnrichedCommit(
            message=commit.message,
            username=commit.author.username or commit.author.name,
            author=commit.author.name,
            url=commit.url,
            timestamp=commit.timestamp,
            repository=event.repository.name,
            loc=loc,
        )

    async def enrich(self, event: PushEvent, commits: list[Commit]) -> list[EnrichedCommit]:
        """Look up LOC for every commit concurrently, preserving input order."""
        return list(await asyncio.gather(*(self._enrich_one(event, c) for c in commits)))

    async def forward(self, commits: list[EnrichedCommit]) -> list[BoardItemResult]:
        """Create one board item per commit, one request at a time.

        Items rejected by the board stay in the results. Transport failures
        propagate and abandon the remaining items.
        """
        results: list[BoardItemResult] = []
        for commit in commits:
            result = await self._board.create_item(
                self.config.board_id,
                commit.message,
                build_column_values(commit, self.config.column_ids),
            )
            if isinstance(result, dict) and "errors" in result:
                logger.error("board_item_error", url=commit.url, errors=result["errors"])
            results.append(result)
        return results
