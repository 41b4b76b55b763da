"""GitHub REST API client for commit-detail lookups.

``fetch_commit_diff`` is the plain function used in production and in the
client tests. ``CommitSource`` is the narrow protocol the relay pipeline
depends on: ``GitHubCommitSource`` binds the function to a shared
``httpx.AsyncClient`` and credentials, ``InMemoryCommitSource`` is the test
double.
"""

from __future__ import annotations

from typing import Protocol

import httpx

from commit_relay.schemas.relay import CommitDetail, FileDelta

_GITHUB_HEADERS_BASE = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


def _auth_headers(token: str, user_agent: str) -> dict[str, str]:
    """Build GitHub API headers with Bearer auth."""
    return {
        **_GITHUB_HEADERS_BASE,
        "Authorization": f"Bearer {token}",
        "User-Agent": user_agent,
    }


async def fetch_commit_diff(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    sha: str,
    token: str,
    *,
    base_url: str = "https://api.github.com",
    user_agent: str = "Vercel-Webhook",
) -> list[FileDelta]:
    """Fetch the per-file line counts of a single commit.

    Args:
        client: Shared httpx async client (for connection pooling).
        owner: Repository owner (user or organisation).
        repo: Repository name.
        sha: Commit hash.
        token: GitHub personal access token or installation token.

    Returns:
        One ``FileDelta`` per changed file.

    Raises:
        httpx.HTTPStatusError: On non-2xx responses.
        pydantic.ValidationError: If the body has no usable ``files`` list.
    """
    url = f"{base_url.rstrip('/')}/repos/{owner}/{repo}/commits/{sha}"
    resp = await client.get(url, headers=_auth_headers(token, user_agent))
    resp.raise_for_status()
    return CommitDetail.model_validate_json(resp.content).files


class CommitSource(Protocol):
    """Protocol for looking up the changed files of a commit."""

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> list[FileDelta]:
        """Return the additions/deletions of every file touched by ``sha``."""
        ...


class GitHubCommitSource:
    """Production commit source backed by the GitHub REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        *,
        base_url: str = "https://api.github.com",
        user_agent: str = "Vercel-Webhook",
    ) -> None:
        self._client = client
        self._token = token
        self._base_url = base_url
        self._user_agent = user_agent

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> list[FileDelta]:
        return await fetch_commit_diff(
            self._client,
            owner,
            repo,
            sha,
            self._token,
            base_url=self._base_url,
            user_agent=self._user_agent,
        )


class InMemoryCommitSource:
    """Test double that records lookups and serves canned diffs.

    Unknown SHAs resolve to an empty diff. A SHA listed in ``failures`` raises
    the associated exception instead, which lets tests drive the LOC fallback.
    """

    def __init__(self, diffs: dict[str, list[FileDelta]] | None = None) -> None:
        self.calls: list[dict] = []
        self.diffs: dict[str, list[FileDelta]] = diffs or {}
        self.failures: dict[str, Exception] = {}

    async def fetch_commit_diff(self, owner: str, repo: str, sha: str) -> list[FileDelta]:
        """Append the lookup and return (or raise) the configured result."""
        self.calls.append({"owner": owner, "repo": repo, "sha": sha})
        if sha in self.failures:
            raise self.failures[sha]
        return self.diffs.get(sha, [])
