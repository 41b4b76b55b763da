"""Pydantic models for GitHub push webhook payloads."""

from pydantic import BaseModel, Field, model_validator


class CommitAuthor(BaseModel):
    """Author information from a Git commit."""

    name: str
    username: str | None = None


class Commit(BaseModel):
    """A single commit within a GitHub push event."""

    id: str
    message: str
    timestamp: str
    url: str
    author: CommitAuthor


class RepositoryOwner(BaseModel):
    """Owner of the repository (user or organization).

    Push payloads carry ``name``; ``login`` is used when it is missing.
    """

    name: str | None = None
    login: str | None = None

    @model_validator(mode="after")
    def _require_identifier(self) -> "RepositoryOwner":
        if not (self.name or self.login):
            raise ValueError("repository owner needs a name or login")
        return self

    @property
    def handle(self) -> str:
        return self.name or self.login or ""


class Repository(BaseModel):
    """Repository metadata from the webhook payload."""

    name: str
    owner: RepositoryOwner


class PushEvent(BaseModel):
    """GitHub push webhook event payload.

    Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads#push
    """

    ref: str = Field(min_length=1)
    repository: Repository
    commits: list[Commit]
