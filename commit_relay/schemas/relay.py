"""Models produced by the relay pipeline and returned by the webhook endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict

# Opaque per-mutation response from the board API, errors included. Not
# necessarily a JSON object; it is relayed exactly as parsed.
BoardItemResult = Any


class FileDelta(BaseModel):
    """Line counts for one file entry of a commit-detail response."""

    additions: int
    deletions: int


class CommitDetail(BaseModel):
    """The part of GitHub's commit-detail response the LOC metric needs."""

    files: list[FileDelta]


class EnrichedCommit(BaseModel):
    """A filtered commit with its net line delta, ready for the board."""

    model_config = ConfigDict(frozen=True)

    message: str
    username: str
    author: str
    url: str
    timestamp: str
    repository: str
    loc: int = 0


class RelayResponse(BaseModel):
    """Body of a successful relay: every board response in submission order."""

    success: bool = True
    data: list[BoardItemResult]


class MessageResponse(BaseModel):
    """Informational body: method guard and pushes with nothing to relay."""

    message: str


class ErrorResponse(BaseModel):
    """Body of a rejected push or a failed board submission."""

    error: str
