"""Monday.com GraphQL client for creating board items.

Commit data reaches the API only through GraphQL variables. ``column_values``
is Monday's JSON scalar, so it travels as a ``json.dumps`` string; quotes or
newlines in a commit message therefore cannot break the mutation text.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import httpx

CREATE_ITEM_MUTATION = """\
mutation CreateItem($boardId: ID!, $itemName: String!, $columnValues: JSON) {
  create_item(board_id: $boardId, item_name: $itemName, column_values: $columnValues) {
    id
  }
}
"""


def build_create_item_request(
    board_id: str, item_name: str, column_values: dict[str, str]
) -> dict[str, Any]:
    """Return the JSON request body for a ``create_item`` mutation."""
    return {
        "query": CREATE_ITEM_MUTATION,
        "variables": {
            "boardId": str(board_id),
            "itemName": item_name,
            "columnValues": json.dumps(column_values),
        },
    }


async def create_item(
    client: httpx.AsyncClient,
    board_id: str,
    item_name: str,
    column_values: dict[str, str],
    token: str,
    *,
    api_url: str = "https://api.monday.com/v2",
) -> Any:
    """Submit one ``create_item`` mutation and return the parsed response.

    The status code is not checked: Monday reports rejected mutations in an
    ``errors`` list in the body, which is handed back to the caller as-is.

    Raises:
        httpx.TransportError: If the request could not be sent.
        ValueError: If the response body is not JSON.
    """
    resp = await client.post(
        api_url,
        json=build_create_item_request(board_id, item_name, column_values),
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
    )
    return resp.json()


class BoardClient(Protocol):
    """Protocol for creating one item on a work-tracking board."""

    async def create_item(
        self, board_id: str, item_name: str, column_values: dict[str, str]
    ) -> Any:
        """Create the item and return the raw API response."""
        ...


class MondayBoardClient:
    """Production board client backed by the Monday.com v2 API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        *,
        api_url: str = "https://api.monday.com/v2",
    ) -> None:
        self._client = client
        self._token = token
        self._api_url = api_url

    async def create_item(
        self, board_id: str, item_name: str, column_values: dict[str, str]
    ) -> Any:
        return await create_item(
            self._client,
            board_id,
            item_name,
            column_values,
            self._token,
            api_url=self._api_url,
        )


class InMemoryBoardClient:
    """Test double that records created items and returns canned responses."""

    def __init__(self) -> None:
        self.items: list[dict] = []
        self.responses: list[Any] = []
        self.error: Exception | None = None

    async def create_item(
        self, board_id: str, item_name: str, column_values: dict[str, str]
    ) -> Any:
        """Record the item, then raise ``error`` or return the next response.

        Without queued responses a fake item id is returned.
        """
        if self.error is not None:
            raise self.error
        self.items.append(
            {"board_id": board_id, "item_name": item_name, "column_values": column_values}
        )
        if self.responses:
            return self.responses.pop(0)
        return {"data": {"create_item": {"id": str(len(self.items))}}}
