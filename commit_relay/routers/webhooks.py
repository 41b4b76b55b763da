"""Push webhook router: validate, drop bot commits, enrich, forward to the board."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from commit_relay.dependencies import get_relay_pipeline
from commit_relay.schemas.relay import ErrorResponse, MessageResponse, RelayResponse
from commit_relay.schemas.webhooks import PushEvent
from commit_relay.services.relay import RelayPipeline

logger = structlog.get_logger()

router = APIRouter(tags=["webhooks"])

WEBHOOK_PATH = "/"


def reply(status_code: int, body: BaseModel) -> JSONResponse:
    """Serialize one of the fixed response models with the given status."""
    return JSONResponse(status_code=status_code, content=body.model_dump())


def method_not_allowed() -> JSONResponse:
    """The 405 answer for any method other than POST on the webhook path.

    Starlette raises the 405 itself when no route matches the method, so this
    is returned from the application's HTTP exception handler.
    """
    return reply(
        status.HTTP_405_METHOD_NOT_ALLOWED,
        MessageResponse(message="Only POST requests are accepted"),
    )


async def _parse_push_event(request: Request) -> PushEvent | None:
    """Parse the request body as a push event, or return None if it is not one."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or not body.get("ref") or body.get("commits") is None:
        return None
    try:
        return PushEvent.model_validate(body)
    except ValidationError:
        return None


@router.post(
    WEBHOOK_PATH,
    response_model=RelayResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_405_METHOD_NOT_ALLOWED: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def push_webhook(
    request: Request,
    pipeline: Annotated[RelayPipeline, Depends(get_relay_pipeline)],
) -> JSONResponse:
    """Receive a push event and create one board item per human commit.

    Bot commits are dropped, the rest get a LOC figure from the commit
    lookup and are submitted to the board in order. A 200 with a
    ``MessageResponse`` body means there was nothing to relay.
    """
    event = await _parse_push_event(request)
    if event is None:
        logger.info("push_rejected", path=request.url.path)
        return reply(status.HTTP_400_BAD_REQUEST, ErrorResponse(error="Not a valid push event"))

    commits = pipeline.filter_commits(event.commits)
    logger.info(
        "commits_filtered",
        ref=event.ref,
        received=len(event.commits),
        kept=len(commits),
    )
    if not commits:
        return reply(status.HTTP_200_OK, MessageResponse(message="No valid commits to process"))

    enriched = await pipeline.enrich(event, commits)

    try:
        results = await pipeline.forward(enriched)
    except Exception:
        logger.exception("board_forward_failed", ref=event.ref, commits=len(enriched))
        return reply(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Failed to send data to Monday.com"),
        )

    logger.info("relay_completed", ref=event.ref, items=len(results))
    return reply(status.HTTP_200_OK, RelayResponse(data=results))
