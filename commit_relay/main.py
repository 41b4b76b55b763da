"""FastAPI application factory with lifespan context manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from commit_relay.config import settings
from commit_relay.dependencies import init_production_deps
from commit_relay.logging_config import configure_logging
from commit_relay.routers import health, webhooks
from commit_relay.routers.webhooks import WEBHOOK_PATH, method_not_allowed


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: open and close the shared HTTP client."""
    configure_logging(json_logs=not settings.debug, log_level=settings.log_level)

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        init_production_deps(settings, client)
        structlog.get_logger().info(
            "relay_started",
            board_id=settings.monday_board_id,
            bot_username=settings.bot_username,
        )
        yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def webhook_method_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Give every non-POST request on the webhook path the fixed 405 body."""
    if (
        exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        and request.url.path == WEBHOOK_PATH
    ):
        return method_not_allowed()
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for any unhandled exception."""
    logger = structlog.get_logger()
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(health.router)
app.include_router(webhooks.router)


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    configure_logging(json_logs=not settings.debug, log_level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
