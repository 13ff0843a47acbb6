"""
HTTP middleware: per-request log context and a last-resort error handler.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
import structlog

from ..models.api_models import CleanResponse
from ..version import CLEANER_VERSION

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def setup_logging_middleware(app: FastAPI) -> None:
    """
    Bind a request id to the structlog context and log each request's outcome.

    Only method, path, status and timing are logged. Request bodies hold the
    user's prompt text and never reach the logs.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                duration_ms=_elapsed_ms(started),
                error=str(e),
                exc_info=True,
            )
            raise

        duration_ms = _elapsed_ms(started)
        logger.info("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{duration_ms / 1000:.6f}"
        response.headers["X-Cleaner-Version"] = CLEANER_VERSION
        return response


def setup_error_handling_middleware(app: FastAPI) -> None:
    """
    Turn an exception that escapes a route into a 500 response shaped like a
    failed CleanResponse.
    """

    @app.middleware("http")
    async def handle_errors(request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "unhandled_exception",
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            error = f"Internal server error: {e}" if app.debug else "Internal server error"
            return JSONResponse(
                status_code=500,
                content=CleanResponse(success=False, error=error).model_dump(mode="json"),
            )
