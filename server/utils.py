"""Shared utilities for FastAPI routes."""

from fastapi import Request
from fastapi.responses import PlainTextResponse

from orchestrator.errors import PipelineError
from utils.logger import get_logger

logger = get_logger(__name__)


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


async def pipeline_error_handler(request: Request, exc: PipelineError) -> PlainTextResponse:
    """
    Map a failed pipeline run to a plain-text error response.

    BadRequest -> 400, every stage failure -> 500. No partial result is sent.
    """
    logger.warning(
        "Search request failed",
        extra={
            "extra_fields": {
                "request_id": get_request_id(request),
                "path": request.url.path,
                "status_code": exc.status_code,
                "stage": exc.stage.value,
                "error_type": type(exc).__name__,
            }
        },
    )
    return PlainTextResponse(str(exc), status_code=exc.status_code)
