"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from orchestrator.errors import PipelineError
from server.dependencies import get_config
from server.middleware import RequestIDMiddleware
from server.routes import health, home, search
from server.utils import pipeline_error_handler
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config = get_config()
    logger.info(
        "2e100 server starting up",
        extra={"extra_fields": {"providers": config.get_provider_info()}},
    )

    missing = config.missing_credentials()
    if missing:
        logger.warning(f"Missing environment variables: {missing}")

    yield

    logger.info("2e100 server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="2e100",
        description="Web search with a generated summary of the top results",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(PipelineError, pipeline_error_handler)

    app.include_router(home.router)
    app.include_router(health.router)
    app.include_router(search.router)

    return app
