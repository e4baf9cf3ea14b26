"""
FastAPI application with assembled routers.

Initializes FastAPI app with the chat and health routers, observability
middleware and a startup check for required configuration.

Dependencies: fastapi, ragchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ragchat.api.deps.dependencies import get_service_cache
from ragchat.configs import get_settings, missing_required_settings
from ragchat.observability.logger import configure_logging
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import chat_router, health_router

logger = logging.getLogger(__name__)


def report_missing_settings() -> list[str]:
    """
    Log every missing required setting.

    Startup continues regardless; requests needing the missing
    collaborator fail when they reach it.

    Returns:
        list[str]: Missing environment variable names
    """
    missing = missing_required_settings(get_settings())
    for env_name in missing:
        logger.error(f"{__name__}:report_missing_settings - Missing env: {env_name}")
    return missing


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    # Startup
    configure_logging(get_settings().log_level)
    report_missing_settings()
    logger.info("RAG server ready")

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Document Chat RAG API",
        description="Upload a document and chat about it with per-session memory",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    # Added last so it runs first and the correlation id covers request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router)
    app.include_router(chat_router)

    return app


app = create_app()


def run() -> None:
    """Launch uvicorn with configured host, port and log level."""
    settings = get_settings()
    uvicorn.run(
        "ragchat.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
