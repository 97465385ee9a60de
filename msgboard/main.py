"""
FastAPI application factory and configuration.
"""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from msgboard.core.clock import format_timestamp
from msgboard.core.config import get_settings
from msgboard.core.database import get_session_factory, init_db, seed_sample_messages
from msgboard.core.exceptions import MessageBoardError
from msgboard.core.logging import setup_logging, get_logger
from msgboard.api import health, metrics
from msgboard.api.metrics import MetricsMiddleware, set_startup_time
from msgboard.api.routes import build_router
from msgboard.repositories.message_store import MessageStore
from msgboard.services.message_service import MessageService
from msgboard.tasks.statistics_reporter import StatisticsReporter


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger = get_logger(__name__)
    logger.info("Starting application...")

    init_db()
    if settings.seed_sample_data:
        seed_sample_messages()

    set_startup_time()

    reporter = None
    if settings.stats_enabled:
        service = MessageService(MessageStore(get_session_factory()))
        reporter = StatisticsReporter(
            service,
            interval_seconds=settings.stats_interval_seconds,
            recent_days=settings.stats_recent_days,
        )
        await reporter.start()
    app.state.reporter = reporter

    yield

    logger.info("Shutting down application...")
    if reporter is not None:
        await reporter.stop()


def _error_body(message: str) -> dict:
    return {"status": "error", "message": message, "timestamp": format_timestamp()}


async def message_board_exception_handler(request: Request, exc: MessageBoardError) -> JSONResponse:
    """Map service errors to client errors."""
    get_logger(__name__).warning(
        f"{exc.error_code}: {exc.message}",
        extra={"extra_data": {"path": request.url.path, **exc.details}},
    )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    get_logger(__name__).error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=_error_body("An unexpected error occurred"))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    setup_logging()
    logger = get_logger(__name__)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Message board CRUD service with a periodic statistics report",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.reporter = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)

    app.add_exception_handler(MessageBoardError, message_board_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(build_router())
    app.include_router(health.router)
    app.include_router(metrics.router)

    logger.info(
        "Application created",
        extra={
            "extra_data": {
                "app_name": settings.app_name,
                "version": settings.app_version,
                "debug": settings.debug,
            }
        }
    )

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
