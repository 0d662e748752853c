import asyncio
import logging
import os
import signal
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from backend_fastapi.api.deps import get_settings
from backend_fastapi.api.errors import register_error_handlers
from backend_fastapi.api.routes.tasks import router as tasks_router
from backend_fastapi.api.schemas import HealthResponse
from infrastructure.config import Settings, load_settings
from infrastructure.container import build_container
from infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def terminate_process(reason: str) -> None:
    """Fail fast: ask the server to shut down so the store still gets closed."""
    logger.critical("Terminating process: %s", reason)
    os.kill(os.getpid(), signal.SIGTERM)


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logger.critical(
        "Unhandled asynchronous error: %s", context.get("message"), exc_info=exc
    )
    terminate_process(repr(exc) if exc else str(context.get("message")))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    asyncio.get_running_loop().set_exception_handler(_loop_exception_handler)

    app.state.container = build_container(settings)
    logger.info(
        "Server started (environment=%s, orm=%s)", settings.environment, settings.orm
    )
    try:
        yield
    finally:
        logger.info("Shutting down, closing database")
        app.state.container.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="Task Management API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    register_error_handlers(app, production=settings.is_production)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health(request: Request, current: Settings = Depends(get_settings)):
        return HealthResponse(
            message="Server is running",
            timestamp=datetime.now(timezone.utc),
            uptime=max(0.0, time.monotonic() - request.app.state.started_at),
            environment=current.environment,
        )

    prefix = settings.api_prefix

    @app.get(prefix or "/", tags=["root"])
    def api_index() -> dict:
        return {
            "success": True,
            "message": "Task Management API",
            "version": API_VERSION,
            "endpoints": {
                "tasks": {
                    "create": f"POST {prefix}/tasks",
                    "list": f"GET {prefix}/tasks",
                    "get": f"GET {prefix}/tasks/:id",
                    "update": f"PUT|PATCH {prefix}/tasks/:id",
                    "delete": f"DELETE {prefix}/tasks/:id",
                },
                "health": "GET /health",
            },
        }

    app.include_router(tasks_router, prefix=prefix)
    return app


app = create_app()
