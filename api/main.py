"""Task Tracker API — FastAPI entry point.

Builds the app: middleware, routers, exception handlers, static web client
and lifecycle hooks. The task store is created here and owned by the app
(``app.state.task_store``); routes receive it through a dependency.
"""

import logging
import os
import platform
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware import RequestLoggingMiddleware
from core.observability.logging_setup import ensure_logging, setup_logging
from patterns.domain_config import TaskTrackerConfig
from verticals.tasks.api_doc import build_api_document
from verticals.tasks.errors import TaskNotFoundError, TaskValidationError
from verticals.tasks.repository import TaskStore
from verticals.tasks.router import router as tasks_router
from verticals.tasks.seed import demo_tasks
from verticals.tasks.stats import count_by_status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def format_request_errors(exc: RequestValidationError) -> list[str]:
    """One readable line per malformed field in a request body."""
    messages = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            messages.append("Request body is not valid JSON")
            continue
        location = ".".join(
            str(p) for p in err.get("loc", ()) if p != "body" and not isinstance(p, int)
        )
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return messages


async def _task_validation_handler(request: Request, exc: TaskValidationError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, "errors": exc.errors},
    )


async def _task_not_found_handler(request: Request, exc: TaskNotFoundError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": format_request_errors(exc),
        },
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods on known paths look the same.
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "message": f"Endpoint {request.method} {request.url.path} not found",
                "suggestion": "Visit GET /api for API documentation",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
    )


async def _internal_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    config: TaskTrackerConfig = request.app.state.config
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error": str(exc) if config.is_development else "Something went wrong",
        },
    )


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    config: Optional[TaskTrackerConfig] = None,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    """Build a fully wired app around its own task store.

    Tests pass a config and/or a fresh store; the module-level ``app``
    below uses the environment and the demo seed.
    """
    config = config or TaskTrackerConfig.from_env()
    if store is None:
        store = TaskStore(demo_tasks() if config.seed_demo_tasks else ())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown hooks."""
        ensure_logging(config.log_level)
        logger.info(
            "Task Tracker API started (%s, %d tasks, next id %d)",
            config.environment,
            store.count(),
            store.next_id,
        )
        yield
        logger.info("Task Tracker API shutting down")

    app = FastAPI(
        title="Task Tracker",
        description="In-memory task management CRUD API with a static web client",
        version=config.version,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.task_store = store
    app.state.started_at = time.monotonic()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Access log
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(TaskValidationError, _task_validation_handler)
    app.add_exception_handler(TaskNotFoundError, _task_not_found_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _internal_error_handler)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(tasks_router, prefix="/api", tags=["Tasks"])

    # -----------------------------------------------------------------------
    # Health, docs & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        tasks = store.all()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": int(time.monotonic() - app.state.started_at),
            "version": config.version,
            "system": {
                "pythonVersion": platform.python_version(),
                "platform": platform.system().lower(),
                "pid": os.getpid(),
            },
            "database": {
                "totalTasks": len(tasks),
                "tasksByStatus": count_by_status(tasks),
            },
        }

    @app.get("/api")
    async def api_document():
        return build_api_document(config)

    static_dir = config.server.static_dir
    index_file = static_dir / "index.html"
    web_client = config.serve_web_client and index_file.is_file()

    @app.get("/")
    async def root():
        if web_client:
            return FileResponse(index_file)
        return {
            "name": "Task Tracker",
            "version": config.version,
            "docs": "/api",
        }

    # Mounted last so API routes always win.
    if web_client:
        app.mount("/", StaticFiles(directory=static_dir), name="static")

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn using the environment configuration."""
    config: TaskTrackerConfig = app.state.config
    setup_logging(config.log_level)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
