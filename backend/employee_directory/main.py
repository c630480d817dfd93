"""FastAPI application entry point."""
from __future__ import annotations

import argparse
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import FastAPI, Request

from .config import Settings, get_settings
from .database import Database
from .resolvers import Resolvers
from .routers.operations import router as operations_router

logger = logging.getLogger("employee_directory.main")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle on startup and dispose of it on shutdown."""

    settings: Settings = app.state.settings
    database = Database(settings.database_url)
    await database.create_all()
    app.state.database = database
    app.state.resolvers = Resolvers(database, settings)
    logger.info("Employee directory started (database=%s)", database.engine.url.render_as_string())

    yield

    await database.dispose()
    logger.info("Employee directory shut down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; resources are attached by the lifespan."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Employee Directory API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(operations_router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, ms)
        return response

    @app.get("/health", tags=["system"])
    async def healthcheck() -> dict[str, str]:
        """Readiness check for uptime monitors."""

        return {"status": "ok"}

    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the API with uvicorn."""

    import uvicorn

    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="employee_directory",
        description="Run the employee directory API server.",
    )
    parser.add_argument("--host", default=settings.host, help="Interface to bind.")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on.")
    args = parser.parse_args(None if argv is None else list(argv))

    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    return 0
