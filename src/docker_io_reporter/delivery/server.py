"""HTTP endpoint for pull-based scraping.

Every request, whatever its path, runs one complete collection cycle and
returns the result. Nothing is cached between requests: each scrape costs a
container listing plus the cgroup reads, and in exchange is always fresh.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from docker_io_reporter import __version__
from docker_io_reporter.core.config import ReporterConfig
from docker_io_reporter.core.constants import CONTENT_TYPE
from docker_io_reporter.core.errors import EnumerationError
from docker_io_reporter.monitoring.collector import (
    RuntimeFactory,
    docker_runtime_factory,
    run_cycle,
)

logger = logging.getLogger(__name__)


def create_app(
    config: ReporterConfig | None = None,
    runtime_factory: RuntimeFactory = docker_runtime_factory,
) -> FastAPI:
    """Build the metrics application.

    Args:
        config: Reporter configuration (defaults apply when None)
        runtime_factory: Creates a runtime connection per request
    """
    config = config or ReporterConfig()
    app = FastAPI(
        title="Docker IO Reporter",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(EnumerationError)
    async def enumeration_failed(request: Request, exc: EnumerationError) -> PlainTextResponse:
        logger.error(f"Collection failed for {request.url.path}: {exc}")
        return PlainTextResponse(f"{exc}\n", status_code=500, media_type=CONTENT_TYPE)

    # Sync handler: each request runs its own cycle on a worker thread
    @app.api_route("/{path:path}", methods=["GET", "HEAD", "POST"])
    def metrics(request: Request) -> PlainTextResponse:
        logger.debug(f"Request received: {request.method} {request.url.path}")
        buffer = run_cycle(config, runtime_factory)
        return PlainTextResponse(buffer.render(), media_type=CONTENT_TYPE)

    return app


def serve(
    config: ReporterConfig, runtime_factory: RuntimeFactory = docker_runtime_factory
) -> None:
    """Serve metrics until interrupted."""
    app = create_app(config, runtime_factory)
    logger.info(f"Listening at http://{config.host}:{config.port}")
    # log_config=None keeps the logging set up by the CLI
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
