"""FastAPI server exposing the debug bundle.

Provides:
- GET <path> - Download a zip built from the registered sources
- GET /health - Service status and registered source names
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from debug_bundle import __version__
from debug_bundle.bundle import ZipWriter
from debug_bundle.config import BundleConfig
from debug_bundle.sources import new_zip_writer_with_default_sources
from debug_bundle.web.handler import register_handler

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[BundleConfig] = None,
    writer: Optional[ZipWriter] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Server configuration (defaults if None)
        writer: ZipWriter to serve (default source set if None)

    Raises:
        ConstructionError: If the default source set cannot be created
    """
    config = config or BundleConfig()
    if writer is None:
        writer = new_zip_writer_with_default_sources(
            config.profile_duration,
            sample_interval=config.sample_interval,
            heap_top=config.heap_top,
            trace_malloc=config.trace_malloc,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan context."""
        logger.info(
            f"Starting Debug Bundle v{__version__}: {config.path} serves "
            f"{len(writer.source_names())} sources"
        )
        yield
        logger.info("Shutting down debug bundle server")

    app = FastAPI(
        title="Debug Bundle",
        version=__version__,
        lifespan=lifespan,
    )

    register_handler(app, config.path, writer)

    @app.get("/health")
    async def get_health():
        """Service status and registered sources."""
        return {
            "status": "ok",
            "version": __version__,
            "path": config.path,
            "sources": writer.source_names(),
        }

    return app


def run_server(config: Optional[BundleConfig] = None) -> None:
    """Run the web server."""
    import uvicorn

    config = config or BundleConfig()
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level="info")
