"""FastAPI application for running-log."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..config import get_settings
from .exception_handlers import register_exception_handlers
from .routes import analysis, predictions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting running-log API v{__version__}")
    logger.info(f"Prediction targets: {settings.prediction_distances_km}")
    yield
    logger.info("Shutting down running-log API")


def create_app() -> FastAPI:
    """Build the application with handlers and routers registered."""
    app = FastAPI(
        title="running-log API",
        description="Race predictions, training paces and trend forecasts",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(predictions.router, prefix="/api", tags=["predictions"])
    app.include_router(analysis.router, prefix="/api", tags=["analysis"])

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
