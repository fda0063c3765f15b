"""
FastAPI application entry point.
Challenge: Mount routes, error handlers, metrics; configure logging once.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from listings_api.api.error_handlers import register_error_handlers
from listings_api.api.v1.router import api_router
from listings_api.config import get_settings
from listings_api.db.session import engine

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to warm up (schema is managed by Alembic). Shutdown: release pooled connections."""
    logger.info("Starting %s", app.title)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Marketplace listings exposed as a REST resource with per-operation fields and validation.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
