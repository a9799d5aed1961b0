"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api.routes import health, listings, notifications, submissions, verification
from src.config import settings
from src.infrastructure.storage.local_image_store import UPLOADS_URL_PREFIX
from src.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        "marketplace_starting",
        data_dir=str(settings.data_dir),
        uploads_dir=str(settings.uploads_dir),
    )
    yield
    logger.info("marketplace_stopping")


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Campus Marketplace",
        description="Sell and lease listings published after institutional email verification.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(submissions.router)
    app.include_router(verification.router)
    app.include_router(notifications.router)

    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
