"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import engine, Base
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User  # noqa: F401
from app.domain.models.favorite import Favorite  # noqa: F401

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.settings import router as settings_router
from app.interfaces.api.favorites import router as favorites_router
from app.interfaces.api.catalog import router as catalog_router
from app.interfaces.api.spotify import router as spotify_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Silentmoon backend", env=settings.ENVIRONMENT)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    yield

    logger.info("Silentmoon backend stopped")


app = FastAPI(
    title="Silentmoon",
    description="Backend for the Silentmoon yoga and meditation app",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
register_exception_handlers(app)

app.include_router(catalog_router)
app.include_router(auth_router)
app.include_router(settings_router)
app.include_router(favorites_router)
app.include_router(spotify_router)


@app.get("/health")
def health():
    return {"status": "healthy"}
