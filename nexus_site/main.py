"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from nexus_site.config import settings
from nexus_site.database import engine
from nexus_site.landing.handlers import register_exception_handlers
from nexus_site.landing.router import router as landing_router
from nexus_site.landing.templating import STATIC_DIR
from nexus_site.redis_client import close_redis
from nexus_site.security import SecurityHeadersMiddleware

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer() if settings.is_development
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info(
        "app_starting",
        environment=settings.environment,
        timezone=settings.timezone or "server-local",
    )
    yield
    await close_redis()
    await engine.dispose()
    logger.info("app_shutting_down")


app = FastAPI(
    title="Nexus Plater Website",
    description="Corporate gifts marketing site with inquiry form",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(landing_router)
register_exception_handlers(app)


@app.get("/api/health")
async def health_check():
    """Liveness probe."""
    return {"status": "ok"}
