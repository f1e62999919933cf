# -*- coding: utf-8 -*-
"""
FastAPI entry point of the LMS analytics service.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from lms_analytics.api.v1.dashboard.routes import router as dashboard_router
from lms_analytics.api.v1.statistics.routes import router as statistics_router
from lms_analytics.clients.database_client import (check_database_connection,
                                                   get_db, init_db)
from lms_analytics.config.logger import configure_logger
from lms_analytics.config.settings import settings
from lms_analytics.config.uvicorn_config import setup_uvicorn_logging
from lms_analytics.security.middleware import access_gate

# Prefix the access gate lets through; endpoints check the principal themselves
API_PREFIX = "/api/trpc"

logger = configure_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_uvicorn_logging()
    logger.info(f"🔧 Starting LMS analytics ({settings.environment})")
    logger.info(f"Configuration source: {settings.get_config_source()}")

    if not await check_database_connection():
        logger.error("❌ Database is unreachable, aborting startup")
        raise RuntimeError("Cannot connect to database")
    logger.info("✅ Database connected")

    if not settings.is_production:
        await init_db()

    yield

    logger.info("🛑 Shutting down LMS analytics")


app = FastAPI(
    title="LMS Analytics API",
    description="Course statistics and leaderboards for students, mentors and instructors",
    version="0.1.0",
    docs_url=f"{API_PREFIX}/docs",
    openapi_url=f"{API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.middleware("http")
async def log_api_errors(request, call_next):
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"💥 Unhandled error: {request.method} {request.url.path}")
        raise

    if request.url.path.startswith("/api/") and response.status_code >= 400:
        logger.warning(
            f"❌ API error: {request.method} {request.url.path} → {response.status_code}"
        )
    return response


# Registered last so it runs first
app.middleware("http")(access_gate)

app.include_router(statistics_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/health")
async def health_check(session: AsyncSession = Depends(get_db)):
    """Liveness probe with a database round trip."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected", "version": app.version}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
            "version": app.version,
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
