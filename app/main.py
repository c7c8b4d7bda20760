# app/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.handlers import register_exception_handlers
from app.core.middleware import register_middleware
from app.api.v1 import api_router
from app.database import engine, Base
from app import models  # noqa: F401  registers every table on Base.metadata

# Settings
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)

    yield

    # shutdown
    engine.dispose()
    logger.info("%s stopped", settings.app_name)


# FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Movies, shorts and music catalog with engagement and social features",
    version=settings.app_version,
    docs_url="/docs",
    openapi_url="/openapi.json",
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

register_middleware(app, settings)
register_exception_handlers(app)

# API v1 routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Service root"""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": "/api/v1",
    }
