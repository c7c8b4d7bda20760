# app/api/v1/health.py

import logging
import time
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.core.response import send_response
from app.database import get_db

router = APIRouter()
logger = logging.getLogger(__name__)

STARTED_AT = time.time()


@router.get("", summary="Health check", description="Liveness probe with process uptime.")
def health(request: Request):
    return send_response(
        request, 200, "Service is healthy", {"uptime": round(time.time() - STARTED_AT, 3)}
    )


@router.get("/info", summary="Service info")
def info(request: Request):
    settings = get_settings()
    return send_response(
        request,
        200,
        "Service info",
        {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "features": {
                "uploads": settings.feature_uploads,
                "offlineCache": settings.feature_offline_cache,
            },
        },
    )


@router.get("/db", summary="Database check", description="Runs SELECT 1 against the database.")
def database(request: Request, db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database check failed: %s", exc)
        return send_response(request, 503, "Database is unreachable", {"database": "down"})
    return send_response(request, 200, "Database is reachable", {"database": "ok"})
