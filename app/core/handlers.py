# app/core/handlers.py

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import AppError
from app.core.response import get_request_id, send_response

logger = logging.getLogger(__name__)


def _validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(location), "message": error.get("msg")})
    return errors


def internal_error_response(request: Request, exc: Exception):
    logger.error(
        "[%s] Unhandled error on %s %s",
        get_request_id(request),
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return send_response(request, 500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error through the response envelope"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("[%s] %s", get_request_id(request), exc.message)
        return send_response(request, exc.status_code, exc.message, errors=exc.errors)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return send_response(request, 400, "Validation failed", errors=_validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and message == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"
        return send_response(request, exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)
