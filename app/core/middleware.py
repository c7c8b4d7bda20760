# app/core/middleware.py

import logging
import time
from typing import Dict, Tuple
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import Settings
from app.core.handlers import internal_error_response
from app.core.response import build_envelope, generate_request_id, get_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RateLimiter:
    """Fixed-window request counter per client key"""

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._next_sweep = 0.0

    def hit(self, key: str, now: float = None) -> Tuple[bool, int, float]:
        """Count one request; returns (allowed, remaining, reset_at)"""
        now = time.time() if now is None else now
        if now >= self._next_sweep:
            self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        reset_at = started + self.window_seconds
        return count <= self.max_requests, max(self.max_requests - count, 0), reset_at

    def _sweep(self, now: float) -> None:
        """Drop every window that has already expired"""
        expired = [
            key
            for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds


def register_middleware(app: FastAPI, settings: Settings) -> None:
    limiter = RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_seconds)
    app.state.rate_limiter = limiter

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if not settings.rate_limit_enabled or not request.url.path.startswith("/api/"):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        allowed, remaining, reset_at = limiter.hit(client)
        headers = {
            "X-RateLimit-Limit": str(limiter.max_requests),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(int(reset_at)),
        }
        if not allowed:
            logger.warning("Rate limit exceeded for %s", client)
            headers["Retry-After"] = str(max(int(reset_at - time.time()), 1))
            return JSONResponse(
                status_code=429,
                content=build_envelope(
                    429,
                    "Too many requests, please try again later",
                    request_id=get_request_id(request),
                ),
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

    # registered last so it wraps the rate limiter
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as exc:
            response = internal_error_response(request, exc)

        process_time = (time.time() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        logger.info(
            "[%s] %s %s -> %d (%.1fms)",
            request.state.request_id,
            request.method,
            request.url.path,
            response.status_code,
            process_time,
        )
        return response
