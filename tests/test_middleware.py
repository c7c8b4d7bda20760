# tests/test_middleware.py

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.config import Settings
from app.core.exceptions import ConflictError
from app.core.handlers import register_exception_handlers
from app.core.middleware import RateLimiter, register_middleware
from app.database import get_db
from app.main import app as main_app


def test_request_id_is_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.json()["requestId"] == "req-123"


def test_request_id_is_generated(client):
    response = client.get("/api/v1/health")

    request_id = response.headers["X-Request-ID"]
    assert len(request_id) == 36
    assert response.json()["requestId"] == request_id


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == "error"
    assert body["statusCode"] == 404
    assert body["message"] == "Route GET /api/v1/nothing-here not found"


def test_health_endpoints(client):
    health = client.get("/api/v1/health").json()
    assert health["message"] == "Service is healthy"
    assert health["data"]["uptime"] >= 0

    info = client.get("/api/v1/health/info").json()["data"]
    assert info["name"] == "Movies Space API"
    assert set(info["features"]) == {"uploads", "offlineCache"}

    database = client.get("/api/v1/health/db").json()["data"]
    assert database == {"database": "ok"}


def test_rate_limiter_window():
    limiter = RateLimiter(max_requests=2, window_seconds=60)

    assert limiter.hit("1.2.3.4", now=100.0) == (True, 1, 160.0)
    assert limiter.hit("1.2.3.4", now=110.0) == (True, 0, 160.0)
    assert limiter.hit("1.2.3.4", now=120.0) == (False, 0, 160.0)
    # other clients have their own window
    assert limiter.hit("5.6.7.8", now=120.0)[0] is True
    # a new window starts once the old one expires
    assert limiter.hit("1.2.3.4", now=160.0) == (True, 1, 220.0)


def _limited_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    register_middleware(app, Settings(rate_limit_enabled=True, rate_limit_max_requests=max_requests))

    @app.get("/api/ping")
    def ping():
        return {"pong": True}

    @app.get("/metrics")
    def metrics():
        return {"ok": True}

    return app


def test_rate_limit_returns_429():
    client = TestClient(_limited_app(2))

    first = client.get("/api/ping")
    assert first.status_code == 200
    assert first.headers["X-RateLimit-Limit"] == "2"
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert client.get("/api/ping").status_code == 200

    blocked = client.get("/api/ping")
    assert blocked.status_code == 429
    assert blocked.json()["statusCode"] == 429
    assert "Retry-After" in blocked.headers
    assert blocked.headers["X-Request-ID"] == blocked.json()["requestId"]


def test_rate_limit_only_covers_api_paths():
    client = TestClient(_limited_app(1))

    for _ in range(3):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers


def _failing_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Already there", errors=[{"field": "name", "message": "taken"}])

    return app


def test_unhandled_error_returns_500():
    client = TestClient(_failing_app(), raise_server_exceptions=False)

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
    assert response.json()["status"] == "error"


def test_app_error_keeps_status_and_errors():
    client = TestClient(_failing_app())

    response = client.get("/conflict")

    assert response.status_code == 409
    assert response.json()["message"] == "Already there"
    assert response.json()["errors"] == [{"field": "name", "message": "taken"}]


def test_rate_limiter_drops_expired_windows():
    limiter = RateLimiter(max_requests=5, window_seconds=1)
    for i in range(1000):
        limiter.hit(f"10.0.{i // 256}.{i % 256}", now=0.0)

    limiter.hit("192.168.0.1", now=10000.0)

    assert len(limiter._windows) == 1


def test_rate_limiter_keeps_live_windows_on_sweep():
    limiter = RateLimiter(max_requests=2, window_seconds=60)
    limiter.hit("old", now=0.0)
    limiter.hit("recent", now=50.0)

    limiter.hit("new", now=65.0)

    assert set(limiter._windows) == {"recent", "new"}


def _broken_db():
    raise RuntimeError("database exploded")
    yield


def test_unhandled_error_keeps_request_id(client):
    main_app.dependency_overrides[get_db] = _broken_db

    response = client.get("/api/v1/movies", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "req-500"
    body = response.json()
    assert body["requestId"] == "req-500"
    assert body["message"] == "Internal server error"


class _DownSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_database_check_reports_503(client):
    main_app.dependency_overrides[get_db] = lambda: _DownSession()

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json()["data"] == {"database": "down"}
    assert response.json()["status"] == "error"
