# app/core/config.py

from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_UPLOAD_TYPES = "audio/mpeg,audio/wav,audio/ogg,audio/mp4,audio/flac"


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Movies Space API", description="Application name")
    app_version: str = Field(default="1.0.0", description="API version")
    environment: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Database
    database_url: str = Field(default="sqlite:///./movies_space.db", description="SQLAlchemy URL")
    database_echo: bool = Field(default=False, description="Echo SQL statements")

    # JWT
    jwt_secret: str = Field(default="movies-space-secret", description="Access token secret")
    jwt_refresh_secret: str = Field(
        default="movies-space-refresh-secret", description="Refresh token secret"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=15, description="Access token lifetime")
    refresh_token_expire_days: int = Field(default=7, description="Refresh token lifetime")

    # CORS
    cors_origin: str = Field(
        default="http://localhost:5173", description="Allowed origins, comma separated"
    )

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True, description="Enable the per-IP rate limit")
    rate_limit_window_seconds: int = Field(default=15 * 60, description="Window length")
    rate_limit_max_requests: int = Field(default=100, description="Requests allowed per window")

    # Feature flags
    feature_uploads: bool = Field(default=True, description="Enable music uploads")
    feature_offline_cache: bool = Field(default=False, description="Enable offline cache")

    # Uploads
    max_file_size: int = Field(default=500 * 1024 * 1024, description="Max upload size in bytes")
    allowed_upload_types: str = Field(
        default=DEFAULT_UPLOAD_TYPES, description="Allowed upload mime types, comma separated"
    )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def upload_mime_types(self) -> List[str]:
        return [mime.strip() for mime in self.allowed_upload_types.split(",") if mime.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
