# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.REDIS_HOST)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default suitable for running inside the cluster,
    so the service starts with no configuration at all. Override per
    environment with env vars or a .env file.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: str = Field(
        default="production",
        description="Environment mode. DEBUG enables permissive CORS and verbose logging"
    )

    SERVICE_NAME: str = Field(
        default="playlists-api",
        description="Service name reported on every trace span"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=10010,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (playlist store)
    # -------------------------------------------------------------------------

    REDIS_HOST: str = Field(
        default="localhost",
        description="Redis host holding the playlists key"
    )

    REDIS_PORT: int = Field(
        default=6379,
        ge=1,
        le=65535,
        description="Redis port"
    )

    REDIS_DB: int = Field(
        default=0,
        ge=0,
        description="Redis logical database number"
    )

    REDIS_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0.0,
        description="Connect and socket timeout for Redis calls"
    )

    PLAYLISTS_KEY: str = Field(
        default="playlists",
        min_length=1,
        description="Redis key holding the JSON-encoded playlist array"
    )

    # -------------------------------------------------------------------------
    # Downstream videos-api
    # -------------------------------------------------------------------------

    VIDEOS_API_URL: str = Field(
        default="http://videos-api:10010",
        description="Base URL of the videos service; the video id is appended as a path segment"
    )

    VIDEOS_API_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0.0,
        description="Timeout for a single videos-api call (a timeout truncates the playlist)"
    )

    # -------------------------------------------------------------------------
    # Tracing
    # -------------------------------------------------------------------------

    JAEGER_HOST_PORT: str = Field(
        default="localhost:9411",
        description="host:port of the Zipkin-compatible span collector (Jaeger or Zipkin)"
    )

    TRACING_LOG_SPANS: bool = Field(
        default=False,
        description="Also print every finished span to stdout"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_debug(self) -> bool:
        """Check if running in DEBUG mode."""
        return self.ENVIRONMENT.strip().upper() == "DEBUG"

    @property
    def videos_api_base_url(self) -> str:
        """VIDEOS_API_URL without a trailing slash."""
        return self.VIDEOS_API_URL.rstrip("/")

    @property
    def zipkin_endpoint(self) -> str:
        """
        Span collector endpoint.

        Jaeger and Zipkin both accept Zipkin v2 JSON on /api/v2/spans.
        Example: "jaeger:9411" -> "http://jaeger:9411/api/v2/spans"
        """
        return f"http://{self.JAEGER_HOST_PORT}/api/v2/spans"

    @property
    def redis_address(self) -> str:
        """host:port for log messages."""
        return f"{self.REDIS_HOST}:{self.REDIS_PORT}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
