# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the playlists API.
#
# Two of these errors never reach a client:
# - StoreUnavailableError is absorbed by the playlist store (empty list)
# - DownstreamTransportError is absorbed by the aggregator (playlist truncated)
#
# The decode/encode errors propagate and are turned into JSON error
# responses by the handler registered in main.py.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PlaylistsApiException(Exception):
    """
    Base exception for the playlists API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PLAYLISTS_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Playlist Store Exceptions
# =============================================================================

class StoreUnavailableError(PlaylistsApiException):
    """Raised when the playlists key cannot be read or decoded from Redis."""

    def __init__(self, key: str, error: str):
        super().__init__(
            message=f"Playlist store unavailable for key '{key}': {error}",
            code="STORE_UNAVAILABLE",
            status_code=503,
            suggestion="Check REDIS_HOST/REDIS_PORT and that the key holds a JSON array of playlists",
            details={"key": key, "error": error}
        )


# =============================================================================
# Downstream videos-api Exceptions
# =============================================================================

class DownstreamTransportError(PlaylistsApiException):
    """Raised when a videos-api call fails at the network or HTTP level."""

    def __init__(self, video_id: str, error: str, status: int | None = None):
        details: dict[str, Any] = {"video_id": video_id, "error": error}
        if status is not None:
            details["status"] = status
        super().__init__(
            message=f"videos-api request failed for video '{video_id}': {error}",
            code="DOWNSTREAM_TRANSPORT",
            status_code=502,
            suggestion="Check that videos-api is reachable at VIDEOS_API_URL",
            details=details
        )
        self.video_id = video_id


class DownstreamDecodeError(PlaylistsApiException):
    """Raised when videos-api answers with a body that is not a video record."""

    def __init__(self, video_id: str, error: str):
        super().__init__(
            message=f"videos-api returned an invalid video for '{video_id}'",
            code="DOWNSTREAM_DECODE",
            status_code=502,
            suggestion="videos-api must return a JSON object with id, title, description, imageurl and url",
            details={"video_id": video_id, "error": error}
        )
        self.video_id = video_id


# =============================================================================
# Response Exceptions
# =============================================================================

class ResponseEncodeError(PlaylistsApiException):
    """Raised when the enriched playlists cannot be serialized to JSON."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to encode playlists response: {error}",
            code="RESPONSE_ENCODE",
            status_code=500,
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def playlists_api_exception_handler(
    request: Request,
    exc: PlaylistsApiException
) -> JSONResponse:
    """
    Convert PlaylistsApiException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
