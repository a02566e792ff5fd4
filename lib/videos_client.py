# =============================================================================
# lib/videos_client.py - Video Enrichment Client
# =============================================================================
# Fetches one video record from videos-api:
#
#   GET {VIDEOS_API_URL}/{video_id}
#
# The caller's trace context is injected as B3 headers so videos-api
# continues the same trace. There is no retry: a failed call is reported
# and the caller decides what to do with it.
# =============================================================================

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from opentelemetry.context import Context
from pydantic import ValidationError

from app.exceptions import DownstreamDecodeError, DownstreamTransportError
from core.models.playlist import Video
from lib.tracing import TracingPropagator

logger = logging.getLogger(__name__)


class VideosClient:
    """
    Client for the downstream videos-api service.

    Wraps one shared httpx.AsyncClient (connection pooling, timeouts);
    safe to use from concurrent requests.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        tracing: TracingPropagator,
    ):
        self._http = http
        self.base_url = base_url.rstrip("/")
        self._tracing = tracing

    def video_url(self, video_id: str) -> str:
        """URL of a single video; the id is quoted as one path segment."""
        return f"{self.base_url}/{quote(video_id, safe='')}"

    async def fetch_video(self, context: Context, video_id: str) -> Video:
        """
        Fetch a single video.

        Args:
            context: Trace context whose active span is propagated downstream
            video_id: Identifier of the video to fetch

        Returns:
            Video: The decoded video record

        Raises:
            DownstreamTransportError: Connection error, timeout or non-2xx status
            DownstreamDecodeError: Response body is not a video JSON object
        """
        headers: dict[str, str] = {}
        self._tracing.inject(context, headers)

        url = self.video_url(video_id)
        try:
            response = await self._http.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DownstreamTransportError(
                video_id,
                f"HTTP {e.response.status_code} from {url}",
                status=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise DownstreamTransportError(video_id, f"{type(e).__name__}: {e}") from e

        try:
            video = Video.model_validate_json(response.content)
        except ValidationError as e:
            raise DownstreamDecodeError(video_id, str(e)) from e

        logger.debug(f"Fetched video {video_id} from videos-api")
        return video
