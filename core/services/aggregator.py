# =============================================================================
# core/services/aggregator.py - Playlist Enrichment
# =============================================================================
# Replaces every playlist's video references with full video records
# fetched from videos-api.
#
# Calls are made one at a time, in playlist order and in reference order.
# When a call fails at the transport level the rest of that playlist is
# skipped: the playlist keeps the videos enriched so far and the next
# playlist is processed normally. A malformed video body is not recovered
# and propagates to the caller.
# =============================================================================

import logging

from opentelemetry.context import Context
from opentelemetry.trace import SpanKind

from app.exceptions import DownstreamTransportError
from core.models.playlist import Playlist, Video
from lib.tracing import TracingPropagator, mark_error
from lib.videos_client import VideosClient

logger = logging.getLogger(__name__)

# Span name for each downstream call
VIDEO_SPAN_NAME = "videos-api GET"


class PlaylistAggregator:
    """
    Enriches playlists in place using the videos-api client.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(self, videos: VideosClient, tracing: TracingPropagator):
        self._videos = videos
        self._tracing = tracing

    async def enrich(self, playlists: list[Playlist], context: Context) -> list[Playlist]:
        """
        Populate `videos` of every playlist.

        Args:
            playlists: Playlists holding VideoRef entries; mutated in place
            context: Trace context of the calling request

        Returns:
            The same list, in the same order

        Raises:
            DownstreamDecodeError: videos-api returned a malformed video
        """
        for playlist in playlists:
            playlist.videos = await self._enrich_playlist(playlist, context)
        return playlists

    async def _enrich_playlist(self, playlist: Playlist, context: Context) -> list[Video]:
        enriched: list[Video] = []

        for ref in playlist.videos:
            with self._tracing.span(VIDEO_SPAN_NAME, context, kind=SpanKind.CLIENT) as (span, video_context):
                span.set_attribute("playlist.id", playlist.id)
                span.set_attribute("video.id", ref.id)

                try:
                    video = await self._videos.fetch_video(video_context, ref.id)
                except DownstreamTransportError as e:
                    mark_error(span, e)
                    logger.warning(
                        f"Stopping playlist {playlist.id} after {len(enriched)} of "
                        f"{len(playlist.videos)} videos: {e.message}"
                    )
                    break

            enriched.append(video)

        return enriched
