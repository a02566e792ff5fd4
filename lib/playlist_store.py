# =============================================================================
# lib/playlist_store.py - Playlist Store Client
# =============================================================================
# Reads the playlists JSON array from Redis.
#
# The store is fail-open: a connection problem, a missing key or a payload
# that does not parse all end in an empty playlist list, so GET / always
# has something valid to return. The failure is logged and recorded on the
# `redis-get` span.
#
# Usage:
#   store = PlaylistStore(redis_client, tracing, key=settings.PLAYLISTS_KEY)
#   playlists = await store.fetch_playlists(context)
# =============================================================================

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind
from pydantic import ValidationError
from redis.exceptions import RedisError

from app.exceptions import StoreUnavailableError
from core.models.playlist import Playlist, PlaylistList
from lib.tracing import TracingPropagator, mark_error

logger = logging.getLogger(__name__)


class PlaylistStore:
    """
    Redis-backed source of playlists.

    Wraps one shared async Redis client; safe to use from concurrent
    requests.
    """

    def __init__(
        self,
        client: aioredis.Redis,
        tracing: TracingPropagator,
        key: str,
    ):
        self._client = client
        self._tracing = tracing
        self.key = key

    async def fetch_playlists(self, context: Context) -> list[Playlist]:
        """
        Fetch all playlists under a `redis-get` child span of `context`.

        Args:
            context: Trace context of the calling request

        Returns:
            Playlists whose videos are still VideoRef entries, or an empty
            list if the store could not be read. Never raises.
        """
        with self._tracing.span("redis-get", context, kind=SpanKind.CLIENT) as (span, _):
            span.set_attribute("db.system", "redis")
            span.set_attribute("db.operation", "GET")
            span.set_attribute("db.redis.key", self.key)

            try:
                playlists = await self._read()
            except StoreUnavailableError as e:
                logger.warning(f"Error occurred retrieving playlists from Redis: {e.message}")
                mark_error(span, e)
                return []

            span.set_attribute("playlists.count", len(playlists))
            return playlists

    async def _read(self) -> list[Playlist]:
        """
        Read and decode the playlists key.

        Raises:
            StoreUnavailableError: Redis failed, the key is missing, or the
                payload is not a JSON array of playlists
        """
        try:
            raw = await self._client.get(self.key)
        except RedisError as e:
            raise StoreUnavailableError(self.key, str(e)) from e

        if raw is None:
            raise StoreUnavailableError(self.key, "key not found")

        try:
            return PlaylistList.validate_json(raw)
        except ValidationError as e:
            raise StoreUnavailableError(self.key, f"invalid playlists payload: {e}") from e
