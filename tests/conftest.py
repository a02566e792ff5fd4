# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - In-memory span exporter so tests can inspect every finished span
# - Fake Redis and an httpx MockTransport standing in for videos-api
# - A TestClient over an app whose state holds those fakes
# =============================================================================

import asyncio
import json
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("VIDEOS_API_URL", "http://videos-api:10010")

import httpx
import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.config import Settings
from app.main import create_app
from core.services.aggregator import PlaylistAggregator
from lib.playlist_store import PlaylistStore
from lib.tracing import TracingPropagator
from lib.videos_client import VideosClient

VIDEOS_API_URL = "http://videos-api:10010"


# =============================================================================
# Fakes
# =============================================================================

class FakeRedis:
    """Async stand-in for redis.asyncio.Redis supporting GET."""

    def __init__(self, data: dict[str, str | bytes] | None = None, error: Exception | None = None):
        self.data = data or {}
        self.error = error
        self.calls: list[str] = []

    async def get(self, key: str):
        self.calls.append(key)
        if self.error is not None:
            raise self.error
        value = self.data.get(key)
        if isinstance(value, str):
            return value.encode()
        return value


class FakeVideosApi:
    """
    Scripted videos-api.

    `videos` maps an id to the JSON object to return. An id mapped to an
    exception instance raises it; an id mapped to an int answers with that
    status; an id mapped to a str answers with that raw body.
    """

    def __init__(self, videos: dict | None = None):
        self.videos = videos or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        video_id = request.url.path.lstrip("/")
        outcome = self.videos.get(video_id, 404)

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, json={"error": "nope"})
        if isinstance(outcome, str):
            return httpx.Response(200, content=outcome.encode())
        return httpx.Response(200, json=outcome)

    @property
    def requested_ids(self) -> list[str]:
        return [request.url.path.lstrip("/") for request in self.requests]


def video_json(video_id: str) -> dict:
    """A complete videos-api record for `video_id`."""
    return {
        "id": video_id,
        "title": f"Title {video_id}",
        "description": f"Description {video_id}",
        "imageurl": f"https://img.example.com/{video_id}.png",
        "url": f"https://videos.example.com/{video_id}",
    }


def playlists_json(*playlists: tuple[str, str, list[str]]) -> str:
    """Stored playlists payload from (id, name, video ids) tuples."""
    return json.dumps([
        {"id": pid, "name": name, "videos": [{"id": vid} for vid in video_ids]}
        for pid, name, video_ids in playlists
    ])


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def span_exporter():
    """Collects finished spans in memory."""
    return InMemorySpanExporter()


@pytest.fixture
def tracing(span_exporter):
    """TracingPropagator backed by an always-sampling in-memory provider."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return TracingPropagator(provider.get_tracer("playlists-api-tests"))


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def videos_api():
    return FakeVideosApi()


@pytest.fixture
def videos_client(videos_api, tracing):
    http = httpx.AsyncClient(transport=httpx.MockTransport(videos_api.handler))
    yield VideosClient(http, VIDEOS_API_URL, tracing)
    asyncio.run(http.aclose())


@pytest.fixture
def playlist_store(fake_redis, tracing):
    return PlaylistStore(fake_redis, tracing, key="playlists")


@pytest.fixture
def aggregator(videos_client, tracing):
    return PlaylistAggregator(videos_client, tracing)


@pytest.fixture
def make_client(tracing, playlist_store, aggregator):
    """
    Build a TestClient for given settings.

    The lifespan is not run (no `with` block), so the app uses the fakes
    placed on app.state instead of real Redis and videos-api clients.
    """
    def _make(**overrides) -> TestClient:
        app = create_app(Settings(**overrides))
        app.state.tracing = tracing
        app.state.playlist_store = playlist_store
        app.state.aggregator = aggregator
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client(ENVIRONMENT="production")
