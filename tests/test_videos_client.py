# =============================================================================
# tests/test_videos_client.py - videos-api Client Tests
# =============================================================================
# Request shape, B3 header injection and the transport/decode error split.
# =============================================================================

import asyncio

import httpx
import pytest
from opentelemetry.context import Context

from app.exceptions import DownstreamDecodeError, DownstreamTransportError
from core.models import Video
from lib.videos_client import VideosClient
from tests.conftest import video_json


def fetch(client: VideosClient, video_id: str, context: Context | None = None) -> Video:
    return asyncio.run(client.fetch_video(context or Context(), video_id))


class TestFetchVideo:
    """Tests for VideosClient.fetch_video."""

    def test_fetches_video_by_id(self, videos_client, videos_api):
        videos_api.videos["v1"] = video_json("v1")

        video = fetch(videos_client, "v1")

        assert video == Video.model_validate(video_json("v1"))
        (request,) = videos_api.requests
        assert request.method == "GET"
        assert str(request.url) == "http://videos-api:10010/v1"

    def test_injects_b3_headers_of_given_context(self, videos_client, videos_api, tracing):
        videos_api.videos["v1"] = video_json("v1")

        with tracing.span("videos-api GET", Context()) as (span, context):
            fetch(videos_client, "v1", context)

        (request,) = videos_api.requests
        span_context = span.get_span_context()
        assert request.headers["x-b3-traceid"] == format(span_context.trace_id, "032x")
        assert request.headers["x-b3-spanid"] == format(span_context.span_id, "016x")

    def test_camel_case_body_is_decoded(self, videos_client, videos_api):
        videos_api.videos["v1"] = {"id": "v1", "Title": "Intro", "imageUrl": "https://img/v1.png"}

        video = fetch(videos_client, "v1")

        assert video.title == "Intro"
        assert video.image_url == "https://img/v1.png"

    def test_connect_error_is_transport_error(self, videos_client, videos_api):
        videos_api.videos["v1"] = httpx.ConnectError("connection refused")

        with pytest.raises(DownstreamTransportError) as exc_info:
            fetch(videos_client, "v1")

        assert exc_info.value.video_id == "v1"
        assert exc_info.value.code == "DOWNSTREAM_TRANSPORT"

    def test_timeout_is_transport_error(self, videos_client, videos_api):
        videos_api.videos["v1"] = httpx.ReadTimeout("timed out")

        with pytest.raises(DownstreamTransportError):
            fetch(videos_client, "v1")

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_error_status_is_transport_error(self, videos_client, videos_api, status):
        videos_api.videos["v1"] = status

        with pytest.raises(DownstreamTransportError) as exc_info:
            fetch(videos_client, "v1")

        assert exc_info.value.details["status"] == status

    @pytest.mark.parametrize("body", ["<html>oops</html>", "[]", '{"title": "no id"}'])
    def test_malformed_body_is_decode_error(self, videos_client, videos_api, body):
        videos_api.videos["v1"] = body

        with pytest.raises(DownstreamDecodeError) as exc_info:
            fetch(videos_client, "v1")

        assert exc_info.value.status_code == 502


class TestVideoUrl:
    """Tests for URL building."""

    def test_trailing_slash_in_base_url(self, tracing):
        client = VideosClient(httpx.AsyncClient(), "http://videos-api:10010/", tracing)
        assert client.video_url("v1") == "http://videos-api:10010/v1"

    def test_id_is_a_single_path_segment(self, tracing):
        client = VideosClient(httpx.AsyncClient(), "http://videos-api:10010", tracing)
        assert client.video_url("a/b c") == "http://videos-api:10010/a%2Fb%20c"
