# =============================================================================
# app/routers/playlists.py - Playlists Endpoint
# =============================================================================
# GET / returns every stored playlist with its videos populated from
# videos-api. The request is the root span of the trace (continuing the
# caller's B3 context when present).
# =============================================================================

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response
from opentelemetry.trace import SpanKind
from pydantic_core import PydanticSerializationError

from app.dependencies import AggregatorDep, PlaylistStoreDep, TracingDep
from app.exceptions import ResponseEncodeError
from core.models.playlist import Playlist, PlaylistList

logger = logging.getLogger(__name__)

router = APIRouter()

# Root span name
ROOT_SPAN_NAME = "/ GET"


def encode_playlists(playlists: list[Playlist]) -> bytes:
    """
    Serialize enriched playlists with their wire field names.

    Raises:
        ResponseEncodeError: If the playlists cannot be serialized
    """
    try:
        return PlaylistList.dump_json(playlists, by_alias=True)
    except PydanticSerializationError as e:
        raise ResponseEncodeError(str(e)) from e


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/")
async def get_playlists(
    request: Request,
    tracing: TracingDep,
    store: PlaylistStoreDep,
    aggregator: AggregatorDep,
):
    """
    List playlists with full video records.

    Always answers 200 with a JSON array: an unreachable store gives `[]`,
    and a failing videos-api call shortens that playlist's videos.
    Only a malformed videos-api payload turns into an error response.
    """
    parent = tracing.extract(request.headers)

    with tracing.span(ROOT_SPAN_NAME, parent, kind=SpanKind.SERVER) as (span, context):
        span.set_attribute("http.method", request.method)
        span.set_attribute("http.route", "/")

        playlists = await store.fetch_playlists(context)
        await aggregator.enrich(playlists, context)
        body = encode_playlists(playlists)

        logger.debug(f"Returning {len(playlists)} playlists")
        span.set_attribute("http.status_code", 200)

    return Response(content=body, media_type="application/json")
