# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The components are built once in the app lifespan (see main.py) and kept
# on app.state; these providers hand them to route handlers via Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services.aggregator import PlaylistAggregator
from lib.playlist_store import PlaylistStore
from lib.tracing import TracingPropagator


def get_tracing(request: Request) -> TracingPropagator:
    """Get the process-wide tracing propagator."""
    return request.app.state.tracing


def get_playlist_store(request: Request) -> PlaylistStore:
    """Get the Redis-backed playlist store."""
    return request.app.state.playlist_store


def get_aggregator(request: Request) -> PlaylistAggregator:
    """Get the playlist aggregator."""
    return request.app.state.aggregator


# Type aliases for dependency injection
TracingDep = Annotated[TracingPropagator, Depends(get_tracing)]
PlaylistStoreDep = Annotated[PlaylistStore, Depends(get_playlist_store)]
AggregatorDep = Annotated[PlaylistAggregator, Depends(get_aggregator)]
