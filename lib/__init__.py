# =============================================================================
# lib/ - I/O Clients and Tracing
# =============================================================================
# This package contains the process's outbound clients:
# - playlist_store.py: Redis-backed playlist source (fail-open)
# - videos_client.py: videos-api client with B3 header propagation
# - tracing.py: OpenTelemetry provider setup and explicit context passing
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.playlist_store import PlaylistStore
from lib.tracing import TracingPropagator, configure_tracing, mark_error
from lib.videos_client import VideosClient

__all__ = [
    "PlaylistStore",
    "TracingPropagator",
    "configure_tracing",
    "mark_error",
    "VideosClient",
]
