# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# - playlists.py: GET / - playlists with videos resolved from videos-api
#
# Each router is mounted in main.py.
# =============================================================================

from . import playlists

__all__ = [
    "playlists",
]
