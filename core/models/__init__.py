# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - playlist.py: Playlist, VideoRef and Video schemas
#
# These models define both the stored shape in Redis and the API contract.
# =============================================================================

from .playlist import Playlist, PlaylistList, Video, VideoRef

__all__ = [
    "Playlist",
    "PlaylistList",
    "Video",
    "VideoRef",
]
