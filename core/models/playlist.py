# =============================================================================
# core/models/playlist.py - Playlist and Video Schemas
# =============================================================================
# These models define both the stored shape and the API contract:
# - VideoRef: the minimal {"id": ...} entry kept in Redis playlists
# - Video: the full record returned by videos-api
# - Playlist: a named, ordered list of videos
#
# Playlists come out of Redis holding VideoRef entries; the aggregator
# replaces them with Video records before the response is written.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


class WireModel(BaseModel):
    """
    Base for records decoded from Redis or videos-api.

    Keys match field names case-insensitively ("imageUrl", "Title"), as the
    services writing these payloads expect. A key already in lowercase wins
    over a differently cased duplicate.
    """

    @model_validator(mode="before")
    @classmethod
    def lowercase_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        folded: dict[Any, Any] = {}
        for key, value in data.items():
            if isinstance(key, str) and key != key.lower():
                folded.setdefault(key.lower(), value)
        folded.update(
            (key, value) for key, value in data.items()
            if not isinstance(key, str) or key == key.lower()
        )
        return folded


class VideoRef(WireModel):
    """
    Reference to a video inside a stored playlist.

    Example:
        {"id": "v1"}
    """

    id: str = Field(
        ...,
        description="Video identifier understood by videos-api"
    )


class Video(WireModel):
    """
    Full video record as served by videos-api.

    Missing string fields decode to "" so that a sparse record from
    videos-api is still a valid video.

    Example:
        {
            "id": "v1",
            "title": "Intro",
            "description": "The first one",
            "imageurl": "https://img.example.com/v1.png",
            "url": "https://videos.example.com/v1"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Video identifier")
    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Video description")

    # Serialized as "imageurl"; "imageUrl" is accepted on input
    image_url: str = Field(
        default="",
        alias="imageurl",
        description="Thumbnail image URL"
    )

    url: str = Field(default="", description="Playback URL")


class Playlist(WireModel):
    """
    A playlist and its videos.

    `videos` holds VideoRef entries when read from the store and Video
    records after enrichment.
    """

    id: str = Field(..., description="Playlist identifier")
    name: str = Field(default="", description="Display name")
    videos: list[VideoRef | Video] = Field(
        default_factory=list,
        description="Ordered videos of the playlist"
    )

    @field_validator("videos", mode="before")
    @classmethod
    def null_videos_as_empty(cls, value):
        """Stored playlists may carry "videos": null."""
        return [] if value is None else value


# Validates the JSON array stored under the playlists key
PlaylistList = TypeAdapter(list[Playlist])
