"""Typed request and response records for the platform endpoints."""

from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DecodeError

M = TypeVar("M", bound=BaseModel)


def parse_record(model: Type[M], data: object, context: str) -> M:
    """Validate a decoded JSON payload against a record type.

    Args:
        model: Record class to validate against
        data: Decoded JSON payload
        context: Short description of the call, used in the error message

    Returns:
        Validated record

    Raises:
        DecodeError: If the payload does not match the record
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected response for {context}: {e}") from e


# Spotify responses


class SpotifyUser(BaseModel):
    id: str
    display_name: Optional[str] = None


class SpotifyPlaylist(BaseModel):
    id: str
    name: str = ""


class SpotifyPlaylistPage(BaseModel):
    items: List[SpotifyPlaylist] = []
    next: Optional[str] = None


class SpotifyArtist(BaseModel):
    name: str


class SpotifyTrack(BaseModel):
    id: Optional[str] = None
    name: str = ""
    uri: Optional[str] = None
    artists: List[SpotifyArtist] = []


class SpotifyPlaylistItem(BaseModel):
    # None for tracks that were removed from the catalog
    track: Optional[SpotifyTrack] = None


class SpotifyPlaylistItemPage(BaseModel):
    items: List[SpotifyPlaylistItem] = []
    next: Optional[str] = None


class SpotifyTrackPage(BaseModel):
    items: List[SpotifyTrack] = []


class SpotifySearchResponse(BaseModel):
    tracks: SpotifyTrackPage


# Spotify requests


class SpotifyCreatePlaylistRequest(BaseModel):
    name: str
    description: str
    public: bool = False


class SpotifyAddTracksRequest(BaseModel):
    uris: List[str]


class SpotifyTrackRef(BaseModel):
    uri: str


class SpotifyRemoveTracksRequest(BaseModel):
    tracks: List[SpotifyTrackRef]


# YouTube responses


class YouTubeResourceId(BaseModel):
    kind: str = "youtube#video"
    videoId: Optional[str] = None


class YouTubePlaylistItemSnippet(BaseModel):
    title: str = ""
    videoOwnerChannelTitle: str = ""
    resourceId: YouTubeResourceId = YouTubeResourceId()


class YouTubePlaylistItem(BaseModel):
    id: str = ""
    snippet: YouTubePlaylistItemSnippet


class YouTubePlaylistItemPage(BaseModel):
    items: List[YouTubePlaylistItem] = []
    nextPageToken: Optional[str] = None


class YouTubePlaylistSnippet(BaseModel):
    title: str = ""
    description: str = ""


class YouTubePlaylist(BaseModel):
    id: str
    snippet: YouTubePlaylistSnippet = YouTubePlaylistSnippet()


class YouTubePlaylistPage(BaseModel):
    items: List[YouTubePlaylist] = []
    nextPageToken: Optional[str] = None


class YouTubeSearchId(BaseModel):
    videoId: Optional[str] = None


class YouTubeSearchResult(BaseModel):
    id: YouTubeSearchId


class YouTubeSearchPage(BaseModel):
    items: List[YouTubeSearchResult] = []


class YouTubeChannel(BaseModel):
    id: str


class YouTubeChannelPage(BaseModel):
    items: List[YouTubeChannel] = []


# YouTube requests


class YouTubePlaylistStatus(BaseModel):
    privacyStatus: str


class YouTubePlaylistInsert(BaseModel):
    snippet: YouTubePlaylistSnippet
    status: YouTubePlaylistStatus


class YouTubePlaylistItemInsertSnippet(BaseModel):
    playlistId: str
    resourceId: YouTubeResourceId


class YouTubePlaylistItemInsert(BaseModel):
    snippet: YouTubePlaylistItemInsertSnippet
