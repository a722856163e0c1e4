"""Common test fixtures and utilities."""

from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from src.playlistty.catalog import TrackCatalog
from src.playlistty.clients.base import PlatformClient
from src.playlistty.config import Config
from src.playlistty.errors import AuthError, NotFoundError, TransportError
from src.playlistty.models import PlaylistSummary, Track


@pytest.fixture
def config(tmp_path) -> Config:
    """Create a config with tokens for both platforms.

    Returns:
        Config: Configuration stored under tmp_path
    """
    config = Config(path=str(tmp_path / "config.yml"))
    config.platforms["spotify"].user_id = "user1"
    config.platforms["spotify"].client_id = "spotify-client"
    config.platforms["spotify"].client_secret = "spotify-secret"
    config.platforms["spotify"].token = "spotify-token"
    config.platforms["youtube"].client_id = "youtube-client"
    config.platforms["youtube"].client_secret = "youtube-secret"
    config.platforms["youtube"].token = "youtube-token"
    return config


@pytest.fixture
def catalog_dir(tmp_path) -> str:
    """Directory catalogs are written to."""
    return str(tmp_path / "catalogs")


@pytest.fixture
def youtube_client() -> MagicMock:
    """Create a mock YouTube API resource.

    Returns:
        MagicMock: Mock YouTube API client with common methods configured
    """
    mock = MagicMock()

    mock.playlistItems.return_value.list.return_value.execute.return_value = {
        "items": [
            {
                "id": "item1",
                "snippet": {
                    "title": "Song 1",
                    "videoOwnerChannelTitle": "Artist 1 - Topic",
                    "resourceId": {"kind": "youtube#video", "videoId": "vid1"},
                },
            },
            {
                "id": "item2",
                "snippet": {
                    "title": "Song 2",
                    "videoOwnerChannelTitle": "Artist 2",
                    "resourceId": {"kind": "youtube#video", "videoId": "vid2"},
                },
            },
        ]
    }

    mock.playlists.return_value.list.return_value.execute.return_value = {
        "items": [{"id": "playlist1", "snippet": {"title": "Playlist 1"}}]
    }

    return mock


class FakeClient(PlatformClient):
    """In-memory PlatformClient recording every request it would send."""

    def __init__(
        self,
        service: str,
        config: Config,
        catalog_dir: Optional[str] = None,
        tracks: Optional[List[Track]] = None,
        search_results: Optional[dict] = None,
        existing_items: Optional[List[str]] = None,
        append_batch_size: int = 25,
        clear_batch_size: int = 100,
    ):
        self.service = service
        self.append_batch_size = append_batch_size
        self.clear_batch_size = clear_batch_size
        super().__init__(config, catalog_dir)
        self.tracks = tracks or []
        self.search_results = search_results or {}
        self.existing_items = list(existing_items or [])
        self.valid_token = True
        self.fail_fetch: Optional[Exception] = None
        self.fail_windows: List[int] = []
        self.searches: List[tuple] = []
        self.created: List[tuple] = []
        self.remove_requests: List[List[str]] = []
        self.add_requests: List[List[str]] = []
        self.authorize_calls = 0

    def whoami(self) -> str:
        if not self.valid_token:
            raise AuthError("401 Unauthorized")
        return "me"

    def _obtain_token(self) -> str:
        self.authorize_calls += 1
        return "new-token"

    def list_playlists(self) -> List[PlaylistSummary]:
        return [PlaylistSummary(id="pl1", title="Playlist 1")]

    def fetch_tracks(self, playlist_id: str) -> TrackCatalog:
        if self.fail_fetch:
            raise self.fail_fetch
        catalog = self.new_catalog(playlist_id)
        for track in self.tracks:
            catalog.append(Track(track.name, list(track.artists), track.source_id))
        return catalog

    def search_track(self, name: str, primary_artist: str) -> str:
        self.searches.append((name, primary_artist))
        result = self.search_results.get((name, primary_artist))
        if not result:
            raise NotFoundError(f"{name} by {primary_artist}")
        return result

    def create_playlist(self, title: str, description: str, public: bool = False) -> str:
        self.created.append((title, description, public))
        return "new-playlist"

    def list_item_refs(self, playlist_id: str) -> List[str]:
        return list(self.existing_items)

    def _remove_items(self, playlist_id: str, refs: List[str]) -> None:
        self.remove_requests.append(refs)

    def _add_items(self, playlist_id: str, ids: List[str]) -> None:
        self.add_requests.append(ids)
        if len(self.add_requests) in self.fail_windows:
            raise TransportError("500 Internal Server Error", 500)


@pytest.fixture
def make_client(config, catalog_dir):
    """Factory for FakeClient instances sharing the test config."""

    def factory(service: str, **kwargs: Any) -> FakeClient:
        return FakeClient(service, config, catalog_dir, **kwargs)

    return factory
