"""Spotify Web API client."""

from typing import Any, Dict, List, Optional

import requests

from .. import oauth
from ..catalog import TrackCatalog
from ..errors import AuthError, DecodeError, NotFoundError, TransportError
from ..logging_config import get_logger
from ..models import PlaylistSummary, Track
from ..records import (
    SpotifyAddTracksRequest,
    SpotifyCreatePlaylistRequest,
    SpotifyPlaylist,
    SpotifyPlaylistItemPage,
    SpotifyPlaylistPage,
    SpotifyRemoveTracksRequest,
    SpotifySearchResponse,
    SpotifyTrackRef,
    SpotifyUser,
    parse_record,
)
from .base import PlatformClient

logger = get_logger(__name__)

API_BASE = "https://api.spotify.com/v1"
REQUEST_TIMEOUT = 30


def track_uri(track_id: str) -> str:
    return f"spotify:track:{track_id}"


class StreamingClient(PlatformClient):
    """Spotify implementation of PlatformClient."""

    service = "spotify"
    # Both playlist mutation endpoints accept at most 100 tracks
    append_batch_size = 100
    clear_batch_size = 100

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _request(
        self,
        method: str,
        path_or_url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue one API request.

        Args:
            method: HTTP method
            path_or_url: API path (e.g. '/me') or an absolute ``next`` URL
            params: Optional query parameters
            json: Optional request body

        Returns:
            Decoded JSON body, or an empty dict for empty bodies

        Raises:
            AuthError: On 401
            TransportError: On connection errors and other non-2xx statuses
            DecodeError: If the body is not JSON
        """
        url = path_or_url if path_or_url.startswith("http") else API_BASE + path_or_url
        try:
            r = requests.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if r.status_code == 401:
            raise AuthError(f"{method} {url}: {r.status_code} {r.reason}")
        if not 200 <= r.status_code < 300:
            raise TransportError(f"{method} {url}: {r.status_code} {r.reason}", r.status_code)

        if not r.content:
            return {}
        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {method} {url}: {e}") from e

    def whoami(self) -> str:
        user = parse_record(SpotifyUser, self._request("GET", "/me"), "current user")
        return user.id

    def _obtain_token(self) -> str:
        return oauth.authorize_spotify(self.credentials)

    def _user_path(self) -> str:
        if not self.credentials.user_id:
            raise AuthError("spotify user_id is not set in the config file")
        return f"/users/{self.credentials.user_id}/playlists"

    def list_playlists(self) -> List[PlaylistSummary]:
        playlists = []
        url: Optional[str] = self._user_path()
        params: Optional[Dict[str, Any]] = {"limit": 50}

        while url:
            page = parse_record(
                SpotifyPlaylistPage, self._request("GET", url, params=params), "playlists"
            )
            playlists.extend(PlaylistSummary(id=p.id, title=p.name) for p in page.items)
            # The next URL already carries the query string
            url, params = page.next, None

        logger.info("Your Spotify playlists:")
        for playlist in playlists:
            logger.info("- %s (ID: %s)", playlist.title, playlist.id)
        return playlists

    def _playlist_items(self, playlist_id: str) -> List:
        items = []
        url: Optional[str] = f"/playlists/{playlist_id}/tracks"
        params: Optional[Dict[str, Any]] = {"limit": 100}

        while url:
            page = parse_record(
                SpotifyPlaylistItemPage,
                self._request("GET", url, params=params),
                f"tracks of playlist {playlist_id}",
            )
            items.extend(page.items)
            logger.debug("Playlist %s page fetched %d items", playlist_id, len(page.items))
            url, params = page.next, None

        return items

    def fetch_tracks(self, playlist_id: str) -> TrackCatalog:
        catalog = self.new_catalog(playlist_id)
        for item in self._playlist_items(playlist_id):
            if item.track is None:
                continue
            catalog.append(
                Track(
                    name=item.track.name,
                    artists=[artist.name for artist in item.track.artists],
                    source_id=item.track.id or "",
                )
            )

        logger.info("Tracks in playlist %s:", playlist_id)
        for track in catalog:
            logger.info("- %s by %s", track.name, track.artist)
        return catalog

    def search_track(self, name: str, primary_artist: str) -> str:
        params = {"q": f"track:{name} artist:{primary_artist}", "type": "track", "limit": 1}
        result = parse_record(
            SpotifySearchResponse, self._request("GET", "/search", params=params), "search"
        )
        # Only the first result is considered
        if not result.tracks.items or not result.tracks.items[0].id:
            raise NotFoundError(f"No Spotify track for {name} by {primary_artist}")

        track = result.tracks.items[0]
        logger.debug(
            "Search result: %s by %s (ID: %s)",
            track.name,
            ", ".join(a.name for a in track.artists),
            track.id,
        )
        return track.id

    def create_playlist(self, title: str, description: str, public: bool = False) -> str:
        body = SpotifyCreatePlaylistRequest(name=title, description=description, public=public)
        playlist = parse_record(
            SpotifyPlaylist,
            self._request("POST", self._user_path(), json=body.model_dump()),
            "create playlist",
        )
        logger.info("Successfully created playlist %s (ID: %s)", title, playlist.id)
        return playlist.id

    def list_item_refs(self, playlist_id: str) -> List[str]:
        items = self._playlist_items(playlist_id)
        refs = [item.track.uri for item in items if item.track is not None and item.track.uri]

        skipped = len(items) - len(refs)
        if skipped:
            # Unavailable entries have no URI to remove them by
            logger.warning(
                "%d unavailable item(s) in playlist %s cannot be removed", skipped, playlist_id
            )
        return refs

    def _remove_items(self, playlist_id: str, refs: List[str]) -> None:
        body = SpotifyRemoveTracksRequest(tracks=[SpotifyTrackRef(uri=uri) for uri in refs])
        self._request("DELETE", f"/playlists/{playlist_id}/tracks", json=body.model_dump())

    def _add_items(self, playlist_id: str, ids: List[str]) -> None:
        body = SpotifyAddTracksRequest(uris=[track_uri(track_id) for track_id in ids])
        self._request("POST", f"/playlists/{playlist_id}/tracks", json=body.model_dump())
