"""YouTube Data API client."""

from typing import Any, List, Optional, Tuple

from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from .. import oauth
from ..catalog import TrackCatalog
from ..config import Config
from ..errors import AuthError, NotFoundError, TransportError
from ..logging_config import get_logger
from ..models import PlaylistSummary, Track
from ..records import (
    YouTubeChannelPage,
    YouTubePlaylist,
    YouTubePlaylistInsert,
    YouTubePlaylistItemInsert,
    YouTubePlaylistItemInsertSnippet,
    YouTubePlaylistItemPage,
    YouTubePlaylistPage,
    YouTubePlaylistSnippet,
    YouTubePlaylistStatus,
    YouTubeResourceId,
    YouTubeSearchPage,
    parse_record,
)
from .base import PlatformClient

logger = get_logger(__name__)

TOPIC_SUFFIX = " - Topic"


def channel_to_artist(channel_title: str) -> str:
    """Strip the auto-generated " - Topic" suffix from a channel name."""
    if channel_title.endswith(TOPIC_SUFFIX):
        return channel_title[: -len(TOPIC_SUFFIX)]
    return channel_title


class VideoClient(PlatformClient):
    """YouTube implementation of PlatformClient."""

    service = "youtube"
    append_batch_size = 25
    clear_batch_size = 25

    def __init__(self, config: Config, catalog_dir: Optional[str] = None, youtube=None):
        """Initialize client.

        Args:
            config: Loaded configuration, shared with the caller
            catalog_dir: Root directory for catalog files
            youtube: Prebuilt YouTube API resource; built from the stored
                token on first use if not given
        """
        super().__init__(config, catalog_dir)
        self._youtube = youtube

    @property
    def youtube(self):
        if self._youtube is None:
            self._youtube = build("youtube", "v3", credentials=Credentials(self.token))
        return self._youtube

    def authorize(self) -> None:
        super().authorize()
        # Rebuild with the new token on next use
        self._youtube = None

    def _execute(self, request, context: str) -> Any:
        """Execute one API request.

        Raises:
            AuthError: If the token is rejected
            TransportError: On HTTP or network failure
        """
        try:
            return request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            if status == 401:
                raise AuthError(f"{context}: {e}") from e
            raise TransportError(f"{context}: {e}", status) from e
        except RefreshError as e:
            raise AuthError(f"{context}: {e}") from e
        except (HttpLib2Error, OSError) as e:
            raise TransportError(f"{context}: {e}") from e

    def _execute_batch(self, requests: List[Tuple[str, Any]], context: str) -> int:
        """Send several API calls as one HTTP batch request.

        The calls of a batch may run in any order, so this is only used where
        order does not matter.

        Args:
            requests: (label, request) pairs
            context: Short description for log messages

        Returns:
            Number of calls that failed

        Raises:
            TransportError: If the batch request failed or every call in it failed
        """
        failures = []

        def callback(request_id, response, exception):
            if exception is not None:
                label = requests[int(request_id)][0]
                failures.append(label)
                logger.error("%s %s failed: %s", context, label, str(exception))

        batch = self.youtube.new_batch_http_request(callback=callback)
        for index, (_, request) in enumerate(requests):
            batch.add(request, request_id=str(index))
        self._execute(batch, context)

        if requests and len(failures) == len(requests):
            raise TransportError(f"{context}: every request in the batch failed")
        return len(failures)

    def whoami(self) -> str:
        response = self._execute(
            self.youtube.channels().list(part="id", mine=True), "Validate token"
        )
        page = parse_record(YouTubeChannelPage, response, "channels")
        return page.items[0].id if page.items else ""

    def _obtain_token(self) -> str:
        return oauth.authorize_youtube(self.credentials)

    def list_playlists(self) -> List[PlaylistSummary]:
        playlists = []
        page_token = None

        while True:
            request = self.youtube.playlists().list(
                part="snippet",
                mine=True,
                maxResults=50,
                pageToken=page_token,
            )
            page = parse_record(
                YouTubePlaylistPage, self._execute(request, "List playlists"), "playlists"
            )
            playlists.extend(PlaylistSummary(id=p.id, title=p.snippet.title) for p in page.items)

            # Get next page token
            page_token = page.nextPageToken
            if not page_token:
                break

        logger.info("Your YouTube playlists:")
        for playlist in playlists:
            logger.info("- %s (ID: %s)", playlist.title, playlist.id)
        return playlists

    def _playlist_items(self, playlist_id: str) -> List:
        items = []
        page_token = None

        while True:
            request = self.youtube.playlistItems().list(
                part="snippet",
                playlistId=playlist_id,
                maxResults=50,
                pageToken=page_token,
            )
            page = parse_record(
                YouTubePlaylistItemPage,
                self._execute(request, f"List items of playlist {playlist_id}"),
                f"items of playlist {playlist_id}",
            )
            items.extend(page.items)

            page_token = page.nextPageToken
            if not page_token:
                break

        return items

    def fetch_tracks(self, playlist_id: str) -> TrackCatalog:
        catalog = self.new_catalog(playlist_id)
        for item in self._playlist_items(playlist_id):
            snippet = item.snippet
            artist = channel_to_artist(snippet.videoOwnerChannelTitle)
            catalog.append(
                Track(
                    name=snippet.title,
                    artists=[artist] if artist else [],
                    source_id=snippet.resourceId.videoId or "",
                )
            )

        logger.info("Tracks in playlist %s:", playlist_id)
        for track in catalog:
            logger.info("- %s by %s (ID: %s)", track.name, track.artist, track.source_id)
        return catalog

    def search_track(self, name: str, primary_artist: str) -> str:
        request = self.youtube.search().list(
            part="snippet",
            q=f"{name} {primary_artist}".strip(),
            type="video",
            maxResults=1,
        )
        page = parse_record(YouTubeSearchPage, self._execute(request, "Search"), "search")
        if not page.items or not page.items[0].id.videoId:
            raise NotFoundError(f"No YouTube video for {name} by {primary_artist}")

        video_id = page.items[0].id.videoId
        logger.debug("Search result for %s by %s: %s", name, primary_artist, video_id)
        return video_id

    def create_playlist(self, title: str, description: str, public: bool = False) -> str:
        body = YouTubePlaylistInsert(
            snippet=YouTubePlaylistSnippet(title=title, description=description),
            status=YouTubePlaylistStatus(privacyStatus="public" if public else "private"),
        )
        request = self.youtube.playlists().insert(part="snippet,status", body=body.model_dump())
        playlist = parse_record(
            YouTubePlaylist, self._execute(request, "Create playlist"), "create playlist"
        )
        logger.info("Successfully created playlist %s (ID: %s)", title, playlist.id)
        return playlist.id

    def list_item_refs(self, playlist_id: str) -> List[str]:
        return [item.id for item in self._playlist_items(playlist_id) if item.id]

    def _remove_items(self, playlist_id: str, refs: List[str]) -> int:
        requests = [(item_id, self.youtube.playlistItems().delete(id=item_id)) for item_id in refs]
        return self._execute_batch(requests, f"Remove from playlist {playlist_id}")

    def _add_items(self, playlist_id: str, ids: List[str]) -> int:
        """Insert videos one at a time so the playlist keeps the window's order.

        Raises:
            AuthError: If the token is rejected
            TransportError: If every insert of the window failed
        """
        failed = 0
        for video_id in ids:
            body = YouTubePlaylistItemInsert(
                snippet=YouTubePlaylistItemInsertSnippet(
                    playlistId=playlist_id,
                    resourceId=YouTubeResourceId(kind="youtube#video", videoId=video_id),
                )
            )
            request = self.youtube.playlistItems().insert(part="snippet", body=body.model_dump())
            try:
                self._execute(request, f"Add {video_id} to playlist {playlist_id}")
            except TransportError as e:
                failed += 1
                logger.error("Failed to add video %s: %s", video_id, str(e))

        if ids and failed == len(ids):
            raise TransportError(f"Add to playlist {playlist_id}: every insert failed")
        return failed
