"""Platform client interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..batcher import RateAwareBatcher
from ..catalog import TrackCatalog
from ..config import Config, PlatformCredentials
from ..errors import AuthError
from ..logging_config import get_logger
from ..models import PlaylistSummary

logger = get_logger(__name__)


class PlatformClient(ABC):
    """Catalog and playlist operations of one platform.

    Subclasses set ``service`` and the two batch limits and implement the
    single-request primitives. Clearing and appending go through a
    :class:`RateAwareBatcher` so every platform splits mutations the same way.
    """

    service: str = ""
    append_batch_size: int = 50
    clear_batch_size: int = 50

    def __init__(self, config: Config, catalog_dir: Optional[str] = None):
        """Initialize client.

        Args:
            config: Loaded configuration, shared with the caller
            catalog_dir: Root directory for catalog files
        """
        self.config = config
        self.catalog_dir = catalog_dir

    @property
    def credentials(self) -> PlatformCredentials:
        return self.config.credentials(self.service)

    @property
    def token(self) -> str:
        if not self.credentials.token:
            raise AuthError(f"No {self.service} token configured, run with --oauth first")
        return self.credentials.token

    def new_catalog(self, playlist_id: str) -> TrackCatalog:
        return TrackCatalog(self.service, playlist_id, directory=self.catalog_dir)

    def validate_token(self) -> bool:
        """Check that the stored credential is accepted.

        Returns:
            bool: True if the platform accepted the credential
        """
        try:
            self.whoami()
        except AuthError as e:
            logger.warning("%s token is not valid: %s", self.service, str(e))
            return False
        logger.info("%s token is valid", self.service)
        return True

    def authorize(self) -> None:
        """Run the authorization flow and persist the new token."""
        token = self._obtain_token()
        self.credentials.token = token
        self.config.save()
        logger.info("Successfully added %s token in: %s", self.service, self.config.path)

    def clear_playlist(self, playlist_id: str) -> int:
        """Remove every item from a playlist.

        Returns:
            Number of removal requests issued
        """
        refs = self.list_item_refs(playlist_id)
        if not refs:
            logger.info("Playlist %s is already empty", playlist_id)
            return 0

        logger.info("Removing %d items from playlist %s", len(refs), playlist_id)
        batcher = RateAwareBatcher(self.clear_batch_size)
        issued = batcher.run(
            refs, lambda window: self._remove_items(playlist_id, window), label="Removed"
        )
        logger.info("Finished clearing playlist %s", playlist_id)
        return issued

    def append_tracks(self, playlist_id: str, ids: Sequence[str]) -> int:
        """Add tracks to the end of a playlist.

        Returns:
            Number of add requests issued
        """
        batcher = RateAwareBatcher(self.append_batch_size)
        issued = batcher.run(
            list(ids), lambda window: self._add_items(playlist_id, window), label="Added"
        )
        logger.info("Finished adding tracks to playlist %s", playlist_id)
        return issued

    @abstractmethod
    def whoami(self) -> str:
        """Return the ID of the authenticated account."""

    @abstractmethod
    def _obtain_token(self) -> str:
        """Run the interactive authorization flow and return an access token."""

    @abstractmethod
    def list_playlists(self) -> List[PlaylistSummary]:
        """List the account's playlists."""

    @abstractmethod
    def fetch_tracks(self, playlist_id: str) -> TrackCatalog:
        """Read every track of a playlist, following all pages."""

    @abstractmethod
    def search_track(self, name: str, primary_artist: str) -> str:
        """Return the ID of the first search result.

        Raises:
            NotFoundError: If the search returned nothing
        """

    @abstractmethod
    def create_playlist(self, title: str, description: str, public: bool = False) -> str:
        """Create a playlist and return its ID."""

    @abstractmethod
    def list_item_refs(self, playlist_id: str) -> List[str]:
        """Return references to every item currently in a playlist."""

    @abstractmethod
    def _remove_items(self, playlist_id: str, refs: List[str]) -> Optional[int]:
        """Remove one window of items.

        Returns:
            Number of items of the window that failed, if the platform reports it
        """

    @abstractmethod
    def _add_items(self, playlist_id: str, ids: List[str]) -> Optional[int]:
        """Add one window of tracks, keeping their order.

        Returns:
            Number of tracks of the window that failed, if the platform reports it
        """
