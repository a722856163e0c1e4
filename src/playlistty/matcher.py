"""Resolve catalog tracks on the destination platform."""

from tqdm import tqdm

from .catalog import TrackCatalog
from .clients.base import PlatformClient
from .errors import NotFoundError, PlaylisttyError
from .logging_config import get_logger

logger = get_logger(__name__)


class Matcher:
    """Single-shot search matching.

    Every unresolved track gets exactly one search built from its name and
    first artist. Whatever the first result is becomes the destination ID;
    no result leaves the ID empty.
    """

    def __init__(self, destination: PlatformClient, show_progress: bool = True):
        """Initialize matcher.

        Args:
            destination: Client of the platform tracks are resolved on
            show_progress: Show a progress bar while searching
        """
        self.destination = destination
        self.show_progress = show_progress

    def match(self, catalog: TrackCatalog) -> int:
        """Fill in ``target_id`` for every unresolved track of the catalog.

        Args:
            catalog: Catalog to update in place

        Returns:
            Number of resolved tracks in the catalog afterwards
        """
        pending = catalog.unresolved()

        # Same platform: the source ID already is the destination ID
        if catalog.service == self.destination.service:
            for track in pending:
                track.target_id = track.source_id
            return len(catalog.resolved_ids())

        for track in tqdm(
            pending, desc="Matching", unit="track", disable=not self.show_progress
        ):
            track.target_id = self._search(track.name, track.primary_artist)

        resolved = len(catalog.resolved_ids())
        logger.info("Matched %d of %d tracks", resolved, len(catalog))
        return resolved

    def _search(self, name: str, artist: str) -> str:
        try:
            target_id = self.destination.search_track(name, artist)
        except NotFoundError:
            logger.debug("No match for %s by %s", name, artist)
            return ""
        except PlaylisttyError as e:
            logger.error("Search failed for %s by %s: %s", name, artist, str(e))
            return ""

        logger.debug("Matched %s by %s -> %s", name, artist, target_id)
        return target_id
