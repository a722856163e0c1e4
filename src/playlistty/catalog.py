"""Persisted snapshot of a playlist's tracks."""

import json
import os
from typing import Iterator, List, Optional

from .config import CATALOG_DIR
from .errors import CatalogError
from .logging_config import get_logger
from .models import Track

logger = get_logger(__name__)


def catalog_path(service: str, playlist_id: str, directory: Optional[str] = None) -> str:
    """Path of the catalog file for a playlist."""
    return os.path.join(directory or CATALOG_DIR, service, f"{playlist_id}.json")


class TrackCatalog:
    """Ordered tracks of one source playlist.

    The order is the source platform's order and is the order the tracks are
    written to the destination. The file is always rewritten as a whole.
    """

    def __init__(
        self,
        service: str,
        playlist_id: str,
        tracks: Optional[List[Track]] = None,
        directory: Optional[str] = None,
    ) -> None:
        """Initialize catalog.

        Args:
            service: Service the playlist was read from
            playlist_id: Source playlist ID
            tracks: Tracks in source order
            directory: Root directory for catalog files
        """
        self.service = service
        self.playlist_id = playlist_id
        self.tracks: List[Track] = list(tracks or [])
        self.directory = directory or CATALOG_DIR

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    @property
    def path(self) -> str:
        return catalog_path(self.service, self.playlist_id, self.directory)

    def append(self, track: Track) -> None:
        self.tracks.append(track)

    def unresolved(self) -> List[Track]:
        """Tracks without a destination ID."""
        return [track for track in self.tracks if not track.resolved]

    def resolved_ids(self) -> List[str]:
        """Destination IDs of resolved tracks, in catalog order."""
        return [track.target_id for track in self.tracks if track.resolved]

    def to_json(self) -> List[dict]:
        return [
            {
                "name": track.name,
                "artist": track.artist,
                "artists": track.artists,
                "source_id": track.source_id,
                "id": track.target_id,
            }
            for track in self.tracks
        ]

    def save(self) -> str:
        """Write the catalog file.

        Returns:
            Path of the written file

        Raises:
            CatalogError: If the file cannot be written
        """
        path = self.path
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.to_json(), f, indent=4, ensure_ascii=False)
        except (OSError, TypeError) as e:
            raise CatalogError(f"Error writing catalog {path}: {e}") from e

        logger.debug("Saved %d tracks to %s", len(self.tracks), path)
        return path

    @classmethod
    def load(
        cls, service: str, playlist_id: str, directory: Optional[str] = None
    ) -> "TrackCatalog":
        """Read a catalog file.

        Files that only carry ``name``, ``artist`` and ``id`` are accepted;
        the artist string is split on ", " and ``id`` is taken as the
        destination ID.

        Raises:
            CatalogError: If the file is missing, unreadable or malformed
        """
        path = catalog_path(service, playlist_id, directory)
        try:
            with open(path, "r", encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Error reading catalog {path}: {e}") from e

        if not isinstance(entries, list):
            raise CatalogError(f"Catalog {path} must contain a list of tracks")

        catalog = cls(service, playlist_id, directory=directory)
        for entry in entries or []:
            if not isinstance(entry, dict) or "name" not in entry:
                raise CatalogError(f"Malformed track entry in {path}: {entry!r}")
            artists = entry.get("artists")
            if artists is None:
                artist = entry.get("artist") or ""
                artists = [a for a in artist.split(", ") if a]
            catalog.append(
                Track(
                    name=entry["name"],
                    artists=list(artists),
                    source_id=entry.get("source_id") or "",
                    target_id=entry.get("id") or "",
                )
            )
        return catalog
