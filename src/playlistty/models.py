"""Data types shared across the migration pipeline."""

from dataclasses import dataclass, field
from typing import List

from .config import DEFAULT_DESCRIPTION


@dataclass
class Track:
    """One playlist entry.

    An empty ``target_id`` means the track could not be resolved on the
    destination platform.
    """

    name: str
    artists: List[str] = field(default_factory=list)
    source_id: str = ""
    target_id: str = ""

    @property
    def artist(self) -> str:
        return ", ".join(self.artists)

    @property
    def primary_artist(self) -> str:
        return self.artists[0] if self.artists else ""

    @property
    def key(self) -> tuple:
        return (self.name, self.artist)

    @property
    def resolved(self) -> bool:
        return bool(self.target_id)


@dataclass
class PlaylistSummary:
    """A playlist as returned by a playlist listing."""

    id: str
    title: str


@dataclass
class MigrationJob:
    """Configuration for one migration run."""

    source_service: str
    source_playlist_id: str
    target_service: str
    target_playlist_id: str = ""
    create_new: bool = False
    target_name: str = ""
    target_description: str = DEFAULT_DESCRIPTION
