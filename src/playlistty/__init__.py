"""Move playlists between Spotify and YouTube."""

__version__ = "0.1.0"

# Import all public components
from .batcher import RateAwareBatcher
from .catalog import TrackCatalog
from .clients import PlatformClient, StreamingClient, VideoClient, create_client
from .config import Config, PlatformCredentials
from .errors import PlaylisttyError
from .logging_config import configure_logging, get_logger
from .matcher import Matcher
from .migrator import MigrationState, Migrator
from .models import MigrationJob, PlaylistSummary, Track

__all__ = [
    "Config",
    "MigrationJob",
    "MigrationState",
    "Matcher",
    "Migrator",
    "PlatformClient",
    "PlatformCredentials",
    "PlaylistSummary",
    "PlaylisttyError",
    "RateAwareBatcher",
    "StreamingClient",
    "Track",
    "TrackCatalog",
    "VideoClient",
    "configure_logging",
    "create_client",
    "get_logger",
]
