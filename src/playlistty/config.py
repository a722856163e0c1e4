"""Configuration and environment settings."""

import os
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

# Force reload of environment variables
load_dotenv(override=True)

# Directory Settings
DATA_DIR = os.getenv("PLAYLISTTY_DATA_DIR", "config")
CONFIG_FILE = os.getenv("PLAYLISTTY_CONFIG_FILE", os.path.join(DATA_DIR, "config.yml"))
CATALOG_DIR = os.getenv("PLAYLISTTY_CATALOG_DIR", DATA_DIR)

# OAuth Settings
REDIRECT_PORT = int(os.getenv("PLAYLISTTY_REDIRECT_PORT", "3000"))
REDIRECT_PATH = "/callback"
AUTH_TIMEOUT = int(os.getenv("PLAYLISTTY_AUTH_TIMEOUT", "300"))

SPOTIFY_SCOPES = [
    "playlist-modify-public",
    "playlist-modify-private",
    "playlist-read-private",
    "playlist-read-collaborative",
]
YOUTUBE_SCOPES = ["https://www.googleapis.com/auth/youtube"]

# Services
SERVICES = ("spotify", "youtube")
SERVICE_ALIASES = {"spotify": "spotify", "yt": "youtube", "youtube": "youtube"}
DEFAULT_DESCRIPTION = "Made with Playlistty"


def resolve_service(name: str) -> str:
    """Map a CLI service name (``yt``, ``spotify``...) to its canonical name.

    Raises:
        ConfigError: If the service is not supported
    """
    try:
        return SERVICE_ALIASES[name.lower()]
    except KeyError:
        raise ConfigError(
            f"invalid service: {name}. Must be one of {sorted(SERVICE_ALIASES)}"
        ) from None


@dataclass
class PlatformCredentials:
    """Credentials section for one platform."""

    client_id: str = ""
    client_secret: str = ""
    token: str = ""
    user_id: str = ""


@dataclass
class Config:
    """Credential store backed by a YAML file.

    The file is read once by :meth:`load` and only rewritten when :meth:`save`
    is called. Clients keep a reference to the :class:`PlatformCredentials`
    they were built with, so a token stored here is visible to them at once.
    """

    path: str = CONFIG_FILE
    platforms: Dict[str, PlatformCredentials] = field(
        default_factory=lambda: {service: PlatformCredentials() for service in SERVICES}
    )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load the config file, creating an empty one if it does not exist.

        Args:
            path: Path to the YAML file, defaults to CONFIG_FILE

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = path or CONFIG_FILE
        config = cls(path=path)

        if not os.path.exists(path):
            config.save()
            return config

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error reading config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at top level")

        for service in SERVICES:
            section = data.get(service) or {}
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{service}' in {path} must be a mapping")
            config.platforms[service] = PlatformCredentials(
                client_id=str(section.get("client_id") or ""),
                client_secret=str(section.get("client_secret") or ""),
                token=str(section.get("token") or ""),
                user_id=str(section.get("user_id") or ""),
            )
        return config

    def save(self) -> None:
        """Rewrite the whole config file.

        Raises:
            ConfigError: If the file cannot be written
        """
        data = {}
        for service, creds in self.platforms.items():
            section = asdict(creds)
            # YouTube has no user id
            if service == "youtube":
                section.pop("user_id")
            data[service] = section

        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Error writing config file {self.path}: {e}") from e

    def credentials(self, service: str) -> PlatformCredentials:
        """Get the credentials section for a service."""
        if service not in self.platforms:
            raise ConfigError(f"Service {service} not supported")
        return self.platforms[service]
