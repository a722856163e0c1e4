"""Platform clients."""

from typing import Optional

from ..config import Config, resolve_service
from .base import PlatformClient
from .spotify import StreamingClient
from .youtube import VideoClient

CLIENTS = {
    StreamingClient.service: StreamingClient,
    VideoClient.service: VideoClient,
}


def create_client(
    service: str, config: Config, catalog_dir: Optional[str] = None
) -> PlatformClient:
    """Build the client for a service name or CLI alias.

    Raises:
        ConfigError: If the service is not supported
    """
    return CLIENTS[resolve_service(service)](config, catalog_dir)


__all__ = ["PlatformClient", "StreamingClient", "VideoClient", "create_client"]
