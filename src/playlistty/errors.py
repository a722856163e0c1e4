"""Error handling utilities."""

from typing import Optional

from .logging_config import get_logger

logger = get_logger(__name__)


def log_error(error: Exception, context: Optional[str] = None) -> None:
    """Log an error with optional context.

    Args:
        error: The exception to log
        context: Optional context about where/why the error occurred
    """
    if context:
        logger.error("%s: %s", context, str(error))
    else:
        logger.error(str(error))


class PlaylisttyError(Exception):
    """Base class for playlistty errors."""

    pass


class AuthError(PlaylisttyError):
    """Error raised when a credential is missing, invalid or expired."""

    pass


class TransportError(PlaylisttyError):
    """Error raised when a single platform call fails on the network or HTTP level."""

    def __init__(self, message: str, status: Optional[int] = None):
        """Initialize error.

        Args:
            message: Error message
            status: HTTP status code, if a response was received
        """
        self.status = status
        super().__init__(message)


class DecodeError(PlaylisttyError):
    """Error raised when a response has an unexpected shape."""

    pass


class NotFoundError(PlaylisttyError):
    """Error raised when a search yields no candidate."""

    pass


class ConfigError(PlaylisttyError):
    """Error raised for invalid configuration or flags."""

    pass


class CatalogError(PlaylisttyError):
    """Error raised when a catalog file cannot be read or written."""

    pass


class MigrationAborted(PlaylisttyError):
    """Error raised to stop a migration at the current stage."""

    def __init__(self, message: str, state=None):
        """Initialize error.

        Args:
            message: Why the migration stopped
            state: Migration state the failure happened in
        """
        self.state = state
        super().__init__(message)
