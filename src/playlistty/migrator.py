"""End-to-end playlist migration."""

from enum import Enum
from typing import Callable, List, Optional

from .catalog import TrackCatalog
from .clients.base import PlatformClient
from .config import DEFAULT_DESCRIPTION
from .errors import MigrationAborted, PlaylisttyError, log_error
from .logging_config import get_logger
from .matcher import Matcher
from .models import MigrationJob, Track

logger = get_logger(__name__)


def _token_valid(client: PlatformClient) -> bool:
    try:
        return client.validate_token()
    except PlaylisttyError as e:
        log_error(e, "Token check failed")
        return False


def ensure_authenticated(client: PlatformClient) -> bool:
    """Validate a client's token, re-authorizing once if it is rejected.

    Never raises for authorization problems: the caller carries on with
    whatever token results.

    Returns:
        bool: True if the final token check succeeded
    """
    if _token_valid(client):
        return True

    logger.info("Requesting a new %s token", client.service)
    try:
        client.authorize()
    except PlaylisttyError as e:
        log_error(e, "Authorization failed")
        return False
    return _token_valid(client)


class MigrationState(Enum):
    """Stages of a migration, in the order they are reached."""

    INIT = "init"
    AUTHENTICATED = "authenticated"
    SOURCE_FETCHED = "source fetched"
    MATCHED = "matched"
    TARGET_PREPARED = "target prepared"
    CLEARED = "cleared"
    APPLIED = "applied"
    DONE = "done"
    ABORTED = "aborted"


class Migrator:
    """Runs the migration stages strictly in order.

    Any stage that raises moves the run to ``ABORTED``. Stages that already
    completed are not undone; in particular a cleared destination stays
    cleared.
    """

    def __init__(
        self,
        source: PlatformClient,
        destination: PlatformClient,
        show_progress: bool = True,
        authenticated: bool = False,
    ):
        """Initialize migrator.

        Args:
            source: Client of the platform the playlist is read from
            destination: Client of the platform the playlist is written to
            show_progress: Show a progress bar while matching
            authenticated: Both clients were already checked by the caller;
                the authentication stage then only checks the job
        """
        self.source = source
        self.destination = destination
        self.show_progress = show_progress
        self.authenticated = authenticated
        self.state = MigrationState.INIT
        self.history: List[MigrationState] = [MigrationState.INIT]
        self.catalog: Optional[TrackCatalog] = None
        self.target_playlist_id = ""
        self.error: Optional[Exception] = None
        self._confirm_clear: Callable[[str], bool] = lambda playlist_id: False

    @property
    def unresolved(self) -> List[Track]:
        return self.catalog.unresolved() if self.catalog else []

    def run(self, job: MigrationJob, confirm_clear: Callable[[str], bool]) -> MigrationState:
        """Migrate one playlist.

        Args:
            job: What to migrate and where
            confirm_clear: Called with the destination playlist ID before it
                is cleared; the run aborts unless it returns True

        Returns:
            MigrationState: DONE on success, ABORTED otherwise
        """
        self._confirm_clear = confirm_clear
        stages = [
            (MigrationState.AUTHENTICATED, self._authenticate),
            (MigrationState.SOURCE_FETCHED, self._fetch_source),
            (MigrationState.MATCHED, self._match),
            (MigrationState.TARGET_PREPARED, self._prepare_target),
            (MigrationState.CLEARED, self._clear_target),
            (MigrationState.APPLIED, self._apply),
            (MigrationState.DONE, self._finish),
        ]

        for next_state, stage in stages:
            try:
                stage(job)
            except PlaylisttyError as e:
                return self._abort(e)
            self._advance(next_state)

        return self.state

    def _advance(self, state: MigrationState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("Migration state: %s", state.value)

    def _abort(self, error: Exception) -> MigrationState:
        self.error = error
        logger.error(
            "Migration aborted after stage '%s': %s", self.state.value, str(error)
        )
        self._advance(MigrationState.ABORTED)
        return self.state

    def _authenticate(self, job: MigrationJob) -> None:
        if job.source_service != self.source.service:
            raise MigrationAborted(
                f"Job reads from {job.source_service} but the source client is "
                f"{self.source.service}",
                self.state,
            )
        if job.target_service != self.destination.service:
            raise MigrationAborted(
                f"Job writes to {job.target_service} but the destination client is "
                f"{self.destination.service}",
                self.state,
            )

        if self.authenticated:
            return
        ensure_authenticated(self.source)
        # Same platform means same credentials, already checked above
        if self.destination.service != self.source.service:
            ensure_authenticated(self.destination)

    def _fetch_source(self, job: MigrationJob) -> None:
        logger.info("Parsing playlist: %s", job.source_playlist_id)
        self.catalog = self.source.fetch_tracks(job.source_playlist_id)
        path = self.catalog.save()
        logger.info("Saved %d tracks to %s", len(self.catalog), path)

    def _match(self, job: MigrationJob) -> None:
        matcher = Matcher(self.destination, show_progress=self.show_progress)
        matcher.match(self.catalog)
        self.catalog.save()

    def _prepare_target(self, job: MigrationJob) -> None:
        if job.create_new:
            if not job.target_name:
                raise MigrationAborted("A name is required to create a playlist", self.state)
            logger.info("Playlist will default to private")
            self.target_playlist_id = self.destination.create_playlist(
                job.target_name,
                job.target_description or DEFAULT_DESCRIPTION,
                public=False,
            )
        elif job.target_playlist_id:
            self.target_playlist_id = job.target_playlist_id
        else:
            raise MigrationAborted("No destination playlist given", self.state)

    def _clear_target(self, job: MigrationJob) -> None:
        if not self._confirm_clear(self.target_playlist_id):
            raise MigrationAborted(
                f"Clearing playlist {self.target_playlist_id} was not confirmed", self.state
            )
        self.destination.clear_playlist(self.target_playlist_id)

    def _apply(self, job: MigrationJob) -> None:
        ids = self.catalog.resolved_ids()
        logger.info("Transferring %d tracks to playlist %s", len(ids), self.target_playlist_id)
        self.destination.append_tracks(self.target_playlist_id, ids)

    def _finish(self, job: MigrationJob) -> None:
        unresolved = self.unresolved
        if not unresolved:
            logger.info("All %d tracks transferred", len(self.catalog))
            return

        logger.warning(
            "%d track(s) could not be found on %s:", len(unresolved), self.destination.service
        )
        for track in unresolved:
            logger.warning("- %s by %s", track.name, track.artist)
