"""Command-line interface for playlist migration."""

import argparse
import sys
from typing import List, Optional, Tuple

from . import config as settings
from .clients import PlatformClient, create_client
from .config import Config, resolve_service
from .errors import ConfigError, PlaylisttyError
from .logging_config import configure_logging, get_logger
from .migrator import MigrationState, Migrator, ensure_authenticated
from .models import MigrationJob
from .utils import parse_playlist_id

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Move a playlist between Spotify and YouTube"
    )
    services = sorted(settings.SERVICE_ALIASES)
    parser.add_argument(
        "--service", choices=services, help="Platform to migrate a playlist from"
    )
    parser.add_argument(
        "--oauth", choices=services, help="Generate an OAuth token for a platform"
    )
    parser.add_argument(
        "--config", default=settings.CONFIG_FILE, help="Path to config file"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def ask_playlist_id(prompt: str = "\nEnter Playlist id: ") -> str:
    """Ask for a playlist ID, accepting playlist URLs too.

    Raises:
        ValueError: If the answer is not a playlist URL or ID
    """
    return parse_playlist_id(input(prompt))


def ask_yes_no(question: str) -> bool:
    answer = input(f"{question} [y/N]: ")
    return answer.strip().lower() in ("y", "yes")


def choose_platform() -> Optional[str]:
    """Ask which platform to import to.

    Returns:
        Canonical service name, or None for an invalid choice
    """
    logger.info("What platform do you want to import to?")
    for i, platform in enumerate(settings.SERVICES, 1):
        logger.info("%d. %s", i, platform)

    choice = input(f"Enter number 1-{len(settings.SERVICES)}: ")
    try:
        index = int(choice)
    except ValueError:
        index = 0
    if not 1 <= index <= len(settings.SERVICES):
        logger.error("Invalid choice")
        return None
    return settings.SERVICES[index - 1]


def confirm_clear(playlist_id: str) -> bool:
    """Ask before a destination playlist is emptied."""
    logger.warning("⚠️  WARNING: This will remove ALL items from playlist %s!", playlist_id)
    confirm = input('\nType "yes" to confirm: ')
    if confirm.strip().lower() != "yes":
        logger.info("Operation cancelled.")
        return False
    return True


def show_playlists(client: PlatformClient) -> None:
    try:
        client.list_playlists()
    except PlaylisttyError as e:
        logger.error("Could not list %s playlists: %s", client.service, str(e))


def collect_job(
    source: PlatformClient, config: Config
) -> Optional[Tuple[MigrationJob, PlatformClient]]:
    """Interactively build a migration job.

    Args:
        source: Client of the platform to migrate from
        config: Loaded configuration

    Returns:
        The job and the destination client, or None if the input was invalid
    """
    show_playlists(source)
    try:
        source_playlist_id = ask_playlist_id()
    except ValueError as e:
        logger.error(str(e))
        return None

    target_service = choose_platform()
    if target_service is None:
        return None
    destination = create_client(target_service, config)
    # Same platform shares the source credentials checked in run_migration
    if destination.service != source.service:
        ensure_authenticated(destination)

    job = MigrationJob(
        source_service=source.service,
        source_playlist_id=source_playlist_id,
        target_service=target_service,
    )
    job.create_new = ask_yes_no("Do you want to create a new playlist?")
    if job.create_new:
        job.target_name = input("Playlist name: ").strip()
        return job, destination

    logger.warning("The chosen playlist will be cleared before the transfer")
    show_playlists(destination)
    try:
        job.target_playlist_id = ask_playlist_id()
    except ValueError as e:
        logger.error(str(e))
        return None
    return job, destination


def run_migration(config: Config, service: str) -> int:
    """Run an interactive migration from ``service``.

    Returns:
        int: Exit code
    """
    logger.info("Welcome to playlistty!")
    source = create_client(service, config)
    ensure_authenticated(source)

    collected = collect_job(source, config)
    if collected is None:
        return 1
    job, destination = collected

    migrator = Migrator(source, destination, authenticated=True)
    state = migrator.run(job, confirm_clear)
    if state != MigrationState.DONE:
        return 1

    logger.info(
        "Playlist transferred to %s playlist %s",
        destination.service,
        migrator.target_playlist_id,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        int: Exit code
    """
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return 1 if e.code == 2 else e.code

    if not args.service and not args.oauth:
        parser.print_help()
        return 1

    configure_logging(args.debug)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        logger.error("Error reading config: %s", str(e))
        return 1

    if args.oauth:
        try:
            create_client(args.oauth, config).authorize()
        except PlaylisttyError as e:
            logger.error("Failed to generate %s token: %s", resolve_service(args.oauth), str(e))
            return 1

    if not args.service:
        return 0

    try:
        return run_migration(config, resolve_service(args.service))
    except ConfigError as e:
        logger.error("Command failed: %s", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
