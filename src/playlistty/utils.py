"""Utility functions for playlist input."""

import re

PLAYLIST_URL_PATTERNS = (
    # https://www.youtube.com/playlist?list=PL...
    re.compile(r"[?&]list=([^&#]+)"),
    # https://open.spotify.com/playlist/37i9...?si=...
    re.compile(r"open\.spotify\.com/(?:[a-z-]+/)?playlist/([A-Za-z0-9]+)"),
    # spotify:playlist:37i9...
    re.compile(r"^spotify:playlist:([A-Za-z0-9]+)$"),
)


def parse_playlist_id(playlist_str: str) -> str:
    """Extract a playlist ID from a YouTube/Spotify playlist URL or return the raw ID.

    Args:
        playlist_str: A playlist URL, Spotify URI or ID

    Returns:
        The playlist ID

    Raises:
        ValueError if the input is not a valid playlist URL or ID
    """
    playlist_str = playlist_str.strip()
    for pattern in PLAYLIST_URL_PATTERNS:
        match = pattern.search(playlist_str)
        if match:
            return match.group(1)

    # If not a URL, validate as a raw playlist ID
    if re.match(r"^[A-Za-z0-9_-]+$", playlist_str):
        return playlist_str

    raise ValueError(f"Invalid playlist format: {playlist_str}. Must be a playlist URL or ID")
