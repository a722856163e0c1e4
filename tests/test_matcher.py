"""Tests for track matching."""

import logging

from src.playlistty.catalog import TrackCatalog
from src.playlistty.errors import TransportError
from src.playlistty.matcher import Matcher
from src.playlistty.models import Track


def make_catalog(service, catalog_dir, tracks):
    return TrackCatalog(service, "pl1", tracks, directory=catalog_dir)


def test_match_searches_name_and_first_artist(make_client, catalog_dir):
    """Test that every track gets one search with its first artist."""
    destination = make_client(
        "youtube",
        search_results={("Song 1", "A"): "vid1", ("Song 2", "C"): "vid2"},
    )
    catalog = make_catalog(
        "spotify",
        catalog_dir,
        [Track("Song 1", ["A", "B"], "s1"), Track("Song 2", ["C"], "s2")],
    )

    resolved = Matcher(destination, show_progress=False).match(catalog)

    assert resolved == 2
    assert destination.searches == [("Song 1", "A"), ("Song 2", "C")]
    assert [t.target_id for t in catalog] == ["vid1", "vid2"]


def test_no_result_leaves_track_unresolved(make_client, catalog_dir):
    """Test that a track without a search result keeps an empty ID."""
    destination = make_client("youtube", search_results={("Song 1", "A"): "vid1"})
    catalog = make_catalog(
        "spotify", catalog_dir, [Track("Song 1", ["A"]), Track("Missing", ["B"])]
    )

    resolved = Matcher(destination, show_progress=False).match(catalog)

    assert resolved == 1
    assert [t.name for t in catalog.unresolved()] == ["Missing"]


def test_search_failure_is_logged_and_skipped(make_client, catalog_dir, caplog):
    """Test that a failing search does not stop matching."""
    destination = make_client("youtube", search_results={("Song 2", "B"): "vid2"})
    original = destination.search_track

    def flaky(name, artist):
        if name == "Song 1":
            raise TransportError("500 Internal Server Error", 500)
        return original(name, artist)

    destination.search_track = flaky
    catalog = make_catalog(
        "spotify", catalog_dir, [Track("Song 1", ["A"]), Track("Song 2", ["B"])]
    )

    resolved = Matcher(destination, show_progress=False).match(catalog)

    assert resolved == 1
    assert "Search failed for Song 1 by A" in caplog.text


def test_resolved_tracks_are_not_searched_again(make_client, catalog_dir):
    """Test that only unresolved tracks are searched."""
    destination = make_client("youtube", search_results={("Song 2", "B"): "vid2"})
    catalog = make_catalog(
        "spotify",
        catalog_dir,
        [Track("Song 1", ["A"], "s1", "vid1"), Track("Song 2", ["B"], "s2")],
    )

    Matcher(destination, show_progress=False).match(catalog)

    assert destination.searches == [("Song 2", "B")]


def test_same_platform_copies_source_ids(make_client, catalog_dir):
    """Test that no search happens when both sides are the same platform."""
    destination = make_client("youtube")
    catalog = make_catalog(
        "youtube", catalog_dir, [Track("Song 1", ["A"], "vid1"), Track("Song 2", ["B"], "vid2")]
    )

    resolved = Matcher(destination, show_progress=False).match(catalog)

    assert resolved == 2
    assert destination.searches == []
    assert catalog.resolved_ids() == ["vid1", "vid2"]


def test_match_logs_summary(make_client, catalog_dir, caplog):
    """Test the summary log line."""
    caplog.set_level(logging.INFO)
    destination = make_client("spotify", search_results={("Song 1", "A"): "t1"})
    catalog = make_catalog("youtube", catalog_dir, [Track("Song 1", ["A"]), Track("Song 2")])

    Matcher(destination, show_progress=False).match(catalog)

    assert "Matched 1 of 2 tracks" in caplog.text
