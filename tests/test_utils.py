"""Tests for utility functions."""

import unittest

from src.playlistty import utils


class TestPlaylistIdParsing(unittest.TestCase):
    """Test cases for playlist ID parsing."""

    def test_parse_raw_id(self):
        """Test parsing raw playlist IDs."""
        test_cases = [
            "PLZDXCYiIjJ8lw_7kvf9XWKrG_SJyGBz7f",
            "PLabc_123-456_789",
            "37i9dQZF1DXcBWIGoYBM5M",
        ]
        for playlist_id in test_cases:
            with self.subTest(playlist_id=playlist_id):
                self.assertEqual(utils.parse_playlist_id(playlist_id), playlist_id)

    def test_parse_youtube_url(self):
        """Test parsing YouTube playlist URLs."""
        test_cases = [
            (
                "https://www.youtube.com/playlist" "?list=PLZDXCYiIjJ8lw_7kvf9XWKrG_SJyGBz7f",
                "PLZDXCYiIjJ8lw_7kvf9XWKrG_SJyGBz7f",
            ),
            (
                "https://m.youtube.com/playlist" "?list=PL1234567890abcdef&index=1",
                "PL1234567890abcdef",
            ),
            (
                "https://music.youtube.com/watch?v=abc&list=PLxyz",
                "PLxyz",
            ),
        ]
        for url, expected_id in test_cases:
            with self.subTest(url=url):
                self.assertEqual(utils.parse_playlist_id(url), expected_id)

    def test_parse_spotify_url(self):
        """Test parsing Spotify playlist URLs and URIs."""
        test_cases = [
            (
                "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=abc123",
                "37i9dQZF1DXcBWIGoYBM5M",
            ),
            (
                "https://open.spotify.com/intl-de/playlist/37i9dQZF1DXcBWIGoYBM5M",
                "37i9dQZF1DXcBWIGoYBM5M",
            ),
            ("spotify:playlist:37i9dQZF1DXcBWIGoYBM5M", "37i9dQZF1DXcBWIGoYBM5M"),
        ]
        for url, expected_id in test_cases:
            with self.subTest(url=url):
                self.assertEqual(utils.parse_playlist_id(url), expected_id)

    def test_surrounding_whitespace(self):
        """Test that pasted input is stripped."""
        self.assertEqual(utils.parse_playlist_id("  PL123 \n"), "PL123")

    def test_invalid_input(self):
        """Test handling of invalid inputs."""
        test_cases = [
            "",  # Empty string
            "not a playlist",  # Random text
            "https://youtube.com/watch?v=12345",  # Video URL
            "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC",  # Track URL
        ]
        for invalid in test_cases:
            with self.subTest(invalid=invalid):
                with self.assertRaises(ValueError):
                    utils.parse_playlist_id(invalid)


if __name__ == "__main__":
    unittest.main()
