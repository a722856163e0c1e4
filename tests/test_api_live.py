"""Checks against the live platform APIs.

Skipped unless pytest is run with ``--run-api``. They read the credentials
from the regular config file, so run ``playlistty --oauth`` for both
platforms first.
"""

import pytest

from src.playlistty.clients import create_client
from src.playlistty.config import SERVICES, Config

pytestmark = pytest.mark.api


@pytest.fixture(scope="module")
def live_config():
    return Config.load()


@pytest.mark.parametrize("service", SERVICES)
def test_token_is_accepted(live_config, service):
    client = create_client(service, live_config)
    assert client.validate_token()


@pytest.mark.parametrize("service", SERVICES)
def test_list_playlists(live_config, service):
    client = create_client(service, live_config)
    playlists = client.list_playlists()
    assert all(playlist.id for playlist in playlists)
