"""Shared fixtures for the Spotify client tests."""

import json
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from spotify_api import SpotifyApi
from spotify_client import SpotifyClient
from spotify_config import ClientConfig
from spotify_models import AccessToken

API = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"


def track_json(i):
    return {
        "id": f"t{i}",
        "name": f"Track {i}",
        "href": f"{API}/tracks/t{i}",
        "album": {"id": f"al{i}", "name": f"Album {i}", "album_type": "album"},
        "artists": [{"id": f"ar{i}", "name": f"Artist {i}"}],
    }


def playlist_json(pid, name, owner="alice"):
    return {
        "id": pid,
        "name": name,
        "href": f"{API}/users/{owner}/playlists/{pid}",
        "owner": {"id": owner, "href": f"{API}/users/{owner}"},
    }


@pytest.fixture
def config():
    return ClientConfig(client_id="test-client-id", client_secret="test-client-secret")


@pytest.fixture
def api(config):
    return SpotifyApi(AccessToken("test-token"), config)


@pytest.fixture
def client(api):
    return SpotifyClient(api)


@pytest.fixture
def mocked():
    """requests is fully mocked; any unregistered URL raises ConnectionError."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def paged():
    """
    Returns a callback factory that serves `items` by the limit/offset query
    parameters of each request, the way Spotify's listing endpoints do.
    """
    def factory(items, total=None):
        def callback(request):
            qs = parse_qs(urlparse(request.url).query)
            limit = int(qs["limit"][0])
            offset = int(qs["offset"][0])
            body = {
                "items": items[offset:offset + limit],
                "total": len(items) if total is None else total,
                "limit": limit,
                "offset": offset,
                "next": None,
                "previous": None,
            }
            return 200, {}, json.dumps(body)
        return callback
    return factory


@pytest.fixture
def snapshots():
    """Callback answering add-tracks POSTs with snap-1, snap-2, ..."""
    counter = {"n": 0}

    def callback(request):
        counter["n"] += 1
        return 201, {}, json.dumps({"snapshot_id": f"snap-{counter['n']}"})
    return callback
