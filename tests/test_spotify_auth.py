"""Tests for spotify_auth module."""

from urllib.parse import parse_qs, urlparse

import pytest
import requests
import responses

from conftest import TOKEN_URL
from spotify_auth import exchange_code, get_authorize_url
from spotify_errors import AuthError, DecodeError, EmptyResponseError


class TestExchangeCode:
    """Tests for exchange_code function."""

    @responses.activate
    def test_returns_token(self, config):
        """Should POST the form fields and decode the token envelope."""
        responses.add(responses.POST, TOKEN_URL, json={
            "access_token": "tok123",
            "token_type": "Bearer",
            "expires_in": 3600,
            "refresh_token": "ref456",
            "scope": "playlist-read-private",
        })

        token = exchange_code("the-code", config)

        assert token.access_token == "tok123"
        assert token.token_type == "Bearer"
        assert token.expires_in == 3600
        assert token.refresh_token == "ref456"

        form = parse_qs(responses.calls[0].request.body)
        assert form == {
            "grant_type": ["authorization_code"],
            "code": ["the-code"],
            "redirect_uri": ["http://localhost:8080/callback/"],
            "client_id": ["test-client-id"],
            "client_secret": ["test-client-secret"],
        }

    @responses.activate
    def test_non_2xx_raises_auth_error(self, config):
        responses.add(responses.POST, TOKEN_URL, json={"error": "invalid_grant"}, status=400)

        with pytest.raises(AuthError) as exc_info:
            exchange_code("stale-code", config)
        assert exc_info.value.status_code == 400

    @responses.activate
    def test_malformed_body_raises_auth_error(self, config):
        responses.add(responses.POST, TOKEN_URL, body="<html>oops</html>", status=200)

        with pytest.raises(AuthError) as exc_info:
            exchange_code("the-code", config)
        assert isinstance(exc_info.value.__cause__, DecodeError)

    @responses.activate
    def test_missing_access_token_raises_auth_error(self, config):
        responses.add(responses.POST, TOKEN_URL, json={"token_type": "Bearer"})

        with pytest.raises(AuthError):
            exchange_code("the-code", config)

    @responses.activate
    def test_non_numeric_expiry_raises_auth_error(self, config):
        responses.add(responses.POST, TOKEN_URL, json={"access_token": "tok", "expires_in": "soon"})

        with pytest.raises(AuthError) as exc_info:
            exchange_code("the-code", config)
        assert isinstance(exc_info.value.__cause__, DecodeError)

    @responses.activate
    def test_empty_body_raises_empty_response_error(self, config):
        responses.add(responses.POST, TOKEN_URL, body="", status=200)

        with pytest.raises(EmptyResponseError):
            exchange_code("the-code", config)

    @responses.activate
    def test_transport_error_raises_auth_error(self, config):
        responses.add(responses.POST, TOKEN_URL, body=requests.ConnectionError("no route"))

        with pytest.raises(AuthError):
            exchange_code("the-code", config)


class TestGetAuthorizeUrl:
    """Tests for get_authorize_url function."""

    def test_contains_client_and_redirect(self, config):
        url = get_authorize_url(config, state="xyz")

        parsed = urlparse(url)
        qs = parse_qs(parsed.query)
        assert parsed.netloc == "accounts.spotify.com"
        assert parsed.path == "/authorize"
        assert qs["client_id"] == ["test-client-id"]
        assert qs["response_type"] == ["code"]
        assert qs["redirect_uri"] == ["http://localhost:8080/callback/"]
        assert qs["state"] == ["xyz"]
        assert "playlist-modify-private" in qs["scope"][0]
