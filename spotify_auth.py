import logging
from typing import Optional

import requests
from spotipy.oauth2 import SpotifyOAuth

from spotify_config import ClientConfig
from spotify_errors import AuthError, DecodeError, EmptyResponseError
from spotify_models import TokenResponse, decode_json
from utils.logging_utils import mask

LOG = logging.getLogger("spotify_auth")


def _oauth_manager(config: ClientConfig, show_dialog: bool = False) -> SpotifyOAuth:
    return SpotifyOAuth(
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=config.redirect_uri,
        scope=config.scopes,
        show_dialog=show_dialog,
        open_browser=False,
    )


def get_authorize_url(config: ClientConfig, state: Optional[str] = None, show_dialog: bool = False) -> str:
    """URL of the Spotify consent page; Spotify redirects back to config.redirect_uri with ?code=..."""
    return _oauth_manager(config, show_dialog=show_dialog).get_authorize_url(state=state)


def exchange_code(code: str, config: ClientConfig) -> TokenResponse:
    """
    Exchange an authorization code for an access token.

    The redirect_uri sent here must match the one used for the authorize
    request exactly, or Spotify rejects the code.
    """
    token_url = f"{config.accounts_base}/api/token"
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": config.redirect_uri,
        "client_id": config.client_id,
        "client_secret": config.client_secret,
    }

    try:
        response = requests.post(token_url, data=data, timeout=config.timeout)
    except requests.RequestException as e:
        LOG.error("Token request failed: %s", e)
        raise AuthError(f"Token request failed: {e}") from e

    LOG.info("Token endpoint status code %s", response.status_code)

    if not 200 <= response.status_code < 300:
        raise AuthError(
            f"Failed to exchange authorization code: {response.status_code} {response.text}",
            status_code=response.status_code,
        )

    try:
        payload = decode_json(response.text)
    except EmptyResponseError:
        LOG.error("Empty response body from token endpoint")
        raise
    except DecodeError as e:
        raise AuthError(f"Could not decode token response: {e}") from e

    try:
        token = TokenResponse.from_dict(payload)
    except DecodeError as e:
        raise AuthError(f"Spotify response missing access token: {e}") from e

    LOG.info("Access token %s (expires in %ss)", mask(token.access_token), token.expires_in)
    return token
