# spotify_api.py
"""
Thin authenticated transport over the Spotify Web API.

Requests are issued one at a time on a requests.Session. Non-2xx answers are
raised as requests.HTTPError; bodies are decoded with spotify_models.decode_json.
No retry or rate-limit handling.
"""

import logging
from typing import Any, Optional

import requests

from spotify_config import ClientConfig
from spotify_models import AccessToken, decode_json
from utils.logging_utils import mask

LOG = logging.getLogger("spotify_api")


class SpotifyApi:
    def __init__(self, access_token: AccessToken, config: ClientConfig,
                 session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.config = config
        self.session = session or requests.Session()

    def __repr__(self):
        return f"SpotifyApi(token={mask(self.access_token)}, base={self.config.api_base})"

    @property
    def headers(self):
        return {"Authorization": f"Bearer {self.access_token}"}

    def url(self, path: str) -> str:
        return f"{self.config.api_base}{path}"

    def request(self, method: str, path: str, params=None, json=None) -> Any:
        """
        Issue one authenticated request and return the decoded JSON body.

        Raises requests.RequestException on transport failure or non-2xx status,
        EmptyResponseError / DecodeError when the body can't be decoded.
        """
        url = self.url(path)
        resp = self.session.request(
            method,
            url,
            headers=self.headers,
            params=params,
            json=json,
            timeout=self.config.timeout,
        )
        LOG.debug("%s %s -> %s", method, resp.url, resp.status_code)

        if not resp.ok:
            LOG.error(
                "Spotify API error on %s %s: status=%s body=%s",
                method, path, resp.status_code, resp.text,
            )
            resp.raise_for_status()

        return decode_json(resp.text)

    def get(self, path: str, params=None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json=None) -> Any:
        return self.request("POST", path, json=json)
