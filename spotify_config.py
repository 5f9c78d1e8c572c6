# spotify_config.py
"""
Client credentials and API settings, loaded once at startup from
config.json and/or environment variables (a .env file is honoured).
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from spotify_models import ClientId, ClientSecret, RedirectUri

CONFIG_PATH = Path("config.json")

DEFAULT_REDIRECT_URI = "http://localhost:8080/callback/"
DEFAULT_SCOPES = "playlist-read-private playlist-modify-private user-read-private"
DEFAULT_PAGE_SIZE = 5

API_BASE = "https://api.spotify.com/v1"
ACCOUNTS_BASE = "https://accounts.spotify.com"


@dataclass(frozen=True)
class ClientConfig:
    client_id: ClientId
    client_secret: ClientSecret
    redirect_uri: RedirectUri = RedirectUri(DEFAULT_REDIRECT_URI)
    scopes: str = DEFAULT_SCOPES
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = 15
    api_base: str = API_BASE
    accounts_base: str = ACCOUNTS_BASE

    def __post_init__(self):
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")


def _read_config_file(path: Path) -> dict:
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config(path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """
    Build a ClientConfig.

    Values come from the JSON file at `path` (or ./config.json if present),
    then environment variables override them. Both the SPOTIFY_* names and
    the bare client_id / client_secret names are accepted.
    """
    load_dotenv()

    file_values = {}
    config_path = Path(path) if path else CONFIG_PATH
    if path and not config_path.exists():
        raise FileNotFoundError(f"Config file not found at: {config_path.resolve()}")
    if config_path.exists():
        file_values = _read_config_file(config_path)

    client_id = _env("SPOTIFY_CLIENT_ID", "client_id") or file_values.get("client_id")
    client_secret = _env("SPOTIFY_CLIENT_SECRET", "client_secret") or file_values.get("client_secret")
    redirect_uri = _env("SPOTIFY_REDIRECT_URI") or file_values.get("redirect_uri") or DEFAULT_REDIRECT_URI
    scopes = _env("SPOTIFY_SCOPES") or file_values.get("scopes") or DEFAULT_SCOPES
    page_size = _env("SPOTIFY_PAGE_SIZE")
    if page_size is None:
        page_size = file_values.get("page_size")
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE

    for key, value in (("client_id", client_id), ("client_secret", client_secret)):
        if not value:
            raise ValueError(f"Missing required setting: '{key}'")

    try:
        page_size = int(page_size)
    except (TypeError, ValueError):
        raise ValueError(f"page_size must be an integer, got {page_size!r}")

    return ClientConfig(
        client_id=ClientId(client_id),
        client_secret=ClientSecret(client_secret),
        redirect_uri=RedirectUri(redirect_uri),
        scopes=scopes,
        page_size=page_size,
    )
