# spotify_models.py
"""
Typed records for Spotify Web API responses, plus the decoders that build
them from JSON bodies.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, NewType, Optional, TypeVar

from spotify_errors import DecodeError, EmptyResponseError

# Distinct string types so tokens, usernames and ids don't get mixed up.
AccessToken = NewType("AccessToken", str)
Username = NewType("Username", str)
ClientId = NewType("ClientId", str)
ClientSecret = NewType("ClientSecret", str)
RedirectUri = NewType("RedirectUri", str)
PlaylistId = NewType("PlaylistId", str)

TRACK_URI_SCHEME = "spotify"

T = TypeVar("T")


def decode_json(body: Optional[str]) -> Any:
    """Parse a response body, distinguishing empty bodies from malformed ones."""
    if body is None or not body.strip():
        raise EmptyResponseError("Empty response body")
    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Malformed JSON in response body: {e}") from e


def _object(data: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {kind}, got {type(data).__name__}")
    return data


def _require(data: Any, key: str, kind: str) -> Any:
    _object(data, kind)
    if key not in data or data[key] is None:
        raise DecodeError(f"Missing '{key}' in {kind}")
    return data[key]


def _int(value: Any, key: str) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Bad '{key}' value {value!r}") from e


@dataclass(frozen=True)
class TokenResponse:
    access_token: AccessToken
    token_type: str = "Bearer"
    expires_in: int = 0
    refresh_token: str = ""
    scope: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenResponse":
        return cls(
            access_token=AccessToken(_require(data, "access_token", "token response")),
            token_type=data.get("token_type") or "Bearer",
            expires_in=_int(data.get("expires_in"), "expires_in"),
            refresh_token=data.get("refresh_token") or "",
            scope=data.get("scope") or "",
        )


@dataclass(frozen=True)
class UserIdentity:
    id: Username
    display_name: str = ""
    email: str = ""
    uri: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserIdentity":
        return cls(
            id=Username(_require(data, "id", "user")),
            display_name=data.get("display_name") or "",
            email=data.get("email") or "",
            uri=data.get("uri") or "",
        )


@dataclass(frozen=True)
class PlaylistOwner:
    id: Username
    href: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaylistOwner":
        return cls(id=Username(_require(data, "id", "playlist owner")), href=data.get("href") or "")


@dataclass(frozen=True)
class Playlist:
    id: PlaylistId
    name: str
    owner: Optional[PlaylistOwner] = None
    href: str = ""

    @property
    def owner_id(self) -> Optional[Username]:
        return self.owner.id if self.owner else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playlist":
        owner = data.get("owner") if isinstance(data, dict) else None
        return cls(
            id=PlaylistId(_require(data, "id", "playlist")),
            name=data.get("name") or "",
            owner=PlaylistOwner.from_dict(owner) if owner else None,
            href=data.get("href") or "",
        )


@dataclass(frozen=True)
class Album:
    id: str
    name: str
    album_type: str = ""
    href: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Album":
        data = _object(data, "album")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            album_type=data.get("album_type") or "",
            href=data.get("href") or "",
        )


@dataclass(frozen=True)
class Artist:
    id: str
    name: str
    href: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Artist":
        data = _object(data, "artist")
        return cls(id=data.get("id") or "", name=data.get("name") or "", href=data.get("href") or "")


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    album: Optional[Album] = None
    artists: List[Artist] = field(default_factory=list)
    href: str = ""

    @property
    def uri(self) -> str:
        return f"{TRACK_URI_SCHEME}:track:{self.id}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Track":
        track_id = _require(data, "id", "track")
        album = data.get("album")
        artists = data.get("artists") or []
        if not isinstance(artists, list):
            raise DecodeError(f"Track 'artists' is not a list: {artists!r}")
        return cls(
            id=track_id,
            name=data.get("name") or "",
            album=Album.from_dict(album) if album is not None else None,
            artists=[Artist.from_dict(a) for a in artists],
            href=data.get("href") or "",
        )


def playlist_track_from_item(item: Dict[str, Any]) -> Optional[Track]:
    """
    Track listings wrap each track one level down: {"track": {...}}.
    Removed tracks (null) and local files (is_local, no id) decode to None.
    """
    track = _object(item, "playlist item").get("track")
    if track is None:
        return None
    if isinstance(track, dict) and (track.get("is_local") or track.get("id") is None):
        return None
    return Track.from_dict(track)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing. `total` is the server's count across all pages."""

    items: List[T]
    total: int
    limit: int
    offset: int
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], decode_item: Callable[[Dict[str, Any]], Optional[T]]) -> "Page[T]":
        raw_items = _require(data, "items", "page")
        if not isinstance(raw_items, list):
            raise DecodeError("Page 'items' is not a list")
        try:
            total = int(_require(data, "total", "page"))
            limit = int(data.get("limit") or 0)
            offset = int(data.get("offset") or 0)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Bad paging fields: {e}") from e
        return cls(
            items=[decode_item(it) for it in raw_items],
            total=total,
            limit=limit,
            offset=offset,
            next=data.get("next"),
            previous=data.get("previous"),
        )


@dataclass(frozen=True)
class AddTracksResult:
    snapshot_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddTracksResult":
        return cls(snapshot_id=_require(data, "snapshot_id", "add-tracks response"))


@dataclass(frozen=True)
class DuplicationResult:
    source: Playlist
    destination: Optional[Playlist]
    snapshot_id: str
    track_count: int
