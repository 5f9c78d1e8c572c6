# spotify_client.py
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar

import requests

from spotify_api import SpotifyApi
from spotify_errors import CreateError, DecodeError, EmptyResponseError, FetchError, WriteError
from spotify_models import (
    AddTracksResult,
    Page,
    Playlist,
    PlaylistId,
    Track,
    UserIdentity,
    Username,
    playlist_track_from_item,
)

LOG = logging.getLogger("spotify_client")

# Spotify's add-tracks endpoint accepts at most 100 URIs per request
MAX_TRACKS_PER_REQUEST = 100

T = TypeVar("T")


def _status_of(exc: requests.RequestException) -> Optional[int]:
    response = getattr(exc, "response", None)
    return response.status_code if response is not None else None


class SpotifyClient:
    """
    Object-style access to the user, playlist and track endpoints.

    Listings are fetched page by page and flattened into one list, in the
    order Spotify returns them. Writes go out in chunks of 100 tracks.
    """

    def __init__(self, api: SpotifyApi, page_size: Optional[int] = None):
        if page_size is None:
            page_size = api.config.page_size
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
        self.api = api
        self.page_size = page_size

    # ---------- reads ----------
    def _get(self, path: str, params=None) -> Any:
        try:
            return self.api.get(path, params=params)
        except requests.RequestException as e:
            LOG.error("GET %s failed: %s", path, e)
            raise FetchError(f"GET {path} failed: {e}", status_code=_status_of(e)) from e

    def _paginate(self, path: str, decode_item: Callable[[Dict[str, Any]], Optional[T]]) -> List[T]:
        """
        Fetch every page of a listing and return the concatenated items.

        Stops once the number of items consumed reaches the server-reported
        total. A page that fails to decode aborts the whole fetch.
        """
        limit = self.page_size
        offset = 0
        consumed = 0
        items: List[T] = []

        while True:
            data = self._get(path, params={"limit": limit, "offset": offset})
            page = Page.from_dict(data, decode_item)
            LOG.debug("%s offset=%s: %s items, total %s", path, offset, len(page.items), page.total)

            items.extend(it for it in page.items if it is not None)
            consumed += len(page.items)

            if consumed >= page.total:
                break
            if not page.items:
                LOG.warning(
                    "%s returned an empty page at offset %s before reaching total %s; stopping",
                    path, offset, page.total,
                )
                break
            offset += limit

        LOG.debug("Accumulated %s items from %s", len(items), path)
        return items

    def get_current_user(self) -> UserIdentity:
        return UserIdentity.from_dict(self._get("/me"))

    def get_user_playlists(self, username: Username) -> List[Playlist]:
        return self._paginate(f"/users/{username}/playlists", Playlist.from_dict)

    def get_playlist(self, owner: Username, playlist_id: PlaylistId) -> Playlist:
        return Playlist.from_dict(self._get(f"/users/{owner}/playlists/{playlist_id}"))

    def get_playlist_tracks(self, owner: Username, playlist_id: PlaylistId) -> List[Track]:
        return self._paginate(f"/users/{owner}/playlists/{playlist_id}/tracks", playlist_track_from_item)

    # ---------- writes ----------
    def create_playlist(self, owner: Username, name: str, public: bool = False,
                        description: Optional[str] = None) -> Playlist:
        body = {"name": name, "public": public}
        if description is not None:
            body["description"] = description

        path = f"/users/{owner}/playlists"
        try:
            playlist = Playlist.from_dict(self.api.post(path, json=body))
        except requests.RequestException as e:
            LOG.exception("Failed to create playlist %r", name)
            raise CreateError(f"Failed to create playlist {name!r}: {e}", status_code=_status_of(e)) from e
        except (EmptyResponseError, DecodeError) as e:
            raise CreateError(f"Unreadable response creating playlist {name!r}: {e}") from e

        LOG.info("Created playlist %s (%s) for %s", playlist.name, playlist.id, owner)
        return playlist

    @staticmethod
    def _chunked(seq: Sequence[Any], n: int) -> Iterator[Sequence[Any]]:
        for i in range(0, len(seq), n):
            yield seq[i:i + n]

    def add_tracks_to_playlist(self, owner: Username, playlist: Playlist,
                               tracks: Sequence[Track]) -> AddTracksResult:
        """
        Append tracks in chunks of 100 (Spotify limit).

        Returns the result of the last batch only. The first failing batch
        raises WriteError; snapshot ids of earlier batches are not kept.
        """
        path = f"/users/{owner}/playlists/{playlist.id}/tracks"
        result = AddTracksResult()

        for batch_index, chunk in enumerate(self._chunked(tracks, MAX_TRACKS_PER_REQUEST)):
            uris = []
            for t in chunk:
                LOG.debug("Adding track to playlist: %s-%s", t.id, t.name)
                uris.append(t.uri)

            try:
                result = AddTracksResult.from_dict(self.api.post(path, json={"uris": uris}))
            except requests.RequestException as e:
                LOG.exception("Failed to add chunk %d to playlist %s", batch_index, playlist.id)
                raise WriteError(
                    f"Failed to add batch {batch_index} to playlist {playlist.id}: {e}",
                    batch_index=batch_index,
                    status_code=_status_of(e),
                ) from e
            except (EmptyResponseError, DecodeError) as e:
                raise WriteError(
                    f"Unreadable response for batch {batch_index} of playlist {playlist.id}: {e}",
                    batch_index=batch_index,
                ) from e

            LOG.info("Added %d tracks to %s (snapshot %s)", len(uris), playlist.id, result.snapshot_id)

        return result
