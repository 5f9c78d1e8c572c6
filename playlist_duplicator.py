# playlist_duplicator.py
from enum import Enum

from spotify_client import SpotifyClient
from spotify_errors import DuplicationError, SpotifyError
from spotify_models import AddTracksResult, DuplicationResult, PlaylistId, Username
from utils.logging_utils import log, warn

# NOTE:
# Duplication is not idempotent. Running it twice against the same source
# creates two independent copies. A failure part-way through leaves the
# destination playlist (and any batches already written) in place.

COPY_PREFIX = "Copy of "


class DuplicationStep(Enum):
    FETCH_SOURCE_METADATA = "fetch-source-metadata"
    FETCH_SOURCE_TRACKS = "fetch-source-tracks"
    CREATE_DESTINATION = "create-destination"
    WRITE_TRACKS = "write-tracks"
    DONE = "done"


class PlaylistDuplicator:
    def __init__(self, spotify_client: SpotifyClient, dry_run: bool = False, name_prefix: str = COPY_PREFIX):
        self.spotify: SpotifyClient = spotify_client
        self.dry_run = dry_run
        self.name_prefix = name_prefix
        self.step = None

    def _enter(self, step: DuplicationStep):
        self.step = step
        log(f"[{step.value}]")

    def duplicate(self, owner: Username, creator: Username, playlist_id: PlaylistId,
                  public: bool = False) -> DuplicationResult:
        """
        Copy playlist `playlist_id` owned by `owner` into a new playlist owned by `creator`.

        Raises DuplicationError naming the step that failed; the underlying
        SpotifyError is chained as __cause__.
        """
        source = destination = None
        try:
            self._enter(DuplicationStep.FETCH_SOURCE_METADATA)
            source = self.spotify.get_playlist(owner, playlist_id)
            log(f"Original: {source.id}-{source.name}")

            self._enter(DuplicationStep.FETCH_SOURCE_TRACKS)
            tracks = self.spotify.get_playlist_tracks(owner, playlist_id)
            log(f"Fetched {len(tracks)} tracks from {source.name}")

            name = f"{self.name_prefix}{source.name}"
            if self.dry_run:
                log(f"[DRY-RUN] Would create playlist '{name}' for {creator} with {len(tracks)} tracks")
                self.step = DuplicationStep.DONE
                return DuplicationResult(source=source, destination=None, snapshot_id="", track_count=len(tracks))

            self._enter(DuplicationStep.CREATE_DESTINATION)
            destination = self.spotify.create_playlist(creator, name, public=public)
            log(f"Copy: {destination.id}-{destination.name}")

            self._enter(DuplicationStep.WRITE_TRACKS)
            if not tracks:
                warn(f"Source playlist {source.id} has no tracks; copy left empty")
                result = AddTracksResult()
            else:
                result = self.spotify.add_tracks_to_playlist(creator, destination, tracks)

        except SpotifyError as e:
            warn(f"Duplication of {playlist_id} failed during {self.step.value}: {e}")
            raise DuplicationError(self.step, str(e), source=source, destination=destination) from e

        self.step = DuplicationStep.DONE
        log(f"Snapshot ID: {result.snapshot_id}")
        return DuplicationResult(
            source=source,
            destination=destination,
            snapshot_id=result.snapshot_id,
            track_count=len(tracks),
        )
