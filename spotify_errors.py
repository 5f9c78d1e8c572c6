# spotify_errors.py
"""
Exception types raised by the Spotify client and the duplication workflow.
Every remote-call failure is surfaced as one of these; nothing is retried.
"""

from typing import Optional


class SpotifyError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(SpotifyError):
    """Authorization code could not be exchanged for an access token."""


class EmptyResponseError(SpotifyError):
    """Spotify answered with an empty body where JSON was expected."""


class DecodeError(SpotifyError):
    """Response body was not valid JSON or lacked a required field."""


class FetchError(SpotifyError):
    """Transport failure while reading a resource."""


class CreateError(SpotifyError):
    """Playlist creation failed."""


class WriteError(SpotifyError):
    """A batch of tracks could not be appended to a playlist."""

    def __init__(self, message: str, batch_index: int, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)
        self.batch_index = batch_index


class DuplicationError(SpotifyError):
    """
    The duplication workflow stopped at `step`.
    The underlying error is available as __cause__. `source` and
    `destination` hold whatever playlists were obtained before the failure.
    """

    def __init__(self, step, reason: str, source=None, destination=None):
        super().__init__(f"Duplication failed during {step.value}: {reason}")
        self.step = step
        self.reason = reason
        self.source = source
        self.destination = destination
