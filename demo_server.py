"""
Demo web server for the Spotify client.

Flow: /login/ -> Spotify consent page -> /callback/ -> /listplaylists/...
from where each playlist can be listed (/tracks/...) or copied (/duplicate/...).

Session state (username, access token, playlist id) travels in the URL
path. That keeps the demo stateless but exposes the token in browser
history and server logs; do not deploy this as-is.
"""

import logging

from flask import Flask, Response, redirect, request
from markupsafe import escape

from playlist_duplicator import PlaylistDuplicator
from spotify_api import SpotifyApi
from spotify_auth import exchange_code, get_authorize_url
from spotify_client import SpotifyClient
from spotify_config import ClientConfig
from spotify_errors import DuplicationError, SpotifyError
from spotify_models import AccessToken, PlaylistId, Username

logger = logging.getLogger("demo_server")


def _html(parts) -> Response:
    return Response("".join(parts), mimetype="text/html")


def _playlist_lines(source, destination):
    out = []
    if source is not None:
        out.append(f"<p>Original: {escape(source.id)}-{escape(source.name)} </p><br/>\n")
    if destination is not None:
        out.append(f"<p>Copy: {escape(destination.id)}-{escape(destination.name)} </p><br/>\n")
    return out


def create_app(config: ClientConfig) -> Flask:
    app = Flask(__name__)
    app.config["SPOTIFY"] = config

    def client_for(access_token: str) -> SpotifyClient:
        return SpotifyClient(SpotifyApi(AccessToken(access_token), config))

    @app.route("/login/")
    def login():
        return redirect(get_authorize_url(config), code=302)

    @app.route("/callback/")
    def callback():
        code = request.args.get("code")
        if not code:
            logger.warning("Callback without code: %s", request.args.get("error", "no error given"))
            return Response("Missing authorization code", status=400, mimetype="text/plain")

        try:
            token = exchange_code(code, config)
            user = client_for(token.access_token).get_current_user()
        except SpotifyError as e:
            logger.error("Login failed: %s", e)
            return _html([])

        logger.info("Username: %s", user.id)
        return redirect(f"/listplaylists/{user.id}/{token.access_token}", code=302)

    @app.route("/listplaylists/<username>/<token>")
    def list_playlists(username, token):
        try:
            playlists = client_for(token).get_user_playlists(Username(username))
        except SpotifyError as e:
            logger.error("Listing playlists for %s failed: %s", username, e)
            return _html([])

        out = []
        for p in playlists:
            owner = escape(p.owner_id or username)
            logger.debug(" [%s]:[%s]", p.id, p.name)
            out.append(
                f'<a href="/tracks/{owner}/{escape(token)}/{escape(p.id)}">List tracks - {escape(p.name)}</a> - \n'
            )
            out.append(
                f'<a href="/duplicate/{owner}/{escape(username)}/{escape(token)}/{escape(p.id)}">'
                f"Duplicate - {escape(p.name)}</a><br/>\n"
            )
        return _html(out)

    @app.route("/tracks/<username>/<token>/<playlist_id>")
    def show_tracks(username, token, playlist_id):
        try:
            tracks = client_for(token).get_playlist_tracks(Username(username), PlaylistId(playlist_id))
        except SpotifyError as e:
            logger.error("Listing tracks of %s failed: %s", playlist_id, e)
            return _html([])

        out = []
        for t in tracks:
            album = t.album.name if t.album else ""
            out.append(f"<p>{escape(t.id)} - {escape(t.name)} - {escape(album)} </p><br/>\n")
            for artist in t.artists:
                out.append(f"<p>{escape(artist.name)}</p><br/>\n")
        return _html(out)

    @app.route("/duplicate/<owner>/<creator>/<token>/<playlist_id>")
    def duplicate(owner, creator, token, playlist_id):
        duplicator = PlaylistDuplicator(client_for(token))
        try:
            result = duplicator.duplicate(Username(owner), Username(creator), PlaylistId(playlist_id))
        except DuplicationError as e:
            logger.error("Error duplicating playlist %s: %s", playlist_id, e)
            # render what was done before the failing step
            return _html(_playlist_lines(e.source, e.destination))

        out = _playlist_lines(result.source, result.destination)
        out.append(f"<p>Snapshot ID: {escape(result.snapshot_id)} </p><br/>\n")
        return _html(out)

    return app
