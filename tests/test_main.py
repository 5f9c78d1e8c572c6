"""Tests for the main entry point."""

from unittest.mock import patch

import pytest

import main

ENV_NAMES = ["SPOTIFY_CLIENT_ID", "client_id", "SPOTIFY_CLIENT_SECRET", "client_secret", "SPOTIFY_PAGE_SIZE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestMain:
    def test_missing_config_file_exits(self, capsys):
        """Should print an [ERROR] line and exit 1 when the config file is missing."""
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--config", "missing.json"])

        assert exc_info.value.code == 1
        assert "[ERROR]" in capsys.readouterr().out

    def test_missing_credentials_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])

        assert exc_info.value.code == 1
        assert "client_id" in capsys.readouterr().out

    def test_runs_server_with_arguments(self, monkeypatch):
        monkeypatch.setenv("SPOTIFY_CLIENT_ID", "a")
        monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "b")

        with patch("flask.Flask.run") as run:
            main.main(["--host", "0.0.0.0", "--port", "9000"])

        run.assert_called_once_with(host="0.0.0.0", port=9000, debug=False)
