"""
Main entry point: loads credentials and runs the demo server.

    SPOTIFY_CLIENT_ID=... SPOTIFY_CLIENT_SECRET=... spotify-duplicator --port 8080
"""

import argparse
import sys

from demo_server import create_app
from spotify_config import load_config
from utils.logging_utils import log, mask, setup_logging


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spotify playlist duplication demo server")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--config", default=None, help="Path to a JSON config file (default: ./config.json)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    args = parse_arguments(argv)
    setup_logging(args.debug)

    try:
        config = load_config(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        print("Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET (or client_id / client_secret).")
        sys.exit(1)

    log(f"Client ID: {mask(config.client_id)}, redirect URI: {config.redirect_uri}")
    log(f"Open http://{args.host}:{args.port}/login/ to start")

    app = create_app(config)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
