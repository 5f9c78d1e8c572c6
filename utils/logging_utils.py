import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_log = logging.getLogger("playlist_duplicator")


def setup_logging(debug: bool = False):
    """Configure the root logger once for the CLI / demo server."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)


def log(*args):
    _log.info(" ".join(str(a) for a in args))


def warn(*args):
    _log.warning(" ".join(str(a) for a in args))


def mask(secret: str, keep: int = 4) -> str:
    """Shorten a token or secret for log output."""
    if not secret:
        return ""
    if len(secret) <= keep:
        return "*" * len(secret)
    return secret[:keep] + "..."
