"""Small helpers shared by the engine and the CLI."""

import datetime as dt
import os
import sys

from .errors import ConfigurationError


def utcnow_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def log(msg: str) -> None:
    """Print a diagnostic line to stderr. Stdout is reserved for matching keys."""
    print(f"[{utcnow_iso()}] {msg}", file=sys.stderr, flush=True)


def require_env(name: str, description: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConfigurationError(f"Missing environment variable {name} ({description}).")
    return value
