"""Logging setup for the server process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Send log records to stderr.

    stdout is reserved for the MCP stdio transport, so the root logger gets a
    single stderr handler. Calling this again only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_taskpad", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._taskpad = True  # type: ignore[attr-defined]
    root.addHandler(handler)
