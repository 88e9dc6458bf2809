"""Logging setup shared by every module."""
import logging
import os
import sys

ROOT_LOGGER_NAME = "svgtidy"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure_root() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get("SVGTIDY_LOG_LEVEL", "INFO").upper())
        root.propagate = False
        _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package root, configuring the root once."""
    root = _configure_root()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def set_level(level) -> None:
    """Change the package log level, e.g. from the `logging.level` config key."""
    _configure_root().setLevel(level.upper() if isinstance(level, str) else level)
