"""Paths, environment lookups and logging setup."""

import logging
import os
from typing import Optional

APP_NAME = "pointy"
STORE_NAME = "config.json"
LOG_NAME = "pointy.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_dir() -> str:
    """Return ~/.config/pointy, honoring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return os.path.join(base, APP_NAME)


def store_path() -> str:
    """Return the ledger file path ($POINTY_FILE overrides the default)."""
    override = os.environ.get("POINTY_FILE")
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(config_dir(), STORE_NAME)


def log_path(store: Optional[str] = None) -> str:
    override = os.environ.get("POINTY_LOG_FILE")
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(os.path.dirname(store or store_path()), LOG_NAME)


def log_level() -> int:
    name = os.environ.get("POINTY_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(path: Optional[str] = None) -> logging.Logger:
    """Send package logs to a file only; the terminal belongs to the TUI.

    If the log file cannot be opened, logging is silenced instead.
    """
    root = logging.getLogger(APP_NAME)
    root.setLevel(log_level())
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    path = path or log_path()
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root
