"""Configuration and simple helper utilities for Greeter."""

from __future__ import annotations

import os

VERSION_NUMBER = "v1.0.1"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = "8080"
SESSION_COOKIE_NAME = "uuid"
SESSION_COOKIE_MAX_AGE_SECONDS = 60 * 60 * 24
LOGOUT_COOKIE_MAX_AGE_SECONDS = -1
LOGOUT_COOKIE_VALUE = "deleted"
NAME_MIN_WORD_LENGTH = 2
NAME_MAX_WORD_LENGTH = 35
NAME_ERROR_MESSAGE = "Name must be one or two words of letters (2-35 each)."
LOCAL_TIME_FORMAT = "%I:%M:%S %p"
UTC_TIME_FORMAT = "%H:%M:%S UTC"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_host() -> str:
    """Return the bind host from env, defaulting to localhost."""
    return (os.environ.get("GREETER_HOST") or "").strip() or DEFAULT_HOST


def get_port() -> str:
    """Return the bind port string from env, defaulting to 8080."""
    return (os.environ.get("GREETER_PORT") or "").strip() or DEFAULT_PORT


def get_log_level() -> str:
    """Return the configured log level name."""
    return (os.environ.get("LOG_LEVEL") or "INFO").strip().upper() or "INFO"
