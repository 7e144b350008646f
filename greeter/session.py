"""Session cookie and login-name utilities for Greeter."""

from __future__ import annotations

import re
from http.cookies import CookieError, SimpleCookie

from greeter.config import (
    LOGOUT_COOKIE_MAX_AGE_SECONDS,
    LOGOUT_COOKIE_VALUE,
    NAME_ERROR_MESSAGE,
    NAME_MAX_WORD_LENGTH,
    NAME_MIN_WORD_LENGTH,
    SESSION_COOKIE_MAX_AGE_SECONDS,
    SESSION_COOKIE_NAME,
)

NAME_PATTERN = re.compile(
    rf"[A-Za-z]{{{NAME_MIN_WORD_LENGTH},{NAME_MAX_WORD_LENGTH}}}"
    rf"(?: [A-Za-z]{{0,{NAME_MAX_WORD_LENGTH}}})?"
)


def is_valid_name(name: str | None) -> bool:
    """Return True when a name is one or two words of ASCII letters."""
    return bool(NAME_PATTERN.fullmatch(name or ""))


def name_error(name: str | None) -> str | None:
    """Return a validation error for login name input, if any."""
    if not is_valid_name(name):
        return NAME_ERROR_MESSAGE
    return None


def identifier_from_cookie_header(raw: str | None) -> tuple[str, bool]:
    """Read the session identifier from a ``Cookie`` header.

    Args:
        raw: Raw ``Cookie`` header value, or ``None`` when absent.

    Returns:
        ``(identifier, True)`` when the session cookie is present, otherwise
        ``("", False)``. The identifier is passed through unvalidated.
    """
    if not raw:
        return "", False
    # One segment at a time so a malformed sibling cannot hide the session cookie.
    for segment in raw.split(";"):
        key, sep, _ = segment.partition("=")
        if not sep or key.strip() != SESSION_COOKIE_NAME:
            continue
        jar = SimpleCookie()
        try:
            jar.load(segment.strip())
        except CookieError:
            continue
        morsel = jar.get(SESSION_COOKIE_NAME)
        if morsel is not None:
            return morsel.value, True
    return "", False


def session_cookie_header(identifier: str, max_age: int) -> str:
    """Build a ``Set-Cookie`` header value for the session cookie."""
    parts = [
        f"{SESSION_COOKIE_NAME}={identifier}",
        f"Max-Age={max_age}",
        "Path=/",
    ]
    return "; ".join(parts)


def login_cookie_header(identifier: str) -> str:
    """Build the ``Set-Cookie`` header value issued after a login."""
    return session_cookie_header(identifier, SESSION_COOKIE_MAX_AGE_SECONDS)


def logout_cookie_header() -> str:
    """Build the ``Set-Cookie`` header value that expires the session."""
    return session_cookie_header(LOGOUT_COOKIE_VALUE, LOGOUT_COOKIE_MAX_AGE_SECONDS)
