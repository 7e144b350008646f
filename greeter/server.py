"""Server-rendered Greeter application.

This module provides a minimal threaded HTTP server that identifies visitors
by an opaque ``uuid`` cookie, remembers their display name in an in-process
registry, and renders a handful of personalized HTML pages.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable
from urllib.parse import parse_qs, urlparse

from dotenv import load_dotenv

from greeter.config import (
    LOCAL_TIME_FORMAT,
    LOG_FORMAT,
    UTC_TIME_FORMAT,
    VERSION_NUMBER,
    get_host,
    get_log_level,
    get_port,
)
from greeter.models import (
    ErrorViewData,
    GreetingViewData,
    LoginViewData,
    LogoutViewData,
    TimeViewData,
    ViewData,
)
from greeter.pages import VIEWS, ViewNotFoundError, missing_views, render, render_http500
from greeter.registry import PersonRegistry
from greeter.session import (
    identifier_from_cookie_header,
    login_cookie_header,
    logout_cookie_header,
    name_error,
)

logger = logging.getLogger(__name__)

INDEX_PATHS = ("/", "/index.html")


def _current_times(now: datetime | None = None) -> tuple[str, str]:
    """Return the local and UTC clock strings shown on the time page.

    Args:
        now: Optional aware timestamp; defaults to the current local time.

    Returns:
        Tuple of local time (``3:04:05 PM``) and UTC time (``15:04:05 UTC``).
    """
    current = now or datetime.now().astimezone()
    local_time = current.strftime(LOCAL_TIME_FORMAT).lstrip("0")
    utc_time = current.astimezone(timezone.utc).strftime(UTC_TIME_FORMAT)
    return local_time, utc_time


def _safe_int(value: str | None, default: int = 0) -> int:
    """Parse a non-negative integer header value, falling back on bad input."""
    try:
        return max(0, int(value or default))
    except (TypeError, ValueError):
        return default


class GreeterServer(ThreadingHTTPServer):
    """Threaded HTTP server sharing one registry across request handlers."""

    daemon_threads = True

    def __init__(
        self,
        server_address: tuple[str, int],
        registry: PersonRegistry,
        views: dict[str, Callable[..., bytes]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.registry = registry
        self.views = dict(VIEWS) if views is None else views
        self.clock = clock
        super().__init__(server_address, GreeterHandler)


class GreeterHandler(BaseHTTPRequestHandler):
    """HTTP handler for Greeter server-rendered pages."""

    server: GreeterServer

    def _send_html(
        self,
        status: int,
        body: bytes,
        set_cookie: str | None = None,
    ) -> None:
        """Write an HTML response, optionally mutating the session cookie."""
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Cache-Control", "no-store, no-cache, must-revalidate, max-age=0")
        self.send_header("Pragma", "no-cache")
        self.send_header("Expires", "0")
        if set_cookie:
            self.send_header("Set-Cookie", set_cookie)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _redirect(self, location: str, set_cookie: str | None = None) -> None:
        """Write a bodiless 302 redirect."""
        self.send_response(302)
        if set_cookie:
            self.send_header("Set-Cookie", set_cookie)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_view(
        self,
        status: int,
        view_name: str,
        data: ViewData,
        set_cookie: str | None = None,
    ) -> None:
        """Render a view and write it, or answer 500 when rendering fails.

        Args:
            status: HTTP status code for a successful render.
            view_name: Name of the view to render.
            data: View-specific data record.
            set_cookie: Optional ``Set-Cookie`` value, only sent on success.

        Returns:
            None.
        """
        try:
            body = render(view_name, data, self.server.views)
        except ViewNotFoundError:
            logger.exception(f"Failed to render view {view_name!r} for {self.path}")
            body = render_http500(ErrorViewData(status=500))
            return self._send_html(500, body)
        return self._send_html(status, body, set_cookie=set_cookie)

    def _session_name(self) -> str:
        """Resolve the visitor's display name from the session cookie."""
        identifier, found = identifier_from_cookie_header(self.headers.get("Cookie"))
        if not found:
            return ""
        return self.server.registry.name_of(identifier)

    def _read_form(self) -> dict[str, list[str]]:
        """Read and parse a url-encoded request body."""
        length = _safe_int(self.headers.get("Content-Length"))
        body = self.rfile.read(length).decode("utf-8", errors="replace") if length else ""
        return parse_qs(body, keep_blank_values=True)

    def _handle_index(self) -> None:
        name = self._session_name()
        if not name:
            return self._redirect("/login")
        return self._send_view(200, "greeting", GreetingViewData(name=name))

    def _handle_login_form(self) -> None:
        return self._send_view(200, "login", LoginViewData())

    def _handle_login_submit(self) -> None:
        """Validate the submitted name and start a new session."""
        form = self._read_form()
        name = form.get("name", [""])[0]
        error = name_error(name)
        if error:
            logger.info(f"Rejected login name from {self.client_address[0]}")
            return self._send_view(400, "login", LoginViewData(error=error, name_value=name))

        person = self.server.registry.create(name)
        logger.info(f"Created session {person.id}")
        return self._redirect("/", set_cookie=login_cookie_header(person.id))

    def _handle_logout(self) -> None:
        return self._send_view(
            200,
            "logout",
            LogoutViewData(),
            set_cookie=logout_cookie_header(),
        )

    def _handle_time(self) -> None:
        clock = self.server.clock
        local_time, utc_time = _current_times(clock() if clock else None)
        data = TimeViewData(
            local_time=local_time,
            utc_time=utc_time,
            name=self._session_name(),
        )
        return self._send_view(200, "time", data)

    def _handle_not_found(self) -> None:
        return self._send_view(404, "http404", ErrorViewData(status=404))

    def do_GET(self):
        """Handle GET requests for pages.

        Returns:
            None.
        """
        path = urlparse(self.path).path
        if path in INDEX_PATHS:
            return self._handle_index()
        if path == "/login":
            return self._handle_login_form()
        if path == "/logout":
            return self._handle_logout()
        if path == "/time":
            return self._handle_time()
        return self._handle_not_found()

    def do_POST(self):
        """Handle POST requests for login and logout.

        Returns:
            None.
        """
        path = urlparse(self.path).path
        if path == "/login":
            return self._handle_login_submit()
        if path == "/logout":
            return self._handle_logout()
        return self._handle_not_found()

    def _handle_other_method(self) -> None:
        path = urlparse(self.path).path
        if path == "/logout":
            return self._handle_logout()
        return self._handle_not_found()

    do_PUT = _handle_other_method
    do_PATCH = _handle_other_method
    do_DELETE = _handle_other_method
    do_HEAD = _handle_other_method
    do_OPTIONS = _handle_other_method

    def log_message(self, fmt, *args):
        """Route default HTTP access logging to the module logger.

        Args:
            fmt: Log format string.
            *args: Format arguments.

        Returns:
            None.
        """
        logger.debug(f"{self.address_string()} {fmt % args}")


def make_server(
    host: str,
    port: int,
    registry: PersonRegistry | None = None,
    views: dict[str, Callable[..., bytes]] | None = None,
) -> GreeterServer:
    """Bind a Greeter server.

    Args:
        host: Interface to bind.
        port: TCP port to bind; ``0`` picks a free port.
        registry: Shared registry; a fresh empty one when omitted.
        views: Optional view table; defaults to the built-in pages.

    Returns:
        The bound, not yet serving, server.

    Raises:
        OSError: If the address cannot be bound.
    """
    if registry is None:
        registry = PersonRegistry()
    return GreeterServer((host, port), registry, views=views)


def _parse_port(parser: argparse.ArgumentParser, raw: str) -> int:
    """Convert the ``--port`` string to a port number or exit via argparse."""
    text = (raw or "").strip()
    if not text.isdigit() or not 0 < int(text) < 65536:
        parser.error(f"invalid port: {raw!r}")
    return int(text)


def main(argv: list[str] | None = None) -> None:
    """Run the Greeter HTTP server from CLI arguments.

    Args:
        argv: Optional argument list; defaults to ``sys.argv[1:]``.

    Returns:
        None.
    """
    load_dotenv()
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
    parser = argparse.ArgumentParser(description="Serve Greeter web app")
    parser.add_argument("--host", default=get_host())
    parser.add_argument(
        "--port",
        default=get_port(),
        help="Web server binds to this port. Default is 8080.",
    )
    parser.add_argument(
        "-V",
        dest="version",
        action="store_true",
        help="Prints version number of program.",
    )
    args = parser.parse_args(argv)

    if args.version:
        print(f"Version number: {VERSION_NUMBER}")
        raise SystemExit(1)

    port = _parse_port(parser, args.port)
    missing = missing_views(VIEWS)
    if missing:
        logger.error(f"Missing views: {', '.join(missing)}")
        raise SystemExit(1)

    try:
        server = make_server(args.host, port, PersonRegistry())
    except OSError as exc:
        logger.error(f"Could not bind {args.host}:{port}: {exc}")
        raise SystemExit(1) from exc

    logger.info(f"Greeter running at http://{args.host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
