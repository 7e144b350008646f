"""HTML rendering helpers for Greeter."""

from __future__ import annotations

from html import escape
from typing import Callable

from greeter.models import (
    ErrorViewData,
    GreetingViewData,
    LoginViewData,
    LogoutViewData,
    TimeViewData,
    ViewData,
)

ANONYMOUS_NAME = "stranger"


class ViewNotFoundError(LookupError):
    """Raised when a view name has no registered renderer."""

    def __init__(self, view_name: str) -> None:
        super().__init__(f"view not found: {view_name}")
        self.view_name = view_name


def _layout(title: str, content: str) -> bytes:
    """Wrap page content in the shared document shell.

    Args:
        title: Already escaped page title.
        content: Already escaped HTML body fragment.

    Returns:
        UTF-8 encoded HTML document bytes.
    """
    page_html = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title} | Greeter</title>
  </head>
  <body>
    <header class="topbar">
      <nav>
        <a href="/">Home</a>
        <a href="/time">Time</a>
        <a href="/logout">Log out</a>
      </nav>
    </header>
    <main>
{content}
    </main>
  </body>
</html>"""
    return page_html.encode("utf-8")


def render_greeting(data: GreetingViewData) -> bytes:
    """Render the personalized index page."""
    content = f"""      <h1 class="greeting">Hello, {escape(data.name)}!</h1>
      <p>Welcome back. <a href="/time">What time is it?</a></p>"""
    return _layout("Hello", content)


def render_login(data: LoginViewData) -> bytes:
    """Render the login form, with an optional validation error."""
    error_html = (
        f'<div class="flash error" role="alert">{escape(data.error)}</div>'
        if data.error
        else ""
    )
    content = f"""      <h1>Log in</h1>
      {error_html}
      <form class="login-form" method="post" action="/login">
        <label for="login-name">Your name</label>
        <input
          id="login-name"
          name="name"
          type="text"
          autocomplete="name"
          placeholder="Jane Doe"
          value="{escape(data.name_value)}"
          required
        />
        <button type="submit">Continue</button>
      </form>"""
    return _layout("Log in", content)


def render_logout(data: LogoutViewData) -> bytes:
    """Render the logged-out confirmation page."""
    content = """      <h1>Logged out</h1>
      <p>You have been logged out. <a href="/login">Log in again</a></p>"""
    return _layout("Logged out", content)


def render_time(data: TimeViewData) -> bytes:
    """Render the current time, greeting the visitor when known."""
    display_name = data.name or ANONYMOUS_NAME
    content = f"""      <h1>Hi, {escape(display_name)}.</h1>
      <p class="time">The time is now <span class="local-time">{escape(data.local_time)}</span>
        (<span class="utc-time">{escape(data.utc_time)}</span>).</p>"""
    return _layout("Time", content)


def render_http404(data: ErrorViewData) -> bytes:
    """Render the not-found page."""
    message = data.message or "These are not the pages you are looking for."
    content = f"""      <h1>404 Not Found</h1>
      <p>{escape(message)}</p>"""
    return _layout("Not Found", content)


def render_http500(data: ErrorViewData) -> bytes:
    """Render the internal error page."""
    message = data.message or "Something went wrong rendering this page."
    content = f"""      <h1>{data.status} Internal Server Error</h1>
      <p>{escape(message)}</p>"""
    return _layout("Error", content)


VIEWS: dict[str, Callable[..., bytes]] = {
    "greeting": render_greeting,
    "login": render_login,
    "logout": render_logout,
    "time": render_time,
    "http404": render_http404,
}
REQUIRED_VIEWS = tuple(VIEWS)


def render(
    view_name: str,
    data: ViewData,
    views: dict[str, Callable[..., bytes]] | None = None,
) -> bytes:
    """Render a named view with its data.

    Args:
        view_name: Key into the view table.
        data: View-specific data record.
        views: Optional view table; defaults to ``VIEWS``.

    Returns:
        UTF-8 encoded HTML document bytes.

    Raises:
        ViewNotFoundError: If ``view_name`` is not in the view table.
    """
    table = VIEWS if views is None else views
    renderer = table.get(view_name)
    if renderer is None:
        raise ViewNotFoundError(view_name)
    return renderer(data)


def missing_views(
    views: dict[str, Callable[..., bytes]],
    required: tuple[str, ...] = REQUIRED_VIEWS,
) -> list[str]:
    """Return required view names absent from a view table."""
    return [name for name in required if name not in views]
