import pytest
from bs4 import BeautifulSoup

import greeter.pages as pages
from greeter.models import (
    ErrorViewData,
    GreetingViewData,
    LoginViewData,
    LogoutViewData,
    TimeViewData,
)


def _soup(body: bytes) -> BeautifulSoup:
    return BeautifulSoup(body.decode("utf-8"), "html.parser")


def test_render_greeting_escapes_name():
    soup = _soup(pages.render("greeting", GreetingViewData(name="<b>Jane</b>")))
    assert soup.select_one("h1.greeting").get_text() == "Hello, <b>Jane</b>!"
    assert soup.find("b") is None


def test_render_login_without_error():
    soup = _soup(pages.render("login", LoginViewData()))
    form = soup.select_one("form.login-form")
    assert form["method"] == "post"
    assert form["action"] == "/login"
    assert soup.select_one('input[name="name"]')["value"] == ""
    assert soup.select_one(".flash") is None


def test_render_login_with_error_keeps_value():
    soup = _soup(pages.render("login", LoginViewData(error="Bad name", name_value="A1")))
    assert soup.select_one(".flash.error").get_text() == "Bad name"
    assert soup.select_one('input[name="name"]')["value"] == "A1"


def test_render_logout():
    html = pages.render("logout", LogoutViewData()).decode("utf-8")
    assert "Logged out" in html
    assert 'href="/login"' in html


def test_render_time_with_and_without_name():
    named = _soup(
        pages.render(
            "time",
            TimeViewData(local_time="3:04:05 PM", utc_time="15:04:05 UTC", name="Jane"),
        )
    )
    assert named.h1.get_text() == "Hi, Jane."
    assert named.select_one(".local-time").get_text() == "3:04:05 PM"
    assert named.select_one(".utc-time").get_text() == "15:04:05 UTC"

    anonymous = _soup(
        pages.render("time", TimeViewData(local_time="3:04:05 PM", utc_time="15:04:05 UTC"))
    )
    assert anonymous.h1.get_text() == f"Hi, {pages.ANONYMOUS_NAME}."


def test_render_http404_and_http500():
    assert "404 Not Found" in pages.render("http404", ErrorViewData(status=404)).decode("utf-8")
    html = pages.render_http500(ErrorViewData(status=500)).decode("utf-8")
    assert "500 Internal Server Error" in html


def test_render_unknown_view_raises():
    with pytest.raises(pages.ViewNotFoundError) as excinfo:
        pages.render("nope", LogoutViewData())
    assert excinfo.value.view_name == "nope"
    assert isinstance(excinfo.value, LookupError)


def test_render_uses_supplied_view_table():
    views = {"logout": lambda data: b"custom"}
    assert pages.render("logout", LogoutViewData(), views) == b"custom"
    with pytest.raises(pages.ViewNotFoundError):
        pages.render("login", LoginViewData(), views)


def test_missing_views():
    assert pages.missing_views(pages.VIEWS) == []
    partial = {name: fn for name, fn in pages.VIEWS.items() if name != "time"}
    assert pages.missing_views(partial) == ["time"]
