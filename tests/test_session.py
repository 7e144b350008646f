import pytest

from greeter.config import NAME_ERROR_MESSAGE
from greeter.session import (
    identifier_from_cookie_header,
    is_valid_name,
    login_cookie_header,
    logout_cookie_header,
    name_error,
    session_cookie_header,
)


@pytest.mark.parametrize(
    "name",
    ["Jo", "Jane Doe", "Jane", "a" * 35, f"{'a' * 35} {'b' * 35}", "Jane "],
)
def test_is_valid_name_accepts_grammar(name):
    assert is_valid_name(name) is True
    assert name_error(name) is None


@pytest.mark.parametrize(
    "name",
    [
        "",
        "a",
        "A1",
        "123",
        "John  Doe",
        " John",
        "a" * 36,
        f"Jane {'b' * 36}",
        "Jane Doe Smith",
        "Zoë",
        "Jane-Doe",
        "Jane\n",
        None,
    ],
)
def test_is_valid_name_rejects_everything_else(name):
    assert is_valid_name(name) is False
    assert name_error(name) == NAME_ERROR_MESSAGE


def test_identifier_from_cookie_header_missing():
    assert identifier_from_cookie_header(None) == ("", False)
    assert identifier_from_cookie_header("") == ("", False)
    assert identifier_from_cookie_header("theme=dark") == ("", False)


def test_identifier_from_cookie_header_passes_value_through():
    header = "theme=dark; uuid=not-even-a-uuid; other=1"
    assert identifier_from_cookie_header(header) == ("not-even-a-uuid", True)


def test_identifier_from_cookie_header_reads_uuid_value():
    value = "0f8fad5b-d9cb-469f-a165-70867728950e"
    assert identifier_from_cookie_header(f"uuid={value}") == (value, True)


def test_session_cookie_headers():
    assert session_cookie_header("abc", 10) == "uuid=abc; Max-Age=10; Path=/"
    assert login_cookie_header("abc") == "uuid=abc; Max-Age=86400; Path=/"
    assert logout_cookie_header() == "uuid=deleted; Max-Age=-1; Path=/"


def test_identifier_from_cookie_header_skips_malformed_siblings():
    assert identifier_from_cookie_header("a=b c; uuid=abc") == ("abc", True)
    assert identifier_from_cookie_header('theme={"a":1}; uuid=abc') == ("abc", True)
    assert identifier_from_cookie_header("uuidx=1; xuuid=2") == ("", False)
