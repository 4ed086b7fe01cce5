import pytest

from headergrade.core.errors import InvalidURLError
from headergrade.core.validators import is_valid_url, normalize_url, sanitize_text_field
from headergrade.core.validators.sanitizer import EMPTY_URL_MESSAGE, INVALID_URL_MESSAGE


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("example.com", "https://example.com"),
        ("  example.com  ", "https://example.com"),
        ("http://example.com", "https://example.com"),
        ("HTTPS://Example.com/", "https://Example.com"),
        ("https://example.com/path///", "https://example.com/path"),
        ("example.com:8443/app", "https://example.com:8443/app"),
        ("localhost:3000", "https://localhost:3000"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_url_empty(raw):
    with pytest.raises(InvalidURLError, match=EMPTY_URL_MESSAGE):
        normalize_url(raw)


@pytest.mark.parametrize(
    "raw", ["not a url", "example", "https://", "example.com:99999", "exa mple.com"]
)
def test_normalize_url_invalid(raw):
    with pytest.raises(InvalidURLError) as exc_info:
        normalize_url(raw)
    assert str(exc_info.value) == INVALID_URL_MESSAGE


def test_invalid_url_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_url("")


@pytest.mark.parametrize(
    "url, valid",
    [
        ("https://example.com", True),
        ("https://sub.example.co.uk/a?b=c", True),
        ("https://localhost", True),
        ("https://intranet", False),
        ("https://example.com:abc", False),
    ],
)
def test_is_valid_url(url, valid):
    assert is_valid_url(url) is valid


def test_sanitize_text_field():
    assert sanitize_text_field(None) == ""
    assert sanitize_text_field("  <i>Label</i> ") == "&lt;i&gt;Label&lt;/i&gt;"
    assert sanitize_text_field("x" * 120, max_length=10) == "x" * 10
