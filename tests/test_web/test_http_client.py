import asyncio
from unittest.mock import MagicMock, patch

import aiohttp
import pytest

from headergrade.core.errors import FetchError
from headergrade.core.web.http_client import USER_AGENT, collect_headers, fetch_headers


class AsyncContextManagerMock:
    def __init__(self, return_value):
        self.return_value = return_value

    async def __aenter__(self):
        return self.return_value

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


class RaisingContextManager:
    def __init__(self, exc):
        self.exc = exc

    async def __aenter__(self):
        raise self.exc

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


def _response(pairs, status=200):
    response = MagicMock()
    response.status = status
    response.headers = MagicMock()
    response.headers.items.return_value = pairs
    return response


def _session(request):
    session = MagicMock()
    session.request = request
    return session


def test_collect_headers_joins_repeats():
    raw = MagicMock()
    raw.items.return_value = [
        ("Set-Cookie", "a=1"),
        ("Server", "nginx"),
        ("set-cookie", "b=2"),
    ]

    assert collect_headers(raw) == {"set-cookie": "a=1, b=2", "server": "nginx"}


@pytest.mark.asyncio
async def test_fetch_headers_success():
    calls = []
    response = _response([("Content-Type", "text/html"), ("X-Frame-Options", "DENY")])

    def request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        return AsyncContextManagerMock(response)

    with patch(
        "aiohttp.ClientSession", return_value=AsyncContextManagerMock(_session(request))
    ):
        headers = await fetch_headers("https://example.com", 10)

    assert headers == {"content-type": "text/html", "x-frame-options": "DENY"}
    method, url, kwargs = calls[0]
    assert (method, url) == ("HEAD", "https://example.com")
    assert kwargs["allow_redirects"] is True
    assert kwargs["ssl"] is True
    assert kwargs["headers"]["User-Agent"] == USER_AGENT


@pytest.mark.asyncio
async def test_fetch_headers_custom_method_and_agent():
    calls = []

    def request(method, url, **kwargs):
        calls.append((method, kwargs))
        return AsyncContextManagerMock(_response([]))

    with patch(
        "aiohttp.ClientSession", return_value=AsyncContextManagerMock(_session(request))
    ):
        headers = await fetch_headers(
            "https://example.com", 5, method="GET", user_agent="checker/2", verify_ssl=False
        )

    assert headers == {}
    method, kwargs = calls[0]
    assert method == "GET"
    assert kwargs["headers"]["User-Agent"] == "checker/2"
    assert kwargs["ssl"] is False


@pytest.mark.asyncio
async def test_fetch_headers_client_error():
    session = _session(
        lambda *_args, **_kwargs: RaisingContextManager(
            aiohttp.ClientConnectionError("connection reset")
        )
    )

    with (
        patch("aiohttp.ClientSession", return_value=AsyncContextManagerMock(session)),
        patch("headergrade.core.web.http_client.logger") as mock_logger,
    ):
        with pytest.raises(FetchError) as exc_info:
            await fetch_headers("https://example.com", 10)

    assert exc_info.value.url == "https://example.com"
    assert "connection reset" in exc_info.value.reason
    mock_logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_fetch_headers_timeout():
    session = _session(
        lambda *_args, **_kwargs: RaisingContextManager(asyncio.TimeoutError())
    )

    with (
        patch("aiohttp.ClientSession", return_value=AsyncContextManagerMock(session)),
        patch("headergrade.core.web.http_client.logger") as mock_logger,
    ):
        with pytest.raises(FetchError, match="timed out after 3s"):
            await fetch_headers("https://slow.example.com", 3)

    mock_logger.warning.assert_called_once_with(
        "Timeout fetching headers for https://slow.example.com"
    )
