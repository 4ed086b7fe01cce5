# core/web/http_client.py

import asyncio

import aiohttp

from headergrade.core.errors import FetchError
from headergrade.core.logging.logger import setup_logger

logger = setup_logger(__name__)


USER_AGENT = "HTTPHeaderAnalyzer/1.0 (+headergrade)"


def collect_headers(raw_headers) -> dict[str, str]:
    """
    Flatten response headers into a lowercase-keyed dict.

    Repeated headers are joined with ", " in the order they were received.
    """
    headers: dict[str, str] = {}
    for name, value in raw_headers.items():
        key = name.lower()
        headers[key] = f"{headers[key]}, {value}" if key in headers else value
    return headers


async def fetch_headers(
    url: str,
    timeout: int,
    method: str = "HEAD",
    user_agent: str = USER_AGENT,
    verify_ssl: bool = True,
) -> dict[str, str]:
    """
    Make a single HTTP request and return all response headers.

    Redirects are followed; the headers of the final response are returned.

    Raises:
        FetchError: If the request fails for any reason
    """
    headers = {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    try:
        timeout_obj = aiohttp.ClientTimeout(total=timeout)
        async with aiohttp.ClientSession(timeout=timeout_obj) as session:
            logger.debug(f"Sending {method} request to {url}")
            async with session.request(
                method,
                url,
                allow_redirects=True,
                headers=headers,
                ssl=verify_ssl,
            ) as response:
                logger.debug(f"Response status: {response.status}")
                logger.debug(f"Response headers: {response.headers}")

                return collect_headers(response.headers)

    except aiohttp.ClientConnectorError as e:
        logger.error(f"Connection error fetching headers for {url}: {e}")
        raise FetchError(url, f"connection error: {e}") from e
    except aiohttp.ClientError as e:
        logger.error(f"Client error fetching headers for {url}: {e}")
        raise FetchError(url, f"client error: {e}") from e
    except asyncio.TimeoutError as e:
        logger.warning(f"Timeout fetching headers for {url}")
        raise FetchError(url, f"timed out after {timeout}s") from e
