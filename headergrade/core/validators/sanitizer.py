# core/validators/sanitizer.py

import html
import re
from urllib.parse import urlsplit

from headergrade.core.errors import InvalidURLError
from headergrade.core.logging.logger import setup_logger

logger = setup_logger(__name__)

EMPTY_URL_MESSAGE = "Please enter a website URL"
INVALID_URL_MESSAGE = "Please enter a valid URL (e.g., example.com)"


def normalize_url(url: str | None) -> str:
    """
    Normalise user input into an https URL.

    Whitespace, any http:// or https:// prefix and trailing slashes are
    removed and https:// is prepended.

    Args:
        url: URL or bare hostname as typed by the user

    Returns:
        The normalised URL

    Raises:
        InvalidURLError: If the input is empty or has no usable hostname
    """
    if url is None or not url.strip():
        raise InvalidURLError(EMPTY_URL_MESSAGE)

    value = url.strip()
    value = re.sub(r"^https?://", "", value, flags=re.IGNORECASE)
    value = re.sub(r"/+$", "", value)
    normalized = f"https://{value}"

    if not is_valid_url(normalized):
        logger.debug(f"Rejected URL input: {url!r}")
        raise InvalidURLError(INVALID_URL_MESSAGE)

    return normalized


def is_valid_url(url: str) -> bool:
    """A URL is usable when it parses and its hostname has a dot or is localhost."""
    if re.search(r"\s", url):
        return False
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        # Accessing .port validates it.
        parts.port
    except ValueError:
        return False

    if not hostname:
        return False
    return "." in hostname or hostname == "localhost"


def sanitize_text_field(text: str | None, max_length: int = 100) -> str:
    """
    Sanitize text fields to prevent XSS and injection attacks.

    Args:
        text: Text to sanitize
        max_length: Maximum length to allow

    Returns:
        Sanitized text
    """
    if text is None:
        return ""

    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length]

    return html.escape(text)
