# core/web/matcher.py

from collections.abc import Mapping
from dataclasses import dataclass

from headergrade.core.errors import EvaluationError

CSP_KEY = "content-security-policy"
CSP_REPORT_ONLY_KEY = "content-security-policy-report-only"

# Secondary keys accepted for a rule when its own key is absent.
HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    CSP_KEY: (CSP_REPORT_ONLY_KEY,),
}


@dataclass(frozen=True)
class HeaderMatch:
    matched_key: str
    value: str
    via_alias: bool = False


def find_header(headers: Mapping[str, str] | None, key: str) -> str | None:
    """
    Case-insensitive lookup of a header value.

    Args:
        headers: Response headers, names in any case
        key: Header name to find (case-insensitive)

    Returns:
        The raw header value, or None if the header is absent. When the same
        name appears in several cases the first one in iteration order wins.

    Raises:
        EvaluationError: If the matched value is not a string
    """
    if not headers:
        return None

    key = key.lower()
    for name, value in headers.items():
        if name.lower() == key:
            if not isinstance(value, str):
                raise EvaluationError(
                    f"Header {name} has a {type(value).__name__} value, expected str"
                )
            return value
    return None


def match_rule_header(headers: Mapping[str, str] | None, key: str) -> HeaderMatch | None:
    """Find a rule's header, falling back to its aliases when the header itself is absent."""
    key = key.lower()
    for candidate in (key, *HEADER_ALIASES.get(key, ())):
        value = find_header(headers, candidate)
        if value is not None:
            return HeaderMatch(
                matched_key=candidate, value=value, via_alias=candidate != key
            )
    return None


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Lowercase header names, keeping the first value seen for each name."""
    normalized: dict[str, str] = {}
    for name, value in (headers or {}).items():
        normalized.setdefault(name.lower(), value)
    return normalized
