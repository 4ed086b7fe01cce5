# core/web/refinements.py
"""
Per-header refinement checks.

A refinement inspects the value of a header that is present and returns a
remediation message when the value is weak, which downgrades the header's
status to "warning". Returning None keeps the "implemented" status.
"""

import re
from collections.abc import Callable

Refinement = Callable[[str], str | None]

CSP_REPORT_ONLY_MESSAGE = (
    "You're using Content-Security-Policy-Report-Only which only monitors violations. "
    "Consider implementing the enforced Content-Security-Policy header for better security."
)
HSTS_SUBDOMAINS_MESSAGE = (
    "Update your HSTS header to include subdomains and preload: "
    "max-age=31536000; includeSubDomains; preload"
)
CSP_UNSAFE_MESSAGE = (
    "Avoid using 'unsafe-inline' and 'unsafe-eval' in your CSP "
    "as they undermine its security benefits"
)
CACHE_SECURITY_POLICY_MESSAGE = (
    "Your cache policy is security-focused. For static assets, consider a longer "
    "cache duration with versioned URLs for better performance"
)
CACHE_MAX_AGE_MESSAGE = (
    "Consider adding a max-age directive to your Cache-Control header for better caching"
)
CONTENT_TYPE_CHARSET_MESSAGE = (
    "Specify a character set in your Content-Type header for text-based resources"
)

SECURITY_ONLY_CACHE_DIRECTIVES = frozenset(
    {"no-store", "no-cache", "private", "must-revalidate"}
)

INCLUDE_SUBDOMAINS = re.compile(r"includeSubDomains", re.IGNORECASE)


def cache_directives(value: str) -> list[str]:
    """Directive names of a Cache-Control value, lowercased, without arguments."""
    directives = []
    for part in value.split(","):
        name = part.split("=", 1)[0].strip().lower()
        if name:
            directives.append(name)
    return directives


def check_hsts(value: str) -> str | None:
    if not INCLUDE_SUBDOMAINS.search(value):
        return HSTS_SUBDOMAINS_MESSAGE
    return None


def check_csp(value: str) -> str | None:
    lowered = value.lower()
    if "unsafe-inline" in lowered or "unsafe-eval" in lowered:
        return CSP_UNSAFE_MESSAGE
    return None


def check_cache_control(value: str) -> str | None:
    directives = cache_directives(value)
    if (
        directives
        and "no-store" in directives
        and set(directives) <= SECURITY_ONLY_CACHE_DIRECTIVES
    ):
        return CACHE_SECURITY_POLICY_MESSAGE
    if "max-age" not in directives and "s-maxage" not in directives:
        return CACHE_MAX_AGE_MESSAGE
    return None


def check_content_type(value: str) -> str | None:
    lowered = value.strip().lower()
    if lowered.startswith("text/") and "charset=" not in lowered:
        return CONTENT_TYPE_CHARSET_MESSAGE
    return None


REFINEMENTS: dict[str, Refinement] = {
    "strict-transport-security": check_hsts,
    "content-security-policy": check_csp,
    "cache-control": check_cache_control,
    "content-type": check_content_type,
}


def refine(key: str, value: str) -> str | None:
    """Run the refinement registered for a header key, if any."""
    check = REFINEMENTS.get(key)
    return check(value) if check else None
