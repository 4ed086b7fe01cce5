# core/web/cloudflare.py

from collections.abc import Mapping

from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.catalog import RuleCatalog
from headergrade.core.web.matcher import find_header
from headergrade.core.web.models import (
    Category,
    CloudflareResult,
    EvaluatedHeader,
    HeaderRule,
    HeaderStatus,
)

logger = setup_logger(__name__)

CLOUDFLARE_SERVER_MARKER = "cloudflare"


def _indicator_value(rule: HeaderRule, headers: Mapping[str, str]) -> str | None:
    value = find_header(headers, rule.key)
    if value is None:
        return None
    # The Server header is only an indicator when it names Cloudflare.
    if rule.key == "server" and CLOUDFLARE_SERVER_MARKER not in value.lower():
        return None
    return value


def detect_cloudflare(
    headers: Mapping[str, str], catalog: RuleCatalog
) -> CloudflareResult:
    """Check the Cloudflare indicator headers. Purely informational."""
    details = []
    for rule in catalog.rules_for(Category.CLOUDFLARE):
        value = _indicator_value(rule, headers)
        if value is None:
            details.append(EvaluatedHeader.from_rule(rule, None, HeaderStatus.MISSING))
        else:
            details.append(
                EvaluatedHeader.from_rule(rule, value, HeaderStatus.IMPLEMENTED)
            )

    implemented = sum(1 for header in details if header.implemented)
    if implemented:
        logger.debug(f"Cloudflare detected via {implemented} indicator header(s)")

    return CloudflareResult(
        is_using_cloudflare=implemented > 0,
        total=len(details),
        implemented=implemented,
        details=tuple(details),
    )
