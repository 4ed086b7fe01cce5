# core/web/analysis.py
"""
Header analysis pipeline.

analyze_headers() is the synchronous core: it evaluates one header snapshot
against a rule catalog and records the result. run() wraps it with the
network collaborators (header fetch and protocol detection).
"""

import asyncio
from collections.abc import Mapping

from headergrade.core.config.settings import AnalyzerConfig
from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.aggregator import aggregate
from headergrade.core.web.catalog import RuleCatalog
from headergrade.core.web.cloudflare import detect_cloudflare
from headergrade.core.web.evaluator import evaluate_category
from headergrade.core.web.grades import fine_grade_of
from headergrade.core.web.http_client import fetch_headers
from headergrade.core.web.matcher import find_header
from headergrade.core.web.models import (
    AnalysisResult,
    Category,
    ProtocolInfo,
    SCORED_CATEGORIES,
)
from headergrade.core.web.protocol import detect_protocol_version
from headergrade.core.web.records import ScanStore, record_scan
from headergrade.core.web.scoring import (
    CategoryScorer,
    OverallScorer,
    category_score,
    overall_score,
)
from headergrade.core.web.server_timing import parse_server_timing

logger = setup_logger(__name__)


def analyze_headers(
    url: str,
    headers: Mapping[str, str],
    catalog: RuleCatalog,
    store: ScanStore,
    protocol: ProtocolInfo | None = None,
    category_scorer: CategoryScorer = category_score,
    overall_scorer: OverallScorer = overall_score,
) -> AnalysisResult:
    """
    Evaluate a header snapshot and persist the resulting scan record.

    Args:
        url: URL the headers were fetched from
        headers: Response headers, names in any case
        catalog: Rule catalog to evaluate against
        store: Storage collaborator that assigns the record id and timestamp
        protocol: Optional protocol lookup result, carried through unscored
        category_scorer: Per-category score formula
        overall_scorer: Overall score formula

    Returns:
        The complete analysis

    Raises:
        EvaluationError: If the header map cannot be evaluated. No partial
            result is produced.
    """
    categories = {
        category: evaluate_category(category, headers, catalog, category_scorer)
        for category in SCORED_CATEGORIES
    }
    summary = aggregate(
        categories[Category.SECURITY],
        categories[Category.PERFORMANCE],
        categories[Category.MAINTAINABILITY],
        overall_scorer,
    )
    cloudflare = detect_cloudflare(headers, catalog)
    scan = record_scan(url, headers, categories, summary, store)

    logger.info(
        f"Analysed {url}: overall {scan.overall_score} ({scan.overall_grade}), "
        f"security {scan.security_score}, performance {scan.performance_score}, "
        f"maintainability {scan.maintainability_score}"
    )

    return AnalysisResult(
        scan=scan,
        categories=categories,
        cloudflare=cloudflare,
        summary=summary.summary,
        fine_grade=fine_grade_of(scan.overall_score),
        server_timing=tuple(parse_server_timing(find_header(headers, "server-timing"))),
        protocol=protocol,
    )


async def run(
    url: str,
    config: AnalyzerConfig,
    catalog: RuleCatalog,
    store: ScanStore,
) -> AnalysisResult:
    """
    Fetch the headers of a URL and analyse them.

    The URL must already be normalised. Protocol detection runs alongside the
    fetch when enabled and never affects the scores.

    Raises:
        FetchError: If the headers could not be fetched; nothing is scored or stored
    """
    logger.info(f"Processing header analysis for {url}")

    fetch_task = asyncio.create_task(
        fetch_headers(
            url,
            config.timeout,
            method=config.method,
            user_agent=config.user_agent,
            verify_ssl=config.verify_ssl,
        )
    )
    protocol_task = (
        asyncio.create_task(detect_protocol_version(url, config.timeout))
        if config.detect_protocol
        else None
    )

    try:
        headers = await fetch_task
    except BaseException:
        if protocol_task:
            protocol_task.cancel()
        raise

    protocol = await protocol_task if protocol_task else None
    return analyze_headers(url, headers, catalog, store, protocol=protocol)
