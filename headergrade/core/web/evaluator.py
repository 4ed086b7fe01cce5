# core/web/evaluator.py

from collections.abc import Mapping

from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.catalog import RuleCatalog
from headergrade.core.web.matcher import match_rule_header
from headergrade.core.web.models import (
    Category,
    CategoryResult,
    EvaluatedHeader,
    HeaderRule,
    HeaderStatus,
)
from headergrade.core.web.refinements import CSP_REPORT_ONLY_MESSAGE, refine
from headergrade.core.web.scoring import CategoryScorer, category_score

logger = setup_logger(__name__)


def evaluate_rule(rule: HeaderRule, headers: Mapping[str, str]) -> EvaluatedHeader:
    """Evaluate a single rule against a header snapshot."""
    match = match_rule_header(headers, rule.key)

    if match is None:
        logger.debug(f"{rule.name}: missing")
        return EvaluatedHeader.from_rule(rule, None, HeaderStatus.MISSING)

    if match.via_alias:
        # Only the report-only CSP variant was sent: present, but not enforcing.
        logger.debug(f"{rule.name}: found via {match.matched_key}")
        return EvaluatedHeader.from_rule(
            rule, match.value, HeaderStatus.WARNING, CSP_REPORT_ONLY_MESSAGE
        )

    message = refine(rule.key, match.value)
    if message:
        logger.debug(f"{rule.name}: warning ({match.value})")
        return EvaluatedHeader.from_rule(
            rule, match.value, HeaderStatus.WARNING, message
        )

    logger.debug(f"{rule.name}: implemented")
    return EvaluatedHeader.from_rule(rule, match.value, HeaderStatus.IMPLEMENTED)


def evaluate_category(
    category: Category,
    headers: Mapping[str, str],
    catalog: RuleCatalog,
    scorer: CategoryScorer = category_score,
) -> CategoryResult:
    """
    Evaluate every rule of a category, in catalog order.

    Args:
        category: Category to evaluate
        headers: Response header snapshot (names in any case)
        catalog: Rule catalog to evaluate against
        scorer: Score formula applied to the evaluated headers

    Returns:
        CategoryResult with one EvaluatedHeader per rule

    Raises:
        EvaluationError: If a header value cannot be evaluated
    """
    details = tuple(evaluate_rule(rule, headers) for rule in catalog.rules_for(category))
    implemented = sum(1 for header in details if header.implemented)
    result = CategoryResult(
        category=category,
        score=scorer(details),
        total=len(details),
        implemented=implemented,
        details=details,
    )

    logger.debug(
        f"{category.label} headers: {implemented}/{len(details)} implemented, "
        f"score={result.score}"
    )
    return result
