# core/web/aggregator.py

from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.grades import grade_of
from headergrade.core.web.models import (
    AggregateResult,
    Category,
    CategoryResult,
    Importance,
)
from headergrade.core.web.scoring import OverallScorer, overall_score

logger = setup_logger(__name__)

PERFORMANCE_WELL_IMPLEMENTED_RATIO = 0.7


def _check_category(result: CategoryResult, expected: Category) -> None:
    if result.category is not expected:
        raise ValueError(
            f"Expected a {expected.value} result, got {result.category.value}"
        )


def build_summary(
    security: CategoryResult,
    performance: CategoryResult,
    maintainability: CategoryResult,
) -> str:
    """
    Build the human-readable summary of an analysis.

    Names every missing critical security header; otherwise reports whether
    the remaining security headers are complete. Adds a performance remark
    when some performance headers are missing and a maintainability remark
    when all maintainability headers are present.
    """
    total_implemented = (
        security.implemented + performance.implemented + maintainability.implemented
    )
    total_headers = security.total + performance.total + maintainability.total

    parts = [
        f"Your site implements {total_implemented} out of {total_headers} "
        f"recommended HTTP headers."
    ]

    critical_missing = [h.name for h in security.missing(Importance.CRITICAL)]
    if critical_missing:
        parts.append(
            f"Critical security headers like {', '.join(critical_missing)} are missing, "
            f"which may expose your site to security vulnerabilities."
        )
    elif security.implemented < security.total:
        parts.append(
            "Some security headers are missing but all critical ones are implemented."
        )
    else:
        parts.append("All security headers are properly implemented, great job!")

    if performance.total and performance.implemented < performance.total:
        ratio = performance.implemented / performance.total
        if ratio > PERFORMANCE_WELL_IMPLEMENTED_RATIO:
            parts.append(
                "Performance headers are well implemented, but could benefit "
                "from adding additional optimizations."
            )
        else:
            parts.append(
                "Performance headers are missing several important optimizations."
            )

    if maintainability.implemented == maintainability.total:
        parts.append("Maintainability headers are all properly implemented.")

    return " ".join(parts)


def aggregate(
    security: CategoryResult,
    performance: CategoryResult,
    maintainability: CategoryResult,
    scorer: OverallScorer = overall_score,
) -> AggregateResult:
    """Combine the three scored categories into an overall score, grade and summary."""
    _check_category(security, Category.SECURITY)
    _check_category(performance, Category.PERFORMANCE)
    _check_category(maintainability, Category.MAINTAINABILITY)

    score = scorer([security.score, performance.score, maintainability.score])
    result = AggregateResult(
        overall_score=score,
        overall_grade=grade_of(score),
        summary=build_summary(security, performance, maintainability),
    )
    logger.debug(f"Overall score {result.overall_score} ({result.overall_grade})")
    return result
