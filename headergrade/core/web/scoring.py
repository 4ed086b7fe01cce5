# core/web/scoring.py
"""
Score formulas.

Category scores are the share of catalog rules whose header is present and
the overall score is the unweighted mean of the scored categories. Both are
plain functions so callers can pass a different formula (for example one
weighted by importance) to the evaluator and aggregator.
"""

import math
from collections.abc import Callable, Sequence

from headergrade.core.web.models import EvaluatedHeader

CategoryScorer = Callable[[Sequence[EvaluatedHeader]], int]
OverallScorer = Callable[[Sequence[int]], int]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def category_score(details: Sequence[EvaluatedHeader]) -> int:
    """
    Unweighted category score.

    Args:
        details: Evaluated headers of one category, one per rule

    Returns:
        round(implemented / total * 100), or 0 for an empty category
    """
    if not details:
        return 0
    implemented = sum(1 for header in details if header.implemented)
    return round_half_up(implemented / len(details) * 100)


def overall_score(scores: Sequence[int]) -> int:
    """Unweighted mean of category scores, rounded half up."""
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))
