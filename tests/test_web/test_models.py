from dataclasses import FrozenInstanceError

import pytest

from headergrade.core.web.models import (
    CATEGORY_FIELDS,
    SCORED_CATEGORIES,
    Category,
    CategoryResult,
    EvaluatedHeader,
    HeaderStatus,
    Importance,
)


def test_category_labels():
    assert [c.label for c in Category] == [
        "Security",
        "Performance",
        "Maintainability",
        "Cloudflare",
    ]


def test_category_fields_cover_scored_categories():
    assert set(CATEGORY_FIELDS) == set(SCORED_CATEGORIES)
    assert Category.CLOUDFLARE not in CATEGORY_FIELDS
    assert CATEGORY_FIELDS[Category.SECURITY].total == "total_security_headers"


def test_evaluated_header_from_rule(catalog):
    rule = catalog[Category.SECURITY][0]

    missing = EvaluatedHeader.from_rule(rule, None, HeaderStatus.MISSING)
    warning = EvaluatedHeader.from_rule(rule, "x", HeaderStatus.WARNING, "fix it")

    assert missing.implemented is False
    assert missing.recommendation == rule.recommendation
    assert warning.implemented is True
    assert warning.recommendation == "fix it"
    with pytest.raises(FrozenInstanceError):
        warning.status = HeaderStatus.IMPLEMENTED


def test_evaluated_header_dict(catalog):
    rule = catalog[Category.PERFORMANCE][1]
    header = EvaluatedHeader.from_rule(rule, '"v1"', HeaderStatus.IMPLEMENTED)

    data = header.to_dict()

    assert data["importance"] == "important"
    assert data["category"] == "performance"
    assert data["status"] == "implemented"
    assert EvaluatedHeader.from_dict(data) == header


def test_category_result_rejects_bad_counts():
    with pytest.raises(ValueError):
        CategoryResult(Category.SECURITY, score=0, total=1, implemented=2, details=())
    with pytest.raises(ValueError):
        CategoryResult(Category.SECURITY, score=0, total=1, implemented=-1, details=())


def test_category_result_missing_filter(catalog):
    details = tuple(
        EvaluatedHeader.from_rule(rule, None, HeaderStatus.MISSING)
        for rule in catalog[Category.SECURITY]
    )
    result = CategoryResult(Category.SECURITY, 0, len(details), 0, details)

    assert len(result.missing()) == 10
    assert [h.name for h in result.missing(Importance.CRITICAL)] == [
        "Content-Security-Policy",
        "Strict-Transport-Security",
    ]
