from datetime import datetime
from unittest.mock import MagicMock

import pytest

from headergrade.core.web.aggregator import aggregate
from headergrade.core.web.evaluator import evaluate_category
from headergrade.core.web.models import SCORED_CATEGORIES, Category, ScanRecord
from headergrade.core.web.records import build_scan_record, record_scan


@pytest.fixture
def evaluated(catalog, partial_headers):
    categories = {
        category: evaluate_category(category, partial_headers, catalog)
        for category in SCORED_CATEGORIES
    }
    summary = aggregate(
        categories[Category.SECURITY],
        categories[Category.PERFORMANCE],
        categories[Category.MAINTAINABILITY],
    )
    return categories, summary


def test_build_scan_record_flattens_categories(sample_url, partial_headers, evaluated):
    categories, summary = evaluated

    record = build_scan_record(sample_url, partial_headers, categories, summary)

    assert record.id is None
    assert record.timestamp is None
    assert record.url == sample_url
    assert record.security_score == 20
    assert record.total_security_headers == 10
    assert record.implemented_security_headers == 2
    assert record.performance_score == 20
    assert record.implemented_performance_headers == 1
    assert record.maintainability_score == 33
    assert record.total_maintainability_headers == 3
    assert record.security_grade == "F"
    assert record.maintainability_grade == "F"
    assert record.overall_score == 24
    assert record.overall_grade == "F"


def test_build_scan_record_lowercases_raw_headers(sample_url, evaluated):
    categories, summary = evaluated

    record = build_scan_record(
        sample_url, {"Server": "nginx", "X-Frame-Options": "DENY"}, categories, summary
    )

    assert record.raw_headers == {"server": "nginx", "x-frame-options": "DENY"}


def test_build_scan_record_requires_all_categories(sample_url, evaluated):
    categories, summary = evaluated
    del categories[Category.PERFORMANCE]

    with pytest.raises(ValueError, match="Missing performance result"):
        build_scan_record(sample_url, {}, categories, summary)


def test_record_scan_delegates_identity_to_store(sample_url, partial_headers, evaluated):
    categories, summary = evaluated
    store = MagicMock()
    store.save.side_effect = lambda record: record.with_identity(7, datetime(2024, 1, 1))

    stored = record_scan(sample_url, partial_headers, categories, summary, store)

    store.save.assert_called_once()
    saved = store.save.call_args[0][0]
    assert isinstance(saved, ScanRecord)
    assert saved.id is None
    assert stored.id == 7
    assert stored.timestamp == datetime(2024, 1, 1)


def test_category_fields(sample_url, partial_headers, evaluated):
    categories, summary = evaluated
    record = build_scan_record(sample_url, partial_headers, categories, summary)

    fields = record.category_fields(Category.MAINTAINABILITY)

    assert (fields.score, fields.total, fields.implemented, fields.grade) == (33, 3, 1, "F")
    with pytest.raises(ValueError, match="not a scored category"):
        record.category_fields(Category.CLOUDFLARE)


def test_scan_record_dict_uses_camel_case(sample_url, partial_headers, evaluated):
    categories, summary = evaluated
    record = build_scan_record(
        sample_url, partial_headers, categories, summary
    ).with_identity(3, datetime(2024, 5, 1, 12, 30))

    data = record.to_dict()

    assert data["id"] == 3
    assert data["timestamp"] == "2024-05-01T12:30:00"
    assert data["rawHeaders"]["server"] == "nginx"
    assert data["totalSecurityHeaders"] == 10
    assert data["implementedMaintainabilityHeaders"] == 1
    assert data["overallGrade"] == "F"
    assert ScanRecord.from_dict(data) == record
