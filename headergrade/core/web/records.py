# core/web/records.py

from collections.abc import Mapping
from typing import Protocol

from headergrade.core.web.grades import grade_of
from headergrade.core.web.matcher import normalize_headers
from headergrade.core.web.models import (
    CATEGORY_FIELDS,
    AggregateResult,
    Category,
    CategoryResult,
    ScanRecord,
    SCORED_CATEGORIES,
)


class ScanStore(Protocol):
    """Storage collaborator: assigns identity and timestamp on save."""

    def save(self, record: ScanRecord) -> ScanRecord: ...


def build_scan_record(
    url: str,
    raw_headers: Mapping[str, str],
    categories: Mapping[Category, CategoryResult],
    aggregate: AggregateResult,
) -> ScanRecord:
    """
    Flatten the scored categories and the aggregate into a ScanRecord.

    The record has no id or timestamp yet; those are assigned by the storage
    collaborator when it is saved.
    """
    fields = {}
    for category in SCORED_CATEGORIES:
        try:
            result = categories[category]
        except KeyError:
            raise ValueError(f"Missing {category.value} result for {url}") from None
        names = CATEGORY_FIELDS[category]
        fields[names.score] = result.score
        fields[names.total] = result.total
        fields[names.implemented] = result.implemented
        fields[names.grade] = grade_of(result.score)

    return ScanRecord(
        url=url,
        raw_headers=normalize_headers(raw_headers),
        overall_score=aggregate.overall_score,
        overall_grade=aggregate.overall_grade,
        **fields,
    )


def record_scan(
    url: str,
    raw_headers: Mapping[str, str],
    categories: Mapping[Category, CategoryResult],
    aggregate: AggregateResult,
    store: ScanStore,
) -> ScanRecord:
    """Build a ScanRecord and hand it to the store, returning the stored copy."""
    return store.save(build_scan_record(url, raw_headers, categories, aggregate))
