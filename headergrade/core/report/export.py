# core/report/export.py

import csv
import io

from headergrade.core.report.json_utils import json_dumps
from headergrade.core.web.models import SCORED_CATEGORIES, AnalysisResult

CSV_COLUMNS = (
    "Category",
    "Name",
    "Key",
    "Implemented",
    "Value",
    "Status",
    "Importance",
    "Description",
    "Recommendation",
    "Link",
)


def generate_csv(result: AnalysisResult) -> str:
    """
    Export every evaluated header of the scored categories as CSV.

    Rows follow catalog order within each category; fields are quoted only
    when they contain a comma, quote or newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_COLUMNS)

    for category in SCORED_CATEGORIES:
        for header in result.category(category).details:
            writer.writerow(
                (
                    category.label,
                    header.name,
                    header.key,
                    str(header.implemented).lower(),
                    header.value or "",
                    header.status.value,
                    header.importance.value,
                    header.description,
                    header.recommendation or "",
                    header.link,
                )
            )

    return buffer.getvalue()


def generate_json(result: AnalysisResult, **kwargs) -> str:
    """Export an analysis with the same field names the HTTP API returns."""
    kwargs.setdefault("indent", 2)
    return json_dumps(result.to_dict(), **kwargs)


def export_filename(result: AnalysisResult, extension: str) -> str:
    """Build a filesystem-safe export name such as header-analysis-example.com-2024-05-01-3.csv."""
    host = result.scan.url.split("://", 1)[-1].split("/", 1)[0]
    safe_host = "".join(c if c.isalnum() or c in ".-" else "_" for c in host)
    date = result.scan.timestamp.date().isoformat() if result.scan.timestamp else "undated"
    suffix = f"-{result.scan.id}" if result.scan.id is not None else ""
    return f"header-analysis-{safe_host}-{date}{suffix}.{extension}"
