# core/report/generator.py

import os
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape

from headergrade.core.logging.logger import setup_logger
from headergrade.core.report.export import export_filename, generate_csv, generate_json
from headergrade.core.web.grades import fine_grade_of
from headergrade.core.web.models import SCORED_CATEGORIES, AnalysisResult
from headergrade.core.web.server_timing import total_duration

logger = setup_logger(__name__)

TEMPLATE_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "templates")
)

EXPORT_FORMATS = ("json", "csv", "html")


def setup_report_directory(base_dir: str, output_dir_name: str = "results") -> str:
    """
    Create the dated output directory for reports.

    Args:
        base_dir: Directory relative output paths are resolved against
        output_dir_name: Name or path of the output directory (default: "results")

    Returns:
        Path of the dated output directory
    """
    if os.path.isabs(output_dir_name):
        results_dir = output_dir_name
    else:
        results_dir = os.path.join(base_dir, output_dir_name)

    date_dir = os.path.join(results_dir, datetime.now().strftime("%Y-%m-%d"))
    os.makedirs(date_dir, exist_ok=True)
    return date_dir


def create_environment(template_dir: str = TEMPLATE_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html"]),
    )


def build_report_context(result: AnalysisResult) -> dict:
    """Template context for one analysis: per-category sections plus the informational extras."""
    scan = result.scan
    sections = []
    for category in SCORED_CATEGORIES:
        fields = scan.category_fields(category)
        sections.append(
            {
                "title": category.label,
                "score": fields.score,
                "grade": fields.grade,
                "fine_grade": fine_grade_of(fields.score),
                "implemented": fields.implemented,
                "total": fields.total,
                "headers": result.category(category).details,
            }
        )

    return {
        "scan": scan,
        "summary": result.summary,
        "fine_grade": result.fine_grade,
        "sections": sections,
        "cloudflare": result.cloudflare,
        "server_timing": result.server_timing,
        "server_timing_total": total_duration(list(result.server_timing)),
        "protocol": result.protocol,
        "timestamp": (scan.timestamp or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
        "year": datetime.now().year,
    }


def render_html_report(result: AnalysisResult, template_env: Environment | None = None) -> str:
    """Render the printable (PDF-ready) HTML report for one analysis."""
    env = template_env or create_environment()
    template = env.get_template("report.html")
    return template.render(**build_report_context(result))


def render_export(result: AnalysisResult, export_format: str) -> str:
    if export_format == "json":
        return generate_json(result)
    if export_format == "csv":
        return generate_csv(result)
    if export_format == "html":
        return render_html_report(result)
    raise ValueError(
        f"Unknown export format {export_format}, expected one of {EXPORT_FORMATS}"
    )


def write_report(
    result: AnalysisResult,
    export_format: str = "html",
    output_dir: str = "results",
    base_dir: str | None = None,
) -> str:
    """
    Render an analysis in the requested format and write it to the dated output directory.

    Returns:
        Path of the written file
    """
    date_dir = setup_report_directory(base_dir or os.getcwd(), output_dir)
    content = render_export(result, export_format)
    path = os.path.join(date_dir, export_filename(result, export_format))

    with open(path, "w", encoding="utf-8") as file:
        file.write(content)

    logger.info(f"Report generated: {path}")
    return path
