import argparse
import os

from headergrade.core.cli.models import CLIOptions
from headergrade.core.io.file_processor import sanitize_file_path
from headergrade.core.report.generator import EXPORT_FORMATS
from headergrade.core.validators.sanitizer import normalize_url

DEFAULT_MAX_CONCURRENT = 8


class CLIHandler:
    """Handles CLI argument parsing and validation"""

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="HTTP response header analyzer: scores security, performance and maintainability headers",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )

        input_group = parser.add_mutually_exclusive_group(required=True)
        input_group.add_argument("--single", "-u", help="Single URL to analyse")
        input_group.add_argument(
            "--batch", "-b", help="Batch mode - Path to .txt or .csv file containing URLs"
        )
        input_group.add_argument(
            "--serve", "-s", action="store_true", help="Run the HTTP API instead"
        )

        parser.add_argument(
            "--max-concurrent",
            "-mc",
            type=int,
            default=DEFAULT_MAX_CONCURRENT,
            help="Maximum concurrent analyses in batch mode",
        )
        parser.add_argument(
            "--ignore-cache", "-ic", action="store_true", help="Force fresh analysis"
        )
        parser.add_argument(
            "--output-dir",
            "-o",
            default="results",
            help="Directory for storing reports",
        )
        parser.add_argument(
            "--format",
            "-f",
            choices=EXPORT_FORMATS,
            default="html",
            help="Report format",
        )
        parser.add_argument(
            "--rules-file",
            "-r",
            help="JSON file with custom header rules (default from HEADERGRADE_RULES_FILE env)",
        )
        parser.add_argument(
            "--method",
            "-m",
            choices=("HEAD", "GET"),
            type=str.upper,
            help="HTTP method used to fetch headers (default from HEADERGRADE_METHOD env or HEAD)",
        )
        parser.add_argument(
            "--timeout",
            "-t",
            type=int,
            help="Request timeout in seconds (default from HEADERGRADE_TIMEOUT env or 10)",
        )
        parser.add_argument("--host", default="127.0.0.1", help="API bind address")
        parser.add_argument("--port", "-p", type=int, default=5000, help="API port")
        parser.add_argument(
            "--log-level",
            "-l",
            choices=("DEBUG", "INFO", "WARNING", "ERROR"),
            type=str.upper,
            help="Log level (default from HEADERGRADE_LOG_LEVEL env or INFO)",
        )
        return parser

    @staticmethod
    def parse_args(argv: list[str] | None = None) -> CLIOptions:
        args = CLIHandler.build_parser().parse_args(argv)

        if args.single:
            args.single = normalize_url(args.single)
        if args.batch:
            args.batch = sanitize_file_path(args.batch)
        if args.rules_file:
            args.rules_file = os.path.abspath(args.rules_file)

        if args.max_concurrent < 1 or args.max_concurrent > 64:
            args.max_concurrent = DEFAULT_MAX_CONCURRENT

        if args.timeout is not None and args.timeout < 1:
            args.timeout = None

        if args.output_dir:
            args.output_dir = os.path.abspath(args.output_dir)

        return CLIOptions(**vars(args))
