import asyncio
import hashlib
import os
import traceback
from dataclasses import replace
from datetime import timedelta

from headergrade.core.cache_manager.cache_manager import ScanResultsCache
from headergrade.core.cli.handler import CLIHandler
from headergrade.core.cli.models import CLIOptions
from headergrade.core.config.settings import AnalyzerConfig, load_config
from headergrade.core.errors import FetchError, HeaderGradeError
from headergrade.core.io.file_processor import process_file
from headergrade.core.logging.logger import set_log_level, setup_logger
from headergrade.core.report.generator import write_report
from headergrade.core.storage.memory import MemoryScanStore
from headergrade.core.web import analysis
from headergrade.core.web.catalog import RuleCatalog, default_catalog, load_catalog
from headergrade.core.web.models import AnalysisResult

logger = setup_logger("header_analyzer")


def evaluation_fingerprint(config: AnalyzerConfig, catalog: RuleCatalog) -> str:
    """Digest of every input besides the URL that shapes an analysis result."""
    parts = (catalog.fingerprint(), config.method.upper(), config.user_agent)
    return hashlib.sha256("\n".join(parts).encode("utf-8")).hexdigest()


class HeaderAnalyzer:
    """
    Runs header analyses for one or many URLs, with a results cache and a
    bound on the number of concurrent fetches.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        catalog: RuleCatalog,
        cache_dir: str,
        store: MemoryScanStore | None = None,
        max_concurrent: int = 8,
    ):
        self.config = config
        self.catalog = catalog
        self.store = store if store is not None else MemoryScanStore()
        self.cache = ScanResultsCache(
            cache_dir=cache_dir,
            cache_duration=timedelta(hours=config.cache_duration_hours),
        )
        self.fingerprint = evaluation_fingerprint(config, catalog)
        self.semaphore = asyncio.Semaphore(max_concurrent)

    async def analyze_url(
        self, url: str, ignore_cache: bool = False
    ) -> AnalysisResult | None:
        """
        Analyse one normalised URL, using the cache when allowed.
        Cache hits are recorded in the store as a new scan.
        Returns None if the headers could not be fetched.
        """
        cached = self.cache.get_results(
            url, ignore_cache=ignore_cache, fingerprint=self.fingerprint
        )
        if cached:
            result = AnalysisResult.from_dict(cached)
            return replace(result, scan=self.store.save(result.scan))

        async with self.semaphore:
            try:
                result = await analysis.run(url, self.config, self.catalog, self.store)
            except FetchError as e:
                logger.error(f"Skipping {url}: {e.reason}")
                return None

        self.cache.save_results(url, result.to_dict(), fingerprint=self.fingerprint)
        return result

    async def analyze_many(
        self, entries: list[dict[str, str]], ignore_cache: bool = False
    ) -> list[AnalysisResult]:
        tasks = [self.analyze_url(entry["URL"], ignore_cache) for entry in entries]
        results = await asyncio.gather(*tasks)
        return [r for r in results if r]


def resolve_catalog(config: AnalyzerConfig) -> RuleCatalog:
    if config.rules_file:
        return load_catalog(config.rules_file)
    return default_catalog()


def build_config(cli_options: CLIOptions) -> AnalyzerConfig:
    return load_config().override(
        method=cli_options.method,
        timeout=cli_options.timeout,
        rules_file=cli_options.rules_file,
        log_level=cli_options.log_level,
    )


async def start():
    """
    Main entry point for the header analysis tool.
    Handles command line arguments and runs single, batch or server mode.
    """
    cli_options = CLIHandler.parse_args()
    config = build_config(cli_options)
    set_log_level(config.log_level)
    catalog = resolve_catalog(config)

    if cli_options.serve:
        from headergrade.api.routes import serve

        await serve(config, catalog, host=cli_options.host, port=cli_options.port)
        return

    cache_dir = os.path.join(os.path.dirname(__file__), "cache")
    analyzer = HeaderAnalyzer(
        config,
        catalog,
        cache_dir,
        max_concurrent=cli_options.max_concurrent,
    )

    entries = (
        [{"URL": cli_options.single, "Label": ""}]
        if cli_options.single
        else await process_file(cli_options.batch)
    )
    if not entries:
        logger.error("No URLs to process")
        return

    results = await analyzer.analyze_many(entries, ignore_cache=cli_options.ignore_cache)
    if not results:
        logger.warning("No URLs were successfully analysed")
        return

    for result in results:
        write_report(result, cli_options.format, output_dir=cli_options.output_dir)


def main():
    try:
        asyncio.run(start())
    except KeyboardInterrupt:
        logger.info("Process interrupted by user.")
    except (HeaderGradeError, ValueError) as e:
        logger.error(f"Error: {e}")
    except Exception as e:
        logger.error(f"Error: {e}")
        logger.error(f"Traceback: {traceback.format_exc()}")


if __name__ == "__main__":
    main()
