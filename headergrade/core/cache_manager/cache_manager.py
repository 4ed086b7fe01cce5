# core/cache_manager/cache_manager.py

import gzip
import hashlib
import json
import os
import re
from datetime import datetime, timedelta
from typing import Any

from headergrade.core.logging.logger import setup_logger
from headergrade.core.report.json_utils import json_dumps

logger = setup_logger(__name__)

COMPRESSION_THRESHOLD = 100 * 1024


class ScanResultsCache:
    """
    Caches analysis results to disk, keyed by URL, with configurable expiration.
    Large entries are stored gzip-compressed.
    """

    def __init__(self, cache_dir: str, cache_duration: timedelta = timedelta(days=1)):
        self.cache_dir = cache_dir
        self.cache_duration = cache_duration
        os.makedirs(cache_dir, exist_ok=True)

    def _cache_stem(self, url: str, fingerprint: str = "") -> str:
        readable = re.sub(r"[^A-Za-z0-9.-]+", "_", re.sub(r"^https?://", "", url))
        key = f"{url}\n{fingerprint}" if fingerprint else url
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:12]
        return f"{readable[:80]}_{digest}"

    def _get_cache_path(self, url: str, fingerprint: str = "") -> str:
        return os.path.join(
            self.cache_dir, f"{self._cache_stem(url, fingerprint)}_cache.json"
        )

    def _get_compressed_cache_path(self, url: str, fingerprint: str = "") -> str:
        return os.path.join(
            self.cache_dir, f"{self._cache_stem(url, fingerprint)}_cache.json.gz"
        )

    def save_results(
        self, url: str, results: dict[str, Any], fingerprint: str = ""
    ) -> None:
        cache_data = {
            "timestamp": datetime.now().isoformat(),
            "url": url,
            "fingerprint": fingerprint,
            "results": results,
        }
        cache_path = self._get_cache_path(url, fingerprint)
        compressed_path = self._get_compressed_cache_path(url, fingerprint)

        try:
            json_data = json_dumps(cache_data, indent=2)

            if len(json_data) > COMPRESSION_THRESHOLD:
                with gzip.open(compressed_path, "wt", encoding="utf-8") as f:
                    f.write(json_data)
                logger.debug(
                    f"Saved compressed cache for {url} ({len(json_data) / 1024:.1f}KB)"
                )
                if os.path.exists(cache_path):
                    os.remove(cache_path)
            else:
                with open(cache_path, "w", encoding="utf-8") as f:
                    f.write(json_data)
                if os.path.exists(compressed_path):
                    os.remove(compressed_path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save cache for {url}: {e}")

    def get_results(
        self, url: str, ignore_cache: bool = False, fingerprint: str = ""
    ) -> dict[str, Any] | None:
        """
        Retrieve analysis results from cache if present and not expired.

        Args:
            url: Analysed URL
            ignore_cache: If True, ignore cached results
            fingerprint: Digest of the evaluation inputs the results were scored under

        Returns:
            Cached results or None if not found/expired/unreadable
        """
        if ignore_cache:
            return None

        compressed_path = self._get_compressed_cache_path(url, fingerprint)
        cache_path = self._get_cache_path(url, fingerprint)

        try:
            if os.path.exists(compressed_path):
                with gzip.open(compressed_path, "rt", encoding="utf-8") as f:
                    cache_data = json.loads(f.read())
            elif os.path.exists(cache_path):
                with open(cache_path, encoding="utf-8") as f:
                    cache_data = json.load(f)
            else:
                return None

            cache_time = datetime.fromisoformat(cache_data["timestamp"])
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to read cache for {url}: {e}")
            return None

        if datetime.now() - cache_time > self.cache_duration:
            logger.info(f"Cache expired for {url}")
            return None

        logger.info(f"Using cached results for {url}")
        return cache_data["results"]
