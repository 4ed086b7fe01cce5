# core/storage/memory.py

import itertools
from datetime import datetime

from headergrade.core.logging.logger import setup_logger
from headergrade.core.web.models import ScanRecord

logger = setup_logger(__name__)


class MemoryScanStore:
    """
    In-memory scan record storage.

    Records get an increasing integer id starting at 1 and the save time as
    their timestamp. Nothing is persisted across processes.
    """

    def __init__(self, clock=datetime.now):
        self._records: dict[int, ScanRecord] = {}
        self._ids = itertools.count(1)
        self._clock = clock

    def save(self, record: ScanRecord) -> ScanRecord:
        stored = record.with_identity(next(self._ids), self._clock())
        self._records[stored.id] = stored
        logger.debug(f"Stored scan {stored.id} for {stored.url}")
        return stored

    def get(self, record_id: int) -> ScanRecord | None:
        return self._records.get(record_id)

    def get_by_url(self, url: str, limit: int = 10) -> list[ScanRecord]:
        """Most recent scans of one URL, newest first."""
        return self._newest_first(r for r in self._records.values() if r.url == url)[
            :limit
        ]

    def recent(self, limit: int = 10) -> list[ScanRecord]:
        return self._newest_first(self._records.values())[:limit]

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _newest_first(records) -> list[ScanRecord]:
        return sorted(records, key=lambda r: (r.timestamp, r.id), reverse=True)
