# core/web/server_timing.py

import re

from headergrade.core.web.models import ServerTimingEntry
from headergrade.core.web.scoring import round_half_up

DURATION_PATTERN = re.compile(r"(?:^|;)\s*dur\s*=\s*\"?(\d+(?:\.\d+)?)", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(
    r"(?:^|;)\s*desc\s*=\s*(?:\"([^\"]*)\"|([^;,\s]+))", re.IGNORECASE
)


def _parse_entry(raw_entry: str) -> ServerTimingEntry | None:
    entry = raw_entry.strip()
    if not entry:
        return None

    name = entry.split(";", 1)[0].strip()
    if not name:
        return None

    params = entry[len(name):]
    duration_match = DURATION_PATTERN.search(params)
    duration = float(duration_match.group(1)) if duration_match else 0.0

    description_match = DESCRIPTION_PATTERN.search(params)
    description = name
    if description_match:
        description = description_match.group(1) or description_match.group(2) or name

    return ServerTimingEntry(name=name, duration=duration, description=description)


def parse_server_timing(value: str | None) -> list[ServerTimingEntry]:
    """
    Parse a Server-Timing header value.

    Entries are returned longest first. Entries without a duration count as
    zero; each entry carries its share of the total time as a percentage.
    """
    if not value:
        return []

    entries = [e for e in (_parse_entry(part) for part in value.split(",")) if e]
    total = total_duration(entries)
    entries.sort(key=lambda e: e.duration, reverse=True)

    return [
        ServerTimingEntry(
            name=e.name,
            duration=e.duration,
            description=e.description,
            share=round_half_up(e.duration / total * 100) if total else 0,
        )
        for e in entries
    ]


def total_duration(entries: list[ServerTimingEntry]) -> float:
    return sum(entry.duration for entry in entries)
