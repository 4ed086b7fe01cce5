# core/io/file_processor.py

import os
from csv import DictReader

from headergrade.core.errors import InvalidURLError
from headergrade.core.logging.logger import setup_logger
from headergrade.core.validators.sanitizer import normalize_url, sanitize_text_field

logger = setup_logger(__name__)

MAX_URLS = 75


def _url_entry(raw_url: str, label: str = "") -> dict[str, str] | None:
    try:
        return {"URL": normalize_url(raw_url), "Label": label}
    except InvalidURLError:
        logger.warning(f"Skipping invalid URL: {raw_url}")
        return None


async def process_file(file_path: str) -> list[dict[str, str]]:
    """
    Process a text or CSV file containing URLs.

    Text files hold one URL per line; lines starting with # are ignored.
    CSV files need a URL column and may carry an optional Label column.

    Args:
        file_path: Path to the file to process

    Returns:
        List of {"URL": ..., "Label": ...} entries in file order, duplicates removed

    Raises:
        ValueError: If the file is missing, has an unsupported format or lacks a URL column
    """
    entries: list[dict[str, str]] = []

    file_path = os.path.abspath(os.path.normpath(file_path))
    if not os.path.isfile(file_path):
        raise ValueError(f"File does not exist: {file_path}")

    if file_path.endswith(".txt"):
        with open(file_path, encoding="utf-8") as file:
            for line in file:
                stripped_line = line.strip()
                if stripped_line and not stripped_line.startswith("#"):
                    entry = _url_entry(stripped_line)
                    if entry:
                        entries.append(entry)

    elif file_path.endswith(".csv"):
        with open(file_path, encoding="utf-8") as file:
            reader = DictReader(file)
            if not reader.fieldnames or "URL" not in reader.fieldnames:
                raise ValueError("CSV file must contain a 'URL' column.")

            for row in reader:
                if row.get("URL"):
                    label = sanitize_text_field(row.get("Label", ""), max_length=100)
                    entry = _url_entry(row["URL"].strip(), label)
                    if entry:
                        entries.append(entry)

        logger.info(f"Found {len(entries)} valid URLs in the CSV file")
    else:
        raise ValueError("Invalid file format. Only .txt and .csv files are supported.")

    seen = set()
    unique_entries = []
    for entry in entries:
        if entry["URL"] not in seen:
            seen.add(entry["URL"])
            unique_entries.append(entry)

    if len(unique_entries) > MAX_URLS:
        logger.warning(
            f"Too many URLs in file (limit: {MAX_URLS}). Processing only the first {MAX_URLS}."
        )
        unique_entries = unique_entries[:MAX_URLS]

    return unique_entries


def sanitize_file_path(file_path: str) -> str:
    """
    Sanitize and validate a file path.

    Args:
        file_path: File path to sanitize

    Returns:
        Sanitized absolute file path

    Raises:
        ValueError: If file doesn't exist or has invalid extension
    """
    abs_path = os.path.abspath(os.path.normpath(file_path))
    if not os.path.isfile(abs_path):
        raise ValueError(f"File does not exist: {file_path}")
    if not abs_path.endswith((".txt", ".csv")):
        raise ValueError("Only .txt and .csv files are supported")
    return abs_path
