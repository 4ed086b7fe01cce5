import logging
import os
from typing import ClassVar

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class CustomFormatter(logging.Formatter):
    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    format = "\x1b[1m%(asctime)s [%(levelname)s]\x1b[0m - %(name)s - %(message)s"

    FORMATS: ClassVar[dict[int, str]] = {
        logging.DEBUG: grey + format + reset,
        logging.INFO: grey + format + reset,
        logging.WARNING: yellow + format + reset,
        logging.ERROR: red + format + reset,
        logging.CRITICAL: bold_red + format + reset,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


def resolve_level(level: str | int | None) -> int:
    """Translate a level name such as "debug" into a logging level, defaulting to INFO."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    return LEVELS.get(level.strip().upper(), logging.INFO)


def setup_logger(name: str) -> logging.Logger:
    colorful_handler = logging.StreamHandler()
    colorful_handler.setFormatter(CustomFormatter())

    logging.addLevelName(logging.WARNING, "WARN")
    logging.addLevelName(logging.ERROR, "ERRR")
    logging.addLevelName(logging.CRITICAL, "CRIT")

    logging.basicConfig(
        level=resolve_level(os.getenv("HEADERGRADE_LOG_LEVEL")),
        handlers=[colorful_handler],
    )
    return logging.getLogger(name)


def set_log_level(level: str | int | None) -> None:
    """Apply a log level to the root logger after startup (used by the CLI)."""
    logging.getLogger().setLevel(resolve_level(level))
