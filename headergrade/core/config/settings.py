# core/config/settings.py

import os
from dataclasses import dataclass, replace
from typing import Any

from dotenv import load_dotenv

from headergrade.core.web.http_client import USER_AGENT

ALLOWED_METHODS = ("HEAD", "GET")


@dataclass(frozen=True)
class AnalyzerConfig:
    """Runtime settings for fetching and analysing headers."""

    timeout: int = 10
    user_agent: str = USER_AGENT
    method: str = "HEAD"
    verify_ssl: bool = True
    detect_protocol: bool = True
    rules_file: str | None = None
    cache_duration_hours: int = 24
    log_level: str = "INFO"

    def __post_init__(self):
        if self.method.upper() not in ALLOWED_METHODS:
            raise ValueError(
                f"Unsupported method {self.method}, expected one of {ALLOWED_METHODS}"
            )
        if self.timeout < 1:
            raise ValueError("timeout must be at least 1 second")

    def override(self, **changes: Any) -> "AnalyzerConfig":
        """Return a copy with every non-None value in changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_config(env_file: str | None = None) -> AnalyzerConfig:
    """
    Build the configuration from HEADERGRADE_* environment variables.

    A .env file is loaded first when present; variables already set in the
    environment take precedence over it.
    """
    load_dotenv(env_file)

    return AnalyzerConfig(
        timeout=_env_int("HEADERGRADE_TIMEOUT", 10),
        user_agent=os.getenv("HEADERGRADE_USER_AGENT") or USER_AGENT,
        method=(os.getenv("HEADERGRADE_METHOD") or "HEAD").upper(),
        verify_ssl=_env_bool("HEADERGRADE_VERIFY_SSL", True),
        detect_protocol=_env_bool("HEADERGRADE_DETECT_PROTOCOL", True),
        rules_file=os.getenv("HEADERGRADE_RULES_FILE") or None,
        cache_duration_hours=_env_int("HEADERGRADE_CACHE_HOURS", 24),
        log_level=os.getenv("HEADERGRADE_LOG_LEVEL") or "INFO",
    )
