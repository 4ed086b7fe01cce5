# tests/conftest.py

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from headergrade.core.cache_manager.cache_manager import ScanResultsCache
from headergrade.core.config.settings import AnalyzerConfig
from headergrade.core.storage.memory import MemoryScanStore
from headergrade.core.web.analysis import analyze_headers
from headergrade.core.web.catalog import default_catalog
from headergrade.core.web.models import ProtocolInfo


@pytest.fixture
def sample_url():
    return "https://example.com"


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def store(fixed_clock):
    return MemoryScanStore(clock=fixed_clock)


@pytest.fixture
def config():
    return AnalyzerConfig(timeout=5, detect_protocol=False)


@pytest.fixture
def full_headers():
    """Every scored header present with a strong value."""
    return {
        "Content-Security-Policy": "default-src 'self'",
        "X-XSS-Protection": "1; mode=block",
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Permissions-Policy": "camera=(), microphone=()",
        "Cross-Origin-Embedder-Policy": "require-corp",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Cache-Control": "public, max-age=3600",
        "ETag": '"abc123"',
        "Vary": "Accept-Encoding",
        "Content-Encoding": "gzip",
        "Transfer-Encoding": "chunked",
        "Content-Type": "text/html; charset=utf-8",
        "Accept-Ranges": "bytes",
        "Server-Timing": "db;dur=53, app;dur=47.2",
    }


@pytest.fixture
def partial_headers():
    """A typical site: HSTS and a few basics, no CSP."""
    return {
        "strict-transport-security": "max-age=63072000",
        "x-frame-options": "SAMEORIGIN",
        "cache-control": "no-store",
        "content-type": "text/html",
        "server": "nginx",
    }


@pytest.fixture
def cloudflare_headers():
    return {
        "cf-ray": "8a1b2c3d4e5f6789-AMS",
        "cf-cache-status": "HIT",
        "server": "cloudflare",
        "content-type": "text/html; charset=utf-8",
    }


@pytest.fixture
def protocol_info():
    return ProtocolInfo("HTTP/2", "Negotiated h2 via ALPN over TLSv1.3")


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache_manager"


@pytest.fixture
def mock_cache():
    mock_cache = MagicMock(spec=ScanResultsCache)
    mock_cache.get_results.return_value = None
    return mock_cache


@pytest.fixture
def analysis_result(sample_url, catalog, store, partial_headers, protocol_info):
    headers = {**partial_headers, "Server-Timing": "db;dur=30, app;dur=10"}
    return analyze_headers(sample_url, headers, catalog, store, protocol=protocol_info)
