# tests/test_cache_manager.py

import gzip
import json
import os
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from headergrade.core.cache_manager.cache_manager import ScanResultsCache


@pytest.fixture
def sample_results(analysis_result):
    return analysis_result.to_dict()


@pytest.fixture
def cache_manager(cache_dir):
    return ScanResultsCache(cache_dir=str(cache_dir))


def test_cache_initialization(cache_dir, cache_manager):
    assert os.path.exists(cache_dir)
    assert cache_manager.cache_duration == timedelta(days=1)


def test_cache_path_sanitization(cache_manager):
    url = "https://example.com/path?q=1"
    path = cache_manager._get_cache_path(url)
    name = os.path.basename(path)

    assert "/" not in name
    assert "?" not in name
    assert name.startswith("example.com_path_q_1_")
    assert name.endswith("_cache.json")


def test_cache_paths_are_distinct(cache_manager):
    assert cache_manager._get_cache_path(
        "https://example.com/a_b"
    ) != cache_manager._get_cache_path("https://example.com/a?b")


def test_cache_paths_follow_fingerprint(cache_manager, sample_url):
    assert cache_manager._get_cache_path(sample_url, "abc") != (
        cache_manager._get_cache_path(sample_url, "def")
    )
    assert cache_manager._get_cache_path(sample_url, "abc") != (
        cache_manager._get_cache_path(sample_url)
    )


def test_results_are_scoped_by_fingerprint(cache_manager, sample_url, sample_results):
    cache_manager.save_results(sample_url, sample_results, fingerprint="catalog-a")

    assert cache_manager.get_results(sample_url, fingerprint="catalog-b") is None
    assert cache_manager.get_results(sample_url) is None
    assert cache_manager.get_results(sample_url, fingerprint="catalog-a") == (
        json.loads(json.dumps(sample_results))
    )


def test_save_and_get_results(cache_manager, sample_url, sample_results):
    cache_manager.save_results(sample_url, sample_results)
    cached_results = cache_manager.get_results(sample_url)

    assert cached_results == json.loads(json.dumps(sample_results))
    assert cached_results["scan"]["securityScore"] == 20


def test_ignore_cache(cache_manager, sample_url, sample_results):
    cache_manager.save_results(sample_url, sample_results)
    assert cache_manager.get_results(sample_url, ignore_cache=True) is None


def test_cache_miss(cache_manager):
    assert cache_manager.get_results("https://never.example.com") is None


def test_expired_cache(cache_manager, sample_url, sample_results):
    cache_manager.save_results(sample_url, sample_results)
    cache_path = cache_manager._get_cache_path(sample_url)

    with open(cache_path, encoding="utf-8") as f:
        data = json.load(f)
    data["timestamp"] = (datetime.now() - timedelta(days=2)).isoformat()
    with open(cache_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    assert cache_manager.get_results(sample_url) is None


def test_large_results_are_compressed(cache_manager, sample_url, sample_results):
    large = dict(sample_results, padding="x" * (150 * 1024))

    cache_manager.save_results(sample_url, large)

    compressed_path = cache_manager._get_compressed_cache_path(sample_url)
    assert os.path.exists(compressed_path)
    assert not os.path.exists(cache_manager._get_cache_path(sample_url))
    with gzip.open(compressed_path, "rt", encoding="utf-8") as f:
        assert json.load(f)["url"] == sample_url
    assert cache_manager.get_results(sample_url)["padding"] == large["padding"]


def test_small_save_replaces_compressed_entry(cache_manager, sample_url, sample_results):
    cache_manager.save_results(sample_url, dict(sample_results, padding="x" * (150 * 1024)))
    cache_manager.save_results(sample_url, sample_results)

    assert not os.path.exists(cache_manager._get_compressed_cache_path(sample_url))
    assert "padding" not in cache_manager.get_results(sample_url)


def test_corrupt_cache_file(cache_manager, sample_url):
    with open(cache_manager._get_cache_path(sample_url), "w", encoding="utf-8") as f:
        f.write("{broken")

    with patch("headergrade.core.cache_manager.cache_manager.logger") as mock_logger:
        assert cache_manager.get_results(sample_url) is None

    mock_logger.error.assert_called_once()


def test_unserialisable_results_are_logged(cache_manager, sample_url):
    with patch("headergrade.core.cache_manager.cache_manager.logger") as mock_logger:
        cache_manager.save_results(sample_url, {"bad": object()})

    mock_logger.error.assert_called_once()
    assert cache_manager.get_results(sample_url) is None
