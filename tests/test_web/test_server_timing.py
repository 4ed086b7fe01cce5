import pytest

from headergrade.core.web.server_timing import parse_server_timing, total_duration


def test_parse_server_timing_sorted_with_shares():
    entries = parse_server_timing('db;dur=53, app;dur=47.2;desc="Application", cache;desc=Hit')

    assert [e.name for e in entries] == ["db", "app", "cache"]
    assert entries[0].duration == 53.0
    assert entries[0].description == "db"
    assert entries[1].description == "Application"
    assert entries[2].duration == 0.0
    assert entries[2].description == "Hit"
    assert [e.share for e in entries] == [53, 47, 0]
    assert total_duration(entries) == pytest.approx(100.2)


def test_parse_server_timing_empty():
    assert parse_server_timing(None) == []
    assert parse_server_timing("") == []
    assert parse_server_timing(" , ") == []


def test_parse_server_timing_without_durations():
    entries = parse_server_timing("miss, edge")

    assert [e.name for e in entries] == ["miss", "edge"]
    assert all(e.share == 0 for e in entries)


def test_parse_server_timing_case_insensitive_params():
    entries = parse_server_timing("total;DUR=12.5;DESC=Total")

    assert entries[0].duration == 12.5
    assert entries[0].description == "Total"
    assert entries[0].share == 100
