from headergrade.core.web.cloudflare import detect_cloudflare
from headergrade.core.web.models import HeaderStatus


def test_server_cloudflare_only(catalog):
    result = detect_cloudflare({"Server": "cloudflare"}, catalog)

    assert result.is_using_cloudflare is True
    assert result.implemented == 1
    implemented = [h for h in result.details if h.implemented]
    assert [h.name for h in implemented] == ["Server"]
    assert implemented[0].status is HeaderStatus.IMPLEMENTED


def test_non_cloudflare_server_is_not_an_indicator(catalog):
    result = detect_cloudflare({"Server": "nginx/1.25"}, catalog)

    assert result.is_using_cloudflare is False
    assert result.implemented == 0
    assert all(h.status is HeaderStatus.MISSING for h in result.details)


def test_multiple_indicators(catalog, cloudflare_headers):
    result = detect_cloudflare(cloudflare_headers, catalog)

    assert result.is_using_cloudflare is True
    assert result.implemented == 3
    assert result.total == 6
    values = {h.key: h.value for h in result.details if h.implemented}
    assert values == {
        "cf-cache-status": "HIT",
        "cf-ray": "8a1b2c3d4e5f6789-AMS",
        "server": "cloudflare",
    }


def test_no_headers(catalog):
    result = detect_cloudflare({}, catalog)

    assert result.is_using_cloudflare is False
    assert result.total == 6
    assert result.to_dict()["isUsingCloudflare"] is False
