from unittest.mock import MagicMock, patch

import pytest
import requests

from nodewatch.config import get_rpc_urls, load_settings, parse_reserve_accounts
from nodewatch.geoip import GeoIP, extract_ip_from_multiaddr, get_geo_ip
from nodewatch.http_headers import get_rpc_headers


@pytest.mark.parametrize("addr,ip", [
    ("/ip4/1.2.3.4/tcp/21888", "1.2.3.4"),
    ("/ip6/::1/tcp/21888", "::1"),
    ("/dns/node.example.org/tcp/21888", "node.example.org"),
    ("garbage", ""),
    ("", ""),
])
def test_extract_ip_from_multiaddr(addr, ip):
    assert extract_ip_from_multiaddr(addr) == ip


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


def test_geo_ip_maps_fields():
    payload = {"status": "success", "country": "Germany", "city": "Falkenstein",
               "regionName": "Saxony", "timezone": "Europe/Berlin", "isp": "Hetzner Online GmbH"}
    with patch("nodewatch.geoip.requests.get", return_value=_response(payload)) as get:
        geo = get_geo_ip("1.2.3.4", url="http://geo.local/json/")
    get.assert_called_once()
    assert get.call_args[0][0] == "http://geo.local/json/1.2.3.4"
    assert geo == GeoIP("Germany", "Falkenstein", "Saxony", "Europe/Berlin", "Hetzner Online GmbH")


@pytest.mark.parametrize("side_effect,payload", [
    (requests.Timeout("slow"), None),
    (None, {"status": "fail", "message": "private range"}),
    (None, ["not", "a", "dict"]),
])
def test_geo_ip_degrades_to_empty(side_effect, payload):
    with patch("nodewatch.geoip.requests.get", side_effect=side_effect, return_value=_response(payload)):
        assert get_geo_ip("10.0.0.1") == GeoIP()


def test_geo_ip_skips_lookup_for_empty_ip():
    with patch("nodewatch.geoip.requests.get") as get:
        assert get_geo_ip("") == GeoIP()
    get.assert_not_called()


def test_get_rpc_urls():
    assert get_rpc_urls("http://a:1, https://b:2 ,") == ["http://a:1", "https://b:2"]
    with pytest.raises(ValueError):
        get_rpc_urls("")
    with pytest.raises(ValueError):
        get_rpc_urls("ftp://nope")


def test_parse_reserve_accounts():
    assert parse_reserve_accounts(None) == {}
    assert parse_reserve_accounts("pc1a:100, pc1b:200") == {"pc1a": 100, "pc1b": 200}
    with pytest.raises(ValueError):
        parse_reserve_accounts("pc1a")
    with pytest.raises(ValueError):
        parse_reserve_accounts("pc1a:lots")


def test_load_settings(monkeypatch):
    monkeypatch.setenv("NODE_RPC_URLS", "http://127.0.0.1:8545,http://10.0.0.2:8545")
    monkeypatch.setenv("RPC_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("RPC_TOKEN", raising=False)
    monkeypatch.delenv("GEOIP_URL", raising=False)
    monkeypatch.delenv("RESERVE_ACCOUNTS", raising=False)

    settings = load_settings()
    assert settings.rpc_urls == ["http://127.0.0.1:8545", "http://10.0.0.2:8545"]
    assert settings.rpc_timeout == 2.5
    assert settings.rpc_token is None
    assert settings.geoip_url == "http://ip-api.com/json/"
    assert settings.log_level == "DEBUG"


def test_load_settings_requires_urls(monkeypatch):
    monkeypatch.delenv("NODE_RPC_URLS", raising=False)
    with pytest.raises(ValueError, match="NODE_RPC_URLS"):
        load_settings()


def test_load_settings_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("NODE_RPC_URLS", "http://node")
    monkeypatch.setenv("RPC_TIMEOUT", "-1")
    with pytest.raises(ValueError, match="RPC_TIMEOUT"):
        load_settings()


def test_rpc_headers(monkeypatch):
    monkeypatch.delenv("RPC_TOKEN", raising=False)
    assert "Authorization" not in get_rpc_headers()
    assert get_rpc_headers("secret")["Authorization"] == "Bearer secret"
