"""Geo-IP lookup for node addresses.

Lookups are best effort: any transport or decoding problem yields an empty
`GeoIP` and a warning in the log, never an exception.
"""

from dataclasses import dataclass
from typing import Optional

import requests
from loguru import logger

from nodewatch.config import DEFAULT_GEOIP_URL

GEOIP_TIMEOUT = 5.0


@dataclass(frozen=True)
class GeoIP:
    country_name: str = ""
    city: str = ""
    region_name: str = ""
    time_zone: str = ""
    isp: str = ""


def extract_ip_from_multiaddr(multi_addr: str) -> str:
    """Return the host component of a multiaddress.

    `/ip4/1.2.3.4/tcp/21888` -> `1.2.3.4`. Anything with fewer than three
    `/`-separated parts gives an empty string.
    """
    parts = (multi_addr or "").split("/")
    if len(parts) >= 3:
        return parts[2]
    return ""


def get_geo_ip(ip: str, url: Optional[str] = None, timeout: float = GEOIP_TIMEOUT) -> GeoIP:
    if not ip:
        return GeoIP()

    base = url or DEFAULT_GEOIP_URL
    try:
        resp = requests.get(base + ip, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning(f"Geo-IP lookup for {ip} failed: {exc}")
        return GeoIP()

    if not isinstance(data, dict):
        logger.warning(f"Geo-IP lookup for {ip} returned unexpected payload: {data!r}")
        return GeoIP()
    if data.get("status") == "fail":
        logger.warning(f"Geo-IP lookup for {ip} rejected: {data.get('message', 'unknown reason')}")
        return GeoIP()

    return GeoIP(
        country_name=str(data.get("country") or ""),
        city=str(data.get("city") or ""),
        region_name=str(data.get("regionName") or ""),
        time_zone=str(data.get("timezone") or ""),
        isp=str(data.get("isp") or ""),
    )


__all__ = ["GeoIP", "extract_ip_from_multiaddr", "get_geo_ip"]
