"""Configuration helpers for nodewatch.

All settings come from the process environment, which `main` populates from
`.env` via python-dotenv before anything here is called.

Variables:
- NODE_RPC_URLS: Comma separated JSON-RPC gateway URLs. The first one is
  treated as the local node, e.g. http://127.0.0.1:8545
- RPC_TIMEOUT: Request timeout in seconds (default 10)
- RPC_TOKEN: Optional bearer token sent to the gateways
- GEOIP_URL: Geo-IP lookup endpoint (default http://ip-api.com/json/)
- RESERVE_ACCOUNTS: Optional `address:allocation` pairs, allocation in NanoPAC
- LOG_LEVEL: loguru level for the stderr sink (default INFO)
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os


ENV_RPC_URLS_NAME = "NODE_RPC_URLS"
DEFAULT_RPC_TIMEOUT = 10.0
DEFAULT_GEOIP_URL = "http://ip-api.com/json/"
DEFAULT_LOG_LEVEL = "INFO"


def _get_env(name: str, required: bool = True) -> Optional[str]:
    val = os.getenv(name)
    if required and not val:
        raise ValueError(f"Missing required environment variable: {name}")
    return val


def _check_url(url: str) -> str:
    if not (url.startswith("http://") or url.startswith("https://")):
        raise ValueError("RPC URL must start with http:// or https://; got: " + url)
    return url


def get_rpc_urls(urls: Optional[str] = None) -> List[str]:
    """Return the node RPC URLs from argument or environment.

    Args:
        urls: Optional explicit comma separated URL list. If omitted, uses the
            env var defined by `ENV_RPC_URLS_NAME`.

    Raises:
        ValueError: if no URL is configured or one of them isn't http(s).
    """
    if urls is None:
        urls = os.getenv(ENV_RPC_URLS_NAME)

    parsed = [u.strip() for u in (urls or "").split(",") if u.strip()]
    if not parsed:
        raise ValueError(
            f"Node RPC URL not found. Set environment variable {ENV_RPC_URLS_NAME} "
            "or pass it explicitly to get_rpc_urls(urls=...)."
        )
    return [_check_url(u) for u in parsed]


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_RPC_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"Environment variable RPC_TIMEOUT must be a number; got: {raw}")
    if timeout <= 0:
        raise ValueError(f"Environment variable RPC_TIMEOUT must be positive; got: {raw}")
    return timeout


def parse_reserve_accounts(raw: Optional[str]) -> Dict[str, int]:
    """Parse `addr1:allocation1,addr2:allocation2` into a dict."""
    accounts: Dict[str, int] = {}
    if not raw:
        return accounts
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        address, sep, allocation = item.partition(":")
        if not sep or not address.strip():
            raise ValueError(f"RESERVE_ACCOUNTS entry must look like address:allocation; got: {item}")
        try:
            accounts[address.strip()] = int(allocation)
        except ValueError:
            raise ValueError(f"RESERVE_ACCOUNTS allocation must be an integer; got: {allocation}")
    return accounts


@dataclass(frozen=True)
class Settings:
    rpc_urls: List[str]
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    rpc_token: Optional[str] = None
    geoip_url: str = DEFAULT_GEOIP_URL
    reserve_accounts: Dict[str, int] = field(default_factory=dict)
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Build `Settings` from the current environment."""
    return Settings(
        rpc_urls=get_rpc_urls(_get_env(ENV_RPC_URLS_NAME)),
        rpc_timeout=_parse_timeout(_get_env("RPC_TIMEOUT", required=False)),
        rpc_token=_get_env("RPC_TOKEN", required=False) or None,
        geoip_url=_get_env("GEOIP_URL", required=False) or DEFAULT_GEOIP_URL,
        reserve_accounts=parse_reserve_accounts(_get_env("RESERVE_ACCOUNTS", required=False)),
        log_level=(_get_env("LOG_LEVEL", required=False) or DEFAULT_LOG_LEVEL).upper(),
    )


__all__ = ["Settings", "load_settings", "get_rpc_urls", "parse_reserve_accounts", "ENV_RPC_URLS_NAME"]
