"""HTTP header helpers for the node JSON-RPC gateways.

- Content-Type: application/json
- Accept: application/json
- Authorization: Bearer <token> (only when a token is configured)

The token normally comes from the `RPC_TOKEN` environment variable; pass it
explicitly with `get_rpc_headers(token=...)` to override.
"""
from typing import Dict, Optional
import os


ENV_TOKEN_NAME = "RPC_TOKEN"


def get_rpc_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Return the headers used for JSON-RPC requests.

    A missing token omits the Authorization header.
    """
    if token is None:
        token = os.getenv(ENV_TOKEN_NAME)

    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


__all__ = ["get_rpc_headers", "ENV_TOKEN_NAME"]
