"""JSON-RPC client for a single Pactus node gateway."""

import itertools
from typing import Any, Dict, Optional

import requests
from loguru import logger

from nodewatch.client.errors import ClientError, NotFoundError, RPCError
from nodewatch.http_headers import get_rpc_headers

# Verbosity level that returns block header and time without transactions.
BLOCK_VERBOSITY_INFO = 1


class NodeClient:
    """Thin JSON-RPC 2.0 client bound to one gateway URL.

    Every helper returns the decoded `result` object; error objects and
    transport failures raise `ClientError` subclasses.
    """

    def __init__(self, url: str, timeout: float = 10.0, headers: Optional[Dict[str, str]] = None,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.headers = headers if headers is not None else get_rpc_headers()
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def __repr__(self) -> str:
        return f"NodeClient({self.url!r})"

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }
        logger.debug(f"{self.url} -> {method} {payload['params']}")
        try:
            resp = self._session.post(self.url, json=payload, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as exc:
            raise ClientError(f"{method} on {self.url} failed: {exc}") from exc
        except ValueError as exc:
            raise ClientError(f"{method} on {self.url} returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise ClientError(f"{method} on {self.url} returned unexpected payload")
        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                raise ClientError(f"{method} on {self.url} returned malformed error: {error!r}")
            try:
                code = int(error.get("code"))
            except (TypeError, ValueError):
                raise ClientError(f"{method} on {self.url} returned malformed error: {error!r}")
            raise RPCError(code, str(error.get("message", "")), error.get("data"))
        if "result" not in body:
            raise ClientError(f"{method} on {self.url} returned no result")
        return body["result"]

    def call_object(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Like `call`, but the result must be a JSON object."""
        result = self.call(method, params)
        if not isinstance(result, dict):
            raise ClientError(f"{method} on {self.url} returned {type(result).__name__}, expected an object")
        return result

    def get_blockchain_info(self) -> Dict[str, Any]:
        return self.call_object("pactus.blockchain.get_blockchain_info")

    def get_network_info(self) -> Dict[str, Any]:
        return self.call_object("pactus.network.get_network_info", {"only_connected": True})

    def get_block(self, height: int) -> Dict[str, Any]:
        return self.call_object("pactus.blockchain.get_block", {"height": height, "verbosity": BLOCK_VERBOSITY_INFO})

    def get_validator(self, address: str) -> Dict[str, Any]:
        result = self.call_object("pactus.blockchain.get_validator", {"address": address})
        validator = result.get("validator")
        if not validator:
            raise NotFoundError(f"validator {address} not found")
        return validator

    def get_account(self, address: str) -> Dict[str, Any]:
        result = self.call_object("pactus.blockchain.get_account", {"address": address})
        account = result.get("account")
        if not account:
            raise NotFoundError(f"account {address} not found")
        return account

    def close(self) -> None:
        self._session.close()
