"""Exceptions raised by the node clients.

Command handlers catch `ClientError` and turn it into an error result, so
every failure in this package surfaces as one of these.

Example:
    try:
        info = mgr.get_blockchain_info()
    except ClientError as e:
        return cmd.error_result(e)
"""

from typing import Any


class ClientError(Exception):
    """Base exception for node client errors."""


class RPCError(ClientError):
    """The node answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"rpc error {code}: {message}")


class NotFoundError(ClientError):
    """The requested peer, validator or account does not exist."""
