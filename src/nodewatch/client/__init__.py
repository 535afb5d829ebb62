"""Node RPC clients.

- `NodeClient`: JSON-RPC calls against one gateway
- `ClientManager`: the queries the commands use, spread over several nodes
"""

from .errors import ClientError, NotFoundError, RPCError
from .manager import ClientManager
from .models import BlockchainInfo, NetworkInfo, PeerInfo, ValidatorInfo
from .node import NodeClient

__all__ = [
    "ClientError",
    "NotFoundError",
    "RPCError",
    "ClientManager",
    "NodeClient",
    "BlockchainInfo",
    "NetworkInfo",
    "PeerInfo",
    "ValidatorInfo",
]
