"""Client manager: the query surface the network commands consume.

Wraps one or more `NodeClient`s. The first client is the local node and
answers chain queries; peer lookups fan out over all of them because a peer
is only visible to the nodes it is connected to.
"""

from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar

from loguru import logger
from pydantic import ValidationError

from nodewatch.amount import NANO_PAC_PER_PAC
from nodewatch.client.errors import ClientError, NotFoundError
from nodewatch.client.models import (
    AccountInfo,
    BlockchainInfo,
    BlockInfo,
    NetworkInfo,
    PeerInfo,
    RPCModel,
    ValidatorInfo,
)
from nodewatch.client.node import NodeClient
from nodewatch.config import Settings
from nodewatch.http_headers import get_rpc_headers

BLOCK_REWARD = 1 * NANO_PAC_PER_PAC

M = TypeVar("M", bound=RPCModel)


def _parse(model: Type[M], data: Any) -> M:
    """Validate a gateway payload, reporting bad shapes as `ClientError`."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ClientError(f"malformed {model.__name__} payload: {exc.error_count()} invalid field(s)") from exc


class ClientManager:
    def __init__(self, clients: Sequence[NodeClient], reserve_accounts: Optional[Dict[str, int]] = None):
        if not clients:
            raise ValueError("ClientManager needs at least one node client")
        self._clients: Tuple[NodeClient, ...] = tuple(clients)
        self._reserve_accounts: Dict[str, int] = dict(reserve_accounts or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientManager":
        headers = get_rpc_headers(settings.rpc_token)
        clients = [NodeClient(url, timeout=settings.rpc_timeout, headers=headers) for url in settings.rpc_urls]
        return cls(clients, settings.reserve_accounts)

    @property
    def local_client(self) -> NodeClient:
        return self._clients[0]

    def get_blockchain_info(self) -> BlockchainInfo:
        return _parse(BlockchainInfo, self.local_client.get_blockchain_info())

    def get_network_info(self) -> NetworkInfo:
        return _parse(NetworkInfo, self.local_client.get_network_info())

    def get_last_block_time(self) -> Tuple[int, int]:
        """Return (unix seconds, height) of the local node's latest block."""
        info = self.get_blockchain_info()
        block = _parse(BlockInfo, self.local_client.get_block(info.last_block_height))
        return block.block_time, info.last_block_height

    def get_circulating_supply(self) -> int:
        """Circulating supply in NanoPAC.

        Block rewards minted so far, plus what has left the reserve accounts
        since genesis, minus everything currently staked.
        """
        info = self.get_blockchain_info()
        minted = info.last_block_height * BLOCK_REWARD

        released = 0
        for address, allocation in self._reserve_accounts.items():
            account = _parse(AccountInfo, self.local_client.get_account(address))
            released += max(allocation - account.balance, 0)

        return minted + released - info.total_power

    def get_peer_info(self, address: str) -> PeerInfo:
        for client in self._clients:
            try:
                peers = _parse(NetworkInfo, client.get_network_info()).connected_peers
            except ClientError as exc:
                logger.debug(f"skipping {client!r} for peer lookup: {exc}")
                continue
            for peer in peers:
                addrs = peer.get("consensus_addresses") or peer.get("consensusAddresses") or []
                if address in addrs:
                    return _parse(PeerInfo, peer)
        raise NotFoundError("peer does not exist")

    def get_validator_info(self, address: str) -> Optional[ValidatorInfo]:
        """Validator record for `address`, or None if it isn't a validator."""
        try:
            return _parse(ValidatorInfo, self.local_client.get_validator(address))
        except NotFoundError:
            return None

    def close(self) -> None:
        for client in self._clients:
            client.close()


__all__ = ["ClientManager", "BLOCK_REWARD"]
