"""Typed views over the JSON-RPC responses the commands consume.

The gateways serialise protobuf messages as JSON: 64-bit integers arrive as
strings, bytes as base64, and field names may be snake_case or camelCase
depending on the gateway version. Zero values are usually omitted, hence the
defaults.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Base64Bytes, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RPCModel(BaseModel):
    """Accepts both snake_case and camelCase keys; ignores unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PeerInfo(RPCModel):
    peer_id: Base64Bytes
    address: str = ""
    agent: str = ""
    moniker: str = ""
    consensus_addresses: Tuple[str, ...] = ()


class CounterInfo(RPCModel):
    bytes: int = 0
    bundles: int = 0


class MetricInfo(RPCModel):
    total_sent: CounterInfo = CounterInfo()
    total_received: CounterInfo = CounterInfo()


class NetworkInfo(RPCModel):
    network_name: str = ""
    connected_peers_count: int = 0
    # Older gateways report the byte counters at top level.
    total_sent_bytes: int = 0
    total_received_bytes: int = 0
    metric_info: Optional[MetricInfo] = None
    connected_peers: List[Dict[str, Any]] = []

    @property
    def bytes_sent(self) -> int:
        if self.total_sent_bytes or self.metric_info is None:
            return self.total_sent_bytes
        return self.metric_info.total_sent.bytes

    @property
    def bytes_received(self) -> int:
        if self.total_received_bytes or self.metric_info is None:
            return self.total_received_bytes
        return self.metric_info.total_received.bytes


class BlockchainInfo(RPCModel):
    total_validators: int = 0
    last_block_height: int = 0
    total_power: int = 0
    committee_power: int = 0
    total_accounts: int = 0


class BlockInfo(RPCModel):
    height: int = 0
    block_time: int = 0


class AccountInfo(RPCModel):
    address: str = ""
    balance: int = 0


class ValidatorInfo(RPCModel):
    number: int = 0
    availability_score: float = 0.0
    stake: int = 0
    last_bonding_height: int = 0
    last_sortition_height: int = 0


__all__ = [
    "PeerInfo",
    "NetworkInfo",
    "MetricInfo",
    "CounterInfo",
    "BlockchainInfo",
    "BlockInfo",
    "AccountInfo",
    "ValidatorInfo",
]
