import base64
from datetime import timezone
from typing import List, Optional, Tuple

import base58
import pytest

from nodewatch.client import BlockchainInfo, ClientError, NetworkInfo, NotFoundError, PeerInfo, ValidatorInfo
from nodewatch.commands.network import NetworkCommands

# sha2-256 multihash: code 0x12, length 32
PEER_ID_BYTES = bytes([0x12, 0x20]) + bytes(range(32))
PEER_ID_TEXT = base58.b58encode(PEER_ID_BYTES).decode()
VALIDATOR_ADDRESS = "pc1pqpu5tkuctj6ecxjs85f9apm802hhc65amwlc9j"


class FakeClientManager:
    """Stand-in for ClientManager that records which queries were made."""

    def __init__(self):
        self.calls: List[str] = []
        self.last_block: Tuple[int, int] = (1700000000, 12345)
        self.network_info = NetworkInfo(network_name="Mainnet", connected_peers_count=42,
                                        total_sent_bytes=1000, total_received_bytes=2000)
        self.blockchain_info = BlockchainInfo(
            total_validators=2345,
            last_block_height=1_234_567,
            total_power=12_345_678_900_000_000,
            committee_power=1_000_000_000_000_000,
            total_accounts=98765,
        )
        self.circulating_supply = 22_000_000_500_000_000
        self.peer = PeerInfo(
            peer_id=base64.b64encode(PEER_ID_BYTES),
            address="/ip4/1.2.3.4/tcp/21888",
            agent="node=gui/version=v1.5.0",
            moniker="alice",
            consensus_addresses=(VALIDATOR_ADDRESS,),
        )
        self.validator: Optional[ValidatorInfo] = ValidatorInfo(
            number=77,
            availability_score=0.95,
            stake=1_000_500_000_000,
            last_bonding_height=1000,
            last_sortition_height=2000,
        )
        self.errors = {}

    def _call(self, name):
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]

    def get_last_block_time(self):
        self._call("last_block_time")
        return self.last_block

    def get_network_info(self):
        self._call("network_info")
        return self.network_info

    def get_blockchain_info(self):
        self._call("blockchain_info")
        return self.blockchain_info

    def get_circulating_supply(self):
        self._call("circulating_supply")
        return self.circulating_supply

    def get_peer_info(self, address):
        self._call("peer_info")
        if address not in self.peer.consensus_addresses:
            raise NotFoundError("peer does not exist")
        return self.peer

    def get_validator_info(self, address):
        self._call("validator_info")
        return self.validator


@pytest.fixture
def client_mgr():
    return FakeClientManager()


@pytest.fixture
def clock():
    return lambda: 1700000010


@pytest.fixture
def network(client_mgr, clock):
    return NetworkCommands(client_mgr, clock=clock, tz=timezone.utc)


@pytest.fixture
def network_cmd(network):
    return network.get_command()


@pytest.fixture
def client_error():
    return ClientError("node unreachable")
