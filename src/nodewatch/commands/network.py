"""network command - node info, network status and health checks.

Output labels and order match the chat bot this command group replaces, with
one addition: `node-info` for a registered validator also prints
`Last Bonding Height` and `Last Sortition Height` after the stake line.
Non-validators get the original three zero-filled validator lines only.
"""

import time
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Optional

from nodewatch.amount import to_whole_pac
from nodewatch.client import ClientError, ClientManager
from nodewatch.commands.base import AppID, Command, CommandArg, CommandResult, all_app_ids
from nodewatch.formatting import format_number, format_score, format_timestamp
from nodewatch.geoip import extract_ip_from_multiaddr, get_geo_ip
from nodewatch.peer_id import InvalidPeerIDError, peer_id_from_bytes

COMMAND_NAME = "network"
NODE_INFO_COMMAND_NAME = "node-info"
STATUS_COMMAND_NAME = "status"
HEALTH_COMMAND_NAME = "health"

# Max age in seconds of the last block for the network to count as healthy.
HEALTHY_BLOCK_AGE = 15
# PIP-19 minimum availability score.
PIP19_THRESHOLD = 0.9

STATUS_NOTE = "> Note📝: This info is from one random network node. Non-blockchain data may not be consistent."


@dataclass(frozen=True)
class ValidatorData:
    number: int
    availability_score: float
    stake: int  # whole PAC
    last_bonding_height: int
    last_sortition_height: int


@dataclass(frozen=True)
class NodeInfo:
    peer_id: str
    ip_address: str
    agent: str
    moniker: str
    country: str = ""
    city: str = ""
    region_name: str = ""
    time_zone: str = ""
    isp: str = ""
    validator: Optional[ValidatorData] = None


@dataclass(frozen=True)
class NetStatus:
    network_name: str
    connected_peers_count: int
    validators_count: int
    total_bytes_sent: int
    total_bytes_received: int
    current_block_height: int
    total_network_power: int  # whole PAC
    total_committee_power: int  # whole PAC
    total_accounts: int
    circulating_supply: int  # whole PAC


def pip19_score(score: float) -> str:
    mark = "✅" if score >= PIP19_THRESHOLD else "⚠️"
    return f"{format_score(score)}{mark}"


def is_healthy(now: int, last_block_time: int) -> bool:
    return now - last_block_time <= HEALTHY_BLOCK_AGE


def render_health(now: int, last_block_time: int, height: int, tz: Optional[tzinfo] = None) -> str:
    status = "Healthy✅" if is_healthy(now, last_block_time) else "UnHealthy❌"
    return (
        f"Network is {status}\n"
        f"CurrentTime: {format_timestamp(now, tz)}\n"
        f"LastBlockTime: {format_timestamp(last_block_time, tz)}\n"
        f"Time Diff: {now - last_block_time}\n"
        f"Last Block Height: {format_number(height)}"
    )


def render_status(net: NetStatus) -> str:
    return (
        f"Network Name: {net.network_name}\n"
        f"Connected Peers: {format_number(net.connected_peers_count)}\n"
        f"Validators Count: {format_number(net.validators_count)}\n"
        f"Accounts Count: {format_number(net.total_accounts)}\n"
        f"Current Block Height: {format_number(net.current_block_height)}\n"
        f"Total Power: {format_number(net.total_network_power)} PAC\n"
        f"Total Committee Power: {format_number(net.total_committee_power)} PAC\n"
        f"Circulating Supply: {format_number(net.circulating_supply)} PAC\n"
        f"\n{STATUS_NOTE}"
    )


def render_node_info(info: NodeInfo) -> str:
    text = (
        f"PeerID: {info.peer_id}\n"
        f"IP Address: {info.ip_address}\n"
        f"Agent: {info.agent}\n"
        f"Moniker: {info.moniker}\n"
        f"Country: {info.country}\n"
        f"City: {info.city}\n"
        f"Region Name: {info.region_name}\n"
        f"TimeZone: {info.time_zone}\n"
        f"ISP: {info.isp}\n"
        f"\nValidator Info🔍\n"
    )
    val = info.validator
    if val is None:
        return text + f"Number: 0\nPIP-19 Score: {pip19_score(0.0)}\nStake: 0 PAC's\n"
    return text + (
        f"Number: {format_number(val.number)}\n"
        f"PIP-19 Score: {pip19_score(val.availability_score)}\n"
        f"Stake: {format_number(val.stake)} PAC's\n"
        f"Last Bonding Height: {format_number(val.last_bonding_height)}\n"
        f"Last Sortition Height: {format_number(val.last_sortition_height)}\n"
    )


class NetworkCommands:
    """Handlers for the `network` command group.

    Args:
        client_mgr: Client manager the queries go through
        clock: Returns the current unix time; injectable for tests
        tz: Timezone for rendered timestamps (local time if None)
        geoip_url: Geo-IP endpoint override
    """

    def __init__(self, client_mgr: ClientManager, clock: Callable[[], float] = time.time,
                 tz: Optional[tzinfo] = None, geoip_url: Optional[str] = None):
        self.client_mgr = client_mgr
        self.clock = clock
        self.tz = tz
        self.geoip_url = geoip_url

    def get_command(self) -> Command:
        app_ids = all_app_ids()
        return Command(
            name=COMMAND_NAME,
            desc="Network related commands",
            app_ids=app_ids,
            sub_commands=(
                Command(
                    name=HEALTH_COMMAND_NAME,
                    desc="Checking network health status",
                    app_ids=app_ids,
                    handler=self.network_health_handler,
                ),
                Command(
                    name=NODE_INFO_COMMAND_NAME,
                    desc="View the information of a node",
                    help="Provide your validator address on the specific node to get the validator and node info",
                    args=(CommandArg(name="validator_address", desc="Your validator address"),),
                    app_ids=app_ids,
                    handler=self.node_info_handler,
                ),
                Command(
                    name=STATUS_COMMAND_NAME,
                    desc="Network statistics",
                    app_ids=app_ids,
                    handler=self.network_status_handler,
                ),
            ),
        )

    def network_health_handler(self, cmd: Command, _app_id: AppID, _input: str, *_args: str) -> CommandResult:
        try:
            last_block_time, last_block_height = self.client_mgr.get_last_block_time()
        except ClientError as exc:
            return cmd.error_result(exc)

        now = int(self.clock())
        return cmd.successful_result(render_health(now, last_block_time, last_block_height, self.tz))

    def network_status_handler(self, cmd: Command, _app_id: AppID, _input: str, *_args: str) -> CommandResult:
        try:
            net_info = self.client_mgr.get_network_info()
            chain_info = self.client_mgr.get_blockchain_info()
        except ClientError as exc:
            return cmd.error_result(exc)

        try:
            supply = self.client_mgr.get_circulating_supply()
        except ClientError:
            supply = 0

        net = NetStatus(
            network_name=net_info.network_name,
            connected_peers_count=net_info.connected_peers_count,
            validators_count=chain_info.total_validators,
            total_bytes_sent=net_info.bytes_sent,
            total_bytes_received=net_info.bytes_received,
            current_block_height=chain_info.last_block_height,
            total_network_power=to_whole_pac(chain_info.total_power),
            total_committee_power=to_whole_pac(chain_info.committee_power),
            total_accounts=chain_info.total_accounts,
            circulating_supply=to_whole_pac(supply),
        )
        return cmd.successful_result(render_status(net))

    def node_info_handler(self, cmd: Command, _app_id: AppID, _input: str, *args: str) -> CommandResult:
        val_address = args[0]

        try:
            peer = self.client_mgr.get_peer_info(val_address)
        except ClientError as exc:
            return cmd.error_result(exc)

        try:
            peer_id = peer_id_from_bytes(peer.peer_id)
        except InvalidPeerIDError as exc:
            return cmd.error_result(exc)

        geo = get_geo_ip(extract_ip_from_multiaddr(peer.address), url=self.geoip_url)

        # Non-validator nodes are expected; they just have no validator section data.
        try:
            val = self.client_mgr.get_validator_info(val_address)
        except ClientError:
            val = None

        validator = None
        if val is not None:
            validator = ValidatorData(
                number=val.number,
                availability_score=val.availability_score,
                stake=to_whole_pac(val.stake),
                last_bonding_height=val.last_bonding_height,
                last_sortition_height=val.last_sortition_height,
            )

        info = NodeInfo(
            peer_id=peer_id,
            ip_address=peer.address,
            agent=peer.agent,
            moniker=peer.moniker,
            country=geo.country_name,
            city=geo.city,
            region_name=geo.region_name,
            time_zone=geo.time_zone,
            isp=geo.isp,
            validator=validator,
        )
        return cmd.successful_result(render_node_info(info))
