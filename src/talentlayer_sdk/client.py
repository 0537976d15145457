"""TalentLayer Client.

Single entry point wiring the subgraph, IPFS and ledger clients into the
escrow and platform modules for one network:

    client = TalentLayerClient({
        "chain_id": NetworkEnum.POLYGON,
        "platform_id": 1,
        "rpc_url": "https://polygon-rpc.com",
        "private_key": "0x...",
    })
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, TypedDict

from .config import get_chain_config
from .constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_IPFS_URL
from .escrow import Escrow
from .graphql import GraphQLClient, IndexedDataService
from .ipfs import ContentStore, IPFSClient
from .ledger import LedgerClient, Web3LedgerClient
from .platform import Platform
from .proposals import Proposals
from .services import Services
from .types import NetworkConfig, NetworkEnum

logger = logging.getLogger(__name__)


class IPFSConfig(TypedDict, total=False):
    """IPFS settings for the client."""

    client_id: str
    """Infura project id (optional)"""

    client_secret: str
    """Infura project secret (optional)"""

    base_url: str
    """IPFS API base URL. Default: Infura"""


class TalentLayerClientConfig(TypedDict, total=False):
    """Configuration for TalentLayerClient."""

    chain_id: int
    """Network chain id. Default: 137 (Polygon)"""

    platform_id: int
    """Default platform id used when an operation is not given one"""

    rpc_url: str
    """JSON-RPC endpoint for the ledger client"""

    private_key: str
    """Key signing transactions. Omit for read-only use"""

    subgraph_url: str
    """Override the subgraph URL of the network configuration"""

    ipfs: IPFSConfig

    custom_config: NetworkConfig
    """Network configuration used instead of the built-in table (local networks)"""

    http_timeout: float
    """Timeout for subgraph and IPFS requests in seconds. Default: 30"""


@dataclass(frozen=True)
class ResolvedClientConfig:
    """Client configuration with all defaults applied."""

    chain_id: int
    platform_id: Optional[int]
    rpc_url: Optional[str]
    subgraph_url: str
    network_config: NetworkConfig
    ipfs_base_url: str
    ipfs_client_id: Optional[str]
    ipfs_client_secret: Optional[str]
    http_timeout: float


def resolve_config(config: TalentLayerClientConfig) -> ResolvedClientConfig:
    """Apply defaults and resolve the network configuration.

    Raises:
        UnsupportedNetworkError: If the chain has no configuration and no
            ``custom_config`` was given
    """
    chain_id = int(config.get("chain_id", NetworkEnum.POLYGON))
    network_config = get_chain_config(chain_id, config.get("custom_config"))
    ipfs = config.get("ipfs", {})
    platform_id = config.get("platform_id")

    return ResolvedClientConfig(
        chain_id=chain_id,
        platform_id=int(platform_id) if platform_id is not None else None,
        rpc_url=config.get("rpc_url"),
        subgraph_url=config.get("subgraph_url", network_config.subgraph_url),
        network_config=network_config,
        ipfs_base_url=ipfs.get("base_url", DEFAULT_IPFS_URL),
        ipfs_client_id=ipfs.get("client_id"),
        ipfs_client_secret=ipfs.get("client_secret"),
        http_timeout=float(config.get("http_timeout", DEFAULT_HTTP_TIMEOUT)),
    )


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> TalentLayerClientConfig:
    """Build a client configuration from ``TALENTLAYER_*`` environment variables.

    Reads TALENTLAYER_CHAIN_ID, TALENTLAYER_PLATFORM_ID, TALENTLAYER_RPC_URL,
    TALENTLAYER_PRIVATE_KEY, TALENTLAYER_SUBGRAPH_URL, TALENTLAYER_IPFS_URL,
    TALENTLAYER_IPFS_CLIENT_ID and TALENTLAYER_IPFS_CLIENT_SECRET. Unset
    variables are left out so the client defaults apply.
    """
    env = os.environ if environ is None else environ
    config: TalentLayerClientConfig = {}

    if env.get("TALENTLAYER_CHAIN_ID"):
        config["chain_id"] = int(env["TALENTLAYER_CHAIN_ID"])
    if env.get("TALENTLAYER_PLATFORM_ID"):
        config["platform_id"] = int(env["TALENTLAYER_PLATFORM_ID"])
    if env.get("TALENTLAYER_RPC_URL"):
        config["rpc_url"] = env["TALENTLAYER_RPC_URL"]
    if env.get("TALENTLAYER_PRIVATE_KEY"):
        config["private_key"] = env["TALENTLAYER_PRIVATE_KEY"]
    if env.get("TALENTLAYER_SUBGRAPH_URL"):
        config["subgraph_url"] = env["TALENTLAYER_SUBGRAPH_URL"]

    ipfs: IPFSConfig = {}
    if env.get("TALENTLAYER_IPFS_URL"):
        ipfs["base_url"] = env["TALENTLAYER_IPFS_URL"]
    if env.get("TALENTLAYER_IPFS_CLIENT_ID"):
        ipfs["client_id"] = env["TALENTLAYER_IPFS_CLIENT_ID"]
    if env.get("TALENTLAYER_IPFS_CLIENT_SECRET"):
        ipfs["client_secret"] = env["TALENTLAYER_IPFS_CLIENT_SECRET"]
    if ipfs:
        config["ipfs"] = ipfs

    return config


class TalentLayerClient:
    """TalentLayer client for one network.

    Example:
        ```python
        async with TalentLayerClient(config_from_env()) as client:
            fees = await client.escrow.resolve_fees("1", "2")
            result = await client.escrow.approve("12", "34", meta_evidence_cid)
        ```

    Collaborators can be injected (e.g. a custom LedgerClient); injected
    clients are not closed by :meth:`close`.
    """

    def __init__(
        self,
        config: Optional[TalentLayerClientConfig] = None,
        ledger: Optional[LedgerClient] = None,
        graphql_client: Optional[IndexedDataService] = None,
        content_store: Optional[ContentStore] = None,
    ):
        """Initialize the client.

        Args:
            config: Optional configuration for the client
            ledger: Ledger client to use instead of a Web3LedgerClient
            graphql_client: Subgraph client to use instead of a GraphQLClient
            content_store: IPFS client to use instead of an IPFSClient
        """
        config = config or {}
        self._config = resolve_config(config)
        logger.info("TalentLayer client initialising for chain %s", self._config.chain_id)

        self._owned = []
        if graphql_client is None:
            graphql_client = GraphQLClient(
                self._config.subgraph_url, timeout=self._config.http_timeout
            )
            self._owned.append(graphql_client)
        if content_store is None:
            content_store = IPFSClient(
                client_id=self._config.ipfs_client_id,
                client_secret=self._config.ipfs_client_secret,
                base_url=self._config.ipfs_base_url,
                timeout=self._config.http_timeout,
            )
            self._owned.append(content_store)
        if ledger is None:
            ledger = Web3LedgerClient(
                self._config.network_config,
                rpc_url=self._config.rpc_url,
                private_key=config.get("private_key"),
            )

        self.graphql_client = graphql_client
        self.content_store = content_store
        self.ledger = ledger

        self.proposals = Proposals(graphql_client)
        self.services = Services(graphql_client)
        self.escrow = Escrow(graphql_client, ledger, self._config.network_config)
        self.platform = Platform(
            graphql_client,
            ledger,
            self._config.platform_id,
            content_store,
            config.get("custom_config"),
        )

    @property
    def config(self) -> ResolvedClientConfig:
        return self._config

    async def close(self) -> None:
        """Close HTTP clients created by this client."""
        for owned in self._owned:
            await owned.close()

    async def __aenter__(self) -> "TalentLayerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
