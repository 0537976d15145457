"""Network configuration registry.

Static contract addresses, escrow parameters and rate tokens for every
supported network. Lookups are pure: a caller-supplied custom configuration
always wins, otherwise the static table is used.
"""

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from eth_utils import is_address, to_checksum_address

from .constants import (
    DEFAULT_TIMEOUT_PAYMENT,
    TALENTLAYER_ARBITRATOR,
    TALENTLAYER_ESCROW,
    TALENTLAYER_ID,
    TALENTLAYER_PLATFORM_ID,
    TALENTLAYER_REVIEW,
    TALENTLAYER_SERVICE,
    ZERO_ADDRESS,
)
from .contracts import CONTRACT_ABIS
from .errors import UnsupportedNetworkError
from .types import ContractInfo, EscrowParameters, NetworkConfig, NetworkEnum, TokenInfo


def _token(address: str, symbol: str, name: str, decimals: int) -> TokenInfo:
    return TokenInfo(
        address=to_checksum_address(address),
        symbol=symbol,
        name=name,
        decimals=decimals,
    )


def _network(
    network_id: NetworkEnum,
    subgraph_url: str,
    addresses: Mapping[str, str],
    admin_wallet: str,
    tokens: Tuple[TokenInfo, ...],
) -> NetworkConfig:
    return NetworkConfig(
        network_id=network_id,
        subgraph_url=subgraph_url,
        contracts={
            name: ContractInfo(
                address=to_checksum_address(address), abi=CONTRACT_ABIS[name]
            )
            for name, address in addresses.items()
        },
        escrow_config=EscrowParameters(
            admin_fee=0,
            admin_wallet=to_checksum_address(admin_wallet),
            timeout_payment=DEFAULT_TIMEOUT_PAYMENT,
        ),
        tokens={token.address: token for token in tokens},
    )


AMOY = _network(
    NetworkEnum.AMOY,
    "https://api.studio.thegraph.com/query/41228/tl-graph-amoy/v0.0.1",
    {
        TALENTLAYER_ID: "0xBe0d91F2371e23b9A26Fb8949E041A65dD0aDe83",
        TALENTLAYER_SERVICE: "0x5394632Fe8044BF3c3eF6fBD30d1121d5d796542",
        TALENTLAYER_REVIEW: "0x194D3a30Ad6274F169c78D64A538a8F472c47819",
        TALENTLAYER_ESCROW: "0x466e65231DBe87b184c7cEeE8A319b4aB117915B",
        TALENTLAYER_PLATFORM_ID: "0xbE56916C64f80040d46Ea5B32E1e851cE752cD3f",
        TALENTLAYER_ARBITRATOR: "0x0F39E0ffEaBE0C100768F16988F0c9405428E2D8",
    },
    "0xC01FcDfDE3B2ABA1eab76731493C617FfAED2F10",
    (
        _token(ZERO_ADDRESS, "MATIC", "Matic", 18),
        _token("0xe6b8a5CF854791412c1f6EFC7CAf629f5Df1c747", "USDC", "USDC Stablecoin", 6),
    ),
)

MUMBAI = _network(
    NetworkEnum.MUMBAI,
    "https://api.thegraph.com/subgraphs/name/talentlayer/talent-layer-mumbai",
    {
        TALENTLAYER_ID: "0x3F87289e6Ec2D05C32d8A74CCfb30773fF549306",
        TALENTLAYER_SERVICE: "0x27ED516dC1df64b4c1517A64aa2Bb72a434a5A6D",
        TALENTLAYER_REVIEW: "0x050F59E1871d3B7ca97e6fb9DCE64b3818b14B18",
        TALENTLAYER_ESCROW: "0x4bE920eC3e8552292B2147480111063E0dc36872",
        TALENTLAYER_PLATFORM_ID: "0xEFD8dbC421380Ee04BAdB69216a0FD97F64CbFD4",
        TALENTLAYER_ARBITRATOR: "0x2CA01a0058cfB3cc4755a7773881ea88eCfBba7C",
    },
    "0xC01FcDfDE3B2ABA1eab76731493C617FfAED2F10",
    (
        _token(ZERO_ADDRESS, "MATIC", "Matic", 18),
        _token("0xe6b8a5CF854791412c1f6EFC7CAf629f5Df1c747", "USDC", "USDC Stablecoin", 6),
    ),
)

IEXEC = _network(
    NetworkEnum.IEXEC,
    "https://thegraph-sandbox.iex.ec/subgraphs/name/users/talentLayer",
    {
        TALENTLAYER_ID: "0xC51537E03f56650C63A9Feca4cCb5a039c77c822",
        TALENTLAYER_SERVICE: "0x45E8F869Fd316741A9316f39bF09AD03Df88496f",
        TALENTLAYER_REVIEW: "0x6A5BF452108DA389B7B38284E871f538671Ad375",
        TALENTLAYER_ESCROW: "0x7A534501a6e63448EBC691f27B27B76d4F9b7E17",
        TALENTLAYER_PLATFORM_ID: "0x05D8A2E01EB06c284ECBae607A2d0c2BE946Bf49",
        TALENTLAYER_ARBITRATOR: "0x24cEd045b50cF811862B1c33dC6B1fbC8358F521",
    },
    "0x2E6f7222d4d7A71B05E7C35389d23C3dB400851f",
    (
        _token(ZERO_ADDRESS, "RLC", "iExec RLC", 18),
        _token("0xe62C28709E4F19Bae592a716b891A9B76bf897E4", "SERC20", "SimpleERC20", 18),
    ),
)

POLYGON = _network(
    NetworkEnum.POLYGON,
    "https://api.thegraph.com/subgraphs/name/talentlayer/talentlayer-polygon",
    {
        TALENTLAYER_ID: "0xD7D1B2b0A665F03618cb9a45Aa3070f789cb91f2",
        TALENTLAYER_SERVICE: "0xae8Bba1a403816568230d92099ccB87f41BbcA78",
        TALENTLAYER_REVIEW: "0x7bBC20c8Fcb75A126810161DFB1511f6D3B1f2bE",
        TALENTLAYER_ESCROW: "0x21C716673897f4a2A3c12053f3973F51Ce7b0cf6",
        TALENTLAYER_PLATFORM_ID: "0x09FF07297d48eD9aD870caCE4b33BF30869C1D17",
        TALENTLAYER_ARBITRATOR: "0x4502E695A747F1b382a16D6C8AE3FD94DA78e7a0",
    },
    "0x2E6f7222d4d7A71B05E7C35389d23C3dB400851f",
    (
        _token(ZERO_ADDRESS, "MATIC", "Matic", 18),
        _token("0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174", "USDC", "USDC", 6),
        _token("0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619", "WETH", "WETH", 18),
    ),
)

FUJI = _network(
    NetworkEnum.FUJI,
    "https://api.studio.thegraph.com/query/41228/tl-graph-fuji/version/latest",
    {
        TALENTLAYER_ID: "0x11BF027d41011a050c77E3BE7fB1942500C29928",
        TALENTLAYER_SERVICE: "0x037a42146f7803Ac85Eeb201A8aab483E10c3E1A",
        TALENTLAYER_REVIEW: "0x5b1e55ca26f8128155f35a0c5804e292B1b66bb7",
        TALENTLAYER_ESCROW: "0x2D11f75E4af6626bA457532429D5FA6bF18ac011",
        TALENTLAYER_PLATFORM_ID: "0x5582d6493449a9c8aE353715eaE55794056dBF19",
        # No arbitrator deployed on Fuji yet
        TALENTLAYER_ARBITRATOR: ZERO_ADDRESS,
    },
    "0x754edfB906252B304f89c59c61f4368028bdcE6c",
    (
        _token(ZERO_ADDRESS, "AVAX", "Avax", 18),
        _token("0xAF82969ECF299c1f1Bb5e1D12dDAcc9027431160", "USDC", "USDC Stablecoin", 6),
    ),
)

# LOCAL is deliberately absent: local deployments must pass a custom config.
CHAINS: Dict[NetworkEnum, NetworkConfig] = {
    NetworkEnum.AMOY: AMOY,
    NetworkEnum.MUMBAI: MUMBAI,
    NetworkEnum.IEXEC: IEXEC,
    NetworkEnum.POLYGON: POLYGON,
    NetworkEnum.FUJI: FUJI,
}


def get_chain_config(
    network_id: Union[NetworkEnum, int],
    custom_config: Optional[NetworkConfig] = None,
) -> NetworkConfig:
    """Resolve the configuration for a network.

    Args:
        network_id: Chain id of the network
        custom_config: Configuration to use instead of the static table

    Returns:
        NetworkConfig for the network (``custom_config`` verbatim when given)

    Raises:
        UnsupportedNetworkError: If no static configuration exists and no
            custom configuration was supplied
    """
    if custom_config is not None:
        return custom_config

    try:
        network = NetworkEnum(network_id)
    except ValueError:
        raise UnsupportedNetworkError(network_id) from None

    config = CHAINS.get(network)
    if config is None:
        raise UnsupportedNetworkError(
            network_id,
            f"Network {network.name} ({int(network)}) requires a custom configuration",
        )
    return config


def get_graphql_config(
    network_id: Union[NetworkEnum, int],
    custom_config: Optional[NetworkConfig] = None,
) -> Tuple[int, str]:
    """Return ``(chain_id, subgraph_url)`` for the indexer of a network."""
    config = get_chain_config(network_id, custom_config)
    return int(network_id), config.subgraph_url


def _require_address(value: Any, field: str) -> str:
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"Invalid {field}: {value!r}")
    return to_checksum_address(value)


def network_config_from_dict(data: Mapping[str, Any]) -> NetworkConfig:
    """Build a NetworkConfig from a JSON-style mapping.

    The mapping uses the same keys as the TalentLayer dev configuration::

        {
            "networkId": 1337,
            "subgraphUrl": "http://localhost:8020/...",
            "contracts": {"talentLayerEscrow": {"address": "0x...", "abi": [...]}},
            "escrowConfig": {"adminFee": "0", "adminWallet": "0x...", "timeoutPayment": 604800},
            "tokens": {"0x...": {"symbol": "ETH", "name": "Ether", "decimals": 18}},
        }

    A contract without an ``abi`` gets the SDK's bundled ABI for that name.

    Raises:
        ValueError: If a required key is missing, an entry is malformed or an
            address is invalid
    """
    try:
        return _parse_network_config(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValueError(f"Invalid network configuration: {e}") from e


def _parse_network_config(data: Mapping[str, Any]) -> NetworkConfig:
    network_id = int(data["networkId"])
    subgraph_url = str(data["subgraphUrl"])
    raw_contracts = data["contracts"]
    raw_escrow = data.get("escrowConfig") or {}
    raw_tokens = data.get("tokens") or {}

    contracts = {}
    for name, entry in raw_contracts.items():
        contracts[name] = ContractInfo(
            address=_require_address(entry.get("address"), f"{name} address"),
            abi=entry.get("abi") or CONTRACT_ABIS.get(name, []),
        )

    escrow_config = EscrowParameters(
        admin_fee=int(raw_escrow.get("adminFee", 0)),
        admin_wallet=_require_address(
            raw_escrow.get("adminWallet", ZERO_ADDRESS), "adminWallet"
        ),
        timeout_payment=int(raw_escrow.get("timeoutPayment", DEFAULT_TIMEOUT_PAYMENT)),
    )

    tokens = {}
    for address, entry in raw_tokens.items():
        token_address = _require_address(entry.get("address", address), "token address")
        tokens[token_address] = TokenInfo(
            address=token_address,
            symbol=entry["symbol"],
            name=entry.get("name", entry["symbol"]),
            decimals=int(entry.get("decimals", 18)),
        )

    return NetworkConfig(
        network_id=network_id,
        subgraph_url=subgraph_url,
        contracts=contracts,
        escrow_config=escrow_config,
        tokens=tokens,
    )
