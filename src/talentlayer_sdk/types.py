"""Shared types for the TalentLayer SDK."""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, List, Literal, Mapping, Optional


class NetworkEnum(IntEnum):
    """Supported networks, keyed by chain id."""

    LOCAL = 1337
    MUMBAI = 80001
    AMOY = 80002
    IEXEC = 134
    POLYGON = 137
    FUJI = 43113


@dataclass(frozen=True)
class ContractInfo:
    """Deployed contract address and the ABI used to talk to it."""

    address: str
    abi: List[Any] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class TokenInfo:
    """Token accepted as a rate token on a network."""

    address: str
    symbol: str
    name: str
    decimals: int


@dataclass(frozen=True)
class EscrowParameters:
    """Escrow contract parameters for a network."""

    admin_fee: int
    """Flat admin fee (wei). Not part of the approval amount."""

    admin_wallet: str
    """Wallet receiving the admin fee."""

    timeout_payment: int
    """Seconds before an unpaid arbitration fee times out."""


@dataclass(frozen=True)
class NetworkConfig:
    """Immutable per-network configuration."""

    network_id: int
    subgraph_url: str
    contracts: Mapping[str, ContractInfo]
    escrow_config: EscrowParameters
    tokens: Mapping[str, TokenInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "contracts", MappingProxyType(dict(self.contracts)))
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    def contract(self, name: str) -> ContractInfo:
        try:
            return self.contracts[name]
        except KeyError:
            raise LookupError(
                f"Contract {name!r} is not configured for network {self.network_id}"
            ) from None

    def token(self, address: str) -> Optional[TokenInfo]:
        """Find a token by address, ignoring checksum casing."""
        wanted = address.lower()
        for token_address, token in self.tokens.items():
            if token_address.lower() == wanted:
                return token
        return None


@dataclass(frozen=True)
class RateToken:
    """Token a proposal is priced in."""

    address: str
    symbol: Optional[str] = None


@dataclass(frozen=True)
class Proposal:
    """Snapshot of an indexed proposal."""

    id: str
    cid: Optional[str]
    seller_id: str
    rate_amount: int
    """Amount in the token's smallest unit."""

    rate_token: RateToken
    service_id: str
    service_platform_id: str
    """Platform on which the service was posted (origin service fee)."""

    platform_id: str
    """Platform through which the proposal was validated (origin validated proposal fee)."""

    status: Optional[str] = None


@dataclass(frozen=True)
class Service:
    """Snapshot of an indexed service."""

    id: str
    platform_id: Optional[str]
    cid: Optional[str] = None
    status: Optional[str] = None
    transaction_id: Optional[str] = None
    """Escrow transaction id, set once a proposal has been approved."""


@dataclass(frozen=True)
class TransactionReceipt:
    """Outcome of a mined transaction."""

    transaction_hash: str
    status: Literal["success", "failure"]
    block_number: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
