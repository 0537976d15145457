"""TalentLayer SDK.

Escrow payments, fee computation and platform administration for the
TalentLayer protocol across its supported networks.
"""

from .client import (
    ResolvedClientConfig,
    TalentLayerClient,
    TalentLayerClientConfig,
    config_from_env,
)
from .config import get_chain_config, get_graphql_config, network_config_from_dict
from .constants import FEE_RATE_DIVIDER, NATIVE_TOKEN, ZERO_ADDRESS
from .errors import (
    ApprovalError,
    ApprovalFailedError,
    ApprovalSubmissionError,
    ContentStoreError,
    EscrowCreationError,
    FeeResolutionError,
    IndexerError,
    InvalidArbitratorError,
    InvalidFeeRateError,
    InvalidServiceIdError,
    LedgerError,
    MissingContentIdError,
    NotFoundError,
    ProposalNotFoundError,
    ServiceNotFoundError,
    TalentLayerError,
    TransactionNotFoundError,
    UnsupportedNetworkError,
)
from .escrow import (
    ERC20,
    ClientTransactionResponse,
    Escrow,
    EscrowStage,
    FeeRates,
    calculate_approval_amount,
    calculate_fee,
    fee_rate_from_percentage,
    format_bps,
    format_token_amount,
    parse_token_amount,
)
from .graphql import GraphQLClient
from .ipfs import IPFSClient
from .ledger import LedgerClient, Web3LedgerClient
from .platform import Arbitrator, Platform, get_arbitrators, validate_arbitrator
from .types import (
    ContractInfo,
    EscrowParameters,
    NetworkConfig,
    NetworkEnum,
    Proposal,
    RateToken,
    Service,
    TokenInfo,
    TransactionReceipt,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "TalentLayerClient",
    "TalentLayerClientConfig",
    "ResolvedClientConfig",
    "config_from_env",
    # Configuration
    "get_chain_config",
    "get_graphql_config",
    "network_config_from_dict",
    "FEE_RATE_DIVIDER",
    "NATIVE_TOKEN",
    "ZERO_ADDRESS",
    # Types
    "ContractInfo",
    "EscrowParameters",
    "NetworkConfig",
    "NetworkEnum",
    "Proposal",
    "RateToken",
    "Service",
    "TokenInfo",
    "TransactionReceipt",
    # Escrow
    "ERC20",
    "ClientTransactionResponse",
    "Escrow",
    "EscrowStage",
    "FeeRates",
    "calculate_approval_amount",
    "calculate_fee",
    "fee_rate_from_percentage",
    "format_bps",
    "format_token_amount",
    "parse_token_amount",
    # Platform
    "Arbitrator",
    "Platform",
    "get_arbitrators",
    "validate_arbitrator",
    # Collaborators
    "GraphQLClient",
    "IPFSClient",
    "LedgerClient",
    "Web3LedgerClient",
    # Errors
    "TalentLayerError",
    "UnsupportedNetworkError",
    "NotFoundError",
    "ProposalNotFoundError",
    "ServiceNotFoundError",
    "TransactionNotFoundError",
    "MissingContentIdError",
    "FeeResolutionError",
    "InvalidFeeRateError",
    "InvalidServiceIdError",
    "ApprovalError",
    "ApprovalSubmissionError",
    "ApprovalFailedError",
    "EscrowCreationError",
    "InvalidArbitratorError",
    "IndexerError",
    "ContentStoreError",
    "LedgerError",
]
