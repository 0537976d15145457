"""TalentLayer Escrow Module.

This module provides escrow payments for TalentLayer services.

Key components:
- Fee schedule resolution (protocol + origin platform fees, read fresh)
- Approval amount calculation (integer basis-point arithmetic)
- ERC-20 allowance checks and exact-amount approvals
- Escrow creation, release and reimbursement

Example usage:
    ```python
    from talentlayer_sdk.escrow import calculate_approval_amount, format_token_amount

    # 1 USDC proposal, 5% service platform, 2% proposal platform, 3% protocol
    amount = calculate_approval_amount(
        rate_amount=1_000_000,
        origin_service_fee_rate=500,
        origin_validated_proposal_fee_rate=200,
        protocol_escrow_fee_rate=300,
    )
    assert amount == 1_100_000
    print(format_token_amount(amount, decimals=6))  # "1.1"
    ```
"""

from .types import ClientTransactionResponse, EscrowStage, FeeRates
from .erc20 import ERC20
from .escrow import Escrow
from .utils import (
    calculate_approval_amount,
    calculate_fee,
    fee_rate_from_percentage,
    format_bps,
    format_token_amount,
    parse_token_amount,
)

__all__ = [
    # Types
    "ClientTransactionResponse",
    "EscrowStage",
    "FeeRates",
    # Flow
    "ERC20",
    "Escrow",
    # Utils
    "calculate_approval_amount",
    "calculate_fee",
    "fee_rate_from_percentage",
    "format_bps",
    "format_token_amount",
    "parse_token_amount",
]
