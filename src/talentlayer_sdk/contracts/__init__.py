"""Contract ABIs used by the SDK."""

from .abis import (
    CONTRACT_ABIS,
    ERC20_ABI,
    TALENTLAYER_ESCROW_ABI,
    TALENTLAYER_PLATFORM_ID_ABI,
)

__all__ = [
    "CONTRACT_ABIS",
    "ERC20_ABI",
    "TALENTLAYER_ESCROW_ABI",
    "TALENTLAYER_PLATFORM_ID_ABI",
]
