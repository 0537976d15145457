"""Escrow Types for TalentLayer escrow."""

from dataclasses import dataclass
from enum import Enum


class EscrowStage(str, Enum):
    """States of the escrow approval flow.

    DONE is the only success state; every error raised by
    ``Escrow.approve`` carries the stage at which it stopped.
    """

    START = "start"
    BRANCH_ON_TOKEN = "branch_on_token"
    RESOLVE_FEES = "resolve_fees"
    ENSURE_ALLOWANCE = "ensure_allowance"
    DIRECT_CREATE = "direct_create"
    DONE = "done"


@dataclass(frozen=True)
class FeeRates:
    """Current fee schedule for a (service platform, proposal platform) pair."""

    protocol_escrow_fee_rate: int
    """Protocol escrow fee in basis points."""

    origin_service_fee_rate: int
    """Fee of the platform where the service was posted."""

    origin_validated_proposal_fee_rate: int
    """Fee of the platform where the proposal was validated."""


@dataclass(frozen=True)
class ClientTransactionResponse:
    """Result of a write that references stored content."""

    tx: str
    """Transaction hash."""

    cid: str
    """Content identifier referenced by the transaction."""
