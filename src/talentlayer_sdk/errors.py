"""Exceptions raised by the TalentLayer SDK.

Every error derives from :class:`TalentLayerError` so callers can catch the
whole family at once, while each failing stage of an escrow operation keeps
its own type (e.g. "approval failed" vs "escrow creation failed").
"""

from typing import Any, Optional


class TalentLayerError(Exception):
    """Base class for all SDK errors.

    ``stage`` is set by ``Escrow.approve`` to the
    :class:`~talentlayer_sdk.escrow.types.EscrowStage` at which the flow stopped.
    """

    stage: Any = None


class UnsupportedNetworkError(TalentLayerError):
    """Raised when no configuration exists for a network id."""

    def __init__(self, network_id: Any, message: Optional[str] = None):
        self.network_id = network_id
        super().__init__(message or f"Unsupported network: {network_id}")


class NotFoundError(TalentLayerError):
    """An entity required by an operation is not indexed."""


class ProposalNotFoundError(NotFoundError):
    def __init__(self, proposal_id: str):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal not found: {proposal_id}")


class ServiceNotFoundError(NotFoundError):
    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"Service not found: {service_id}")


class TransactionNotFoundError(NotFoundError):
    """The service has no associated escrow transaction."""

    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"Transaction id not found for service {service_id}")


class EscrowStageError(TalentLayerError):
    """Base class for failures specific to the escrow approval flow."""


class InvalidServiceIdError(EscrowStageError, ValueError):
    """The service id is not a numeric TalentLayer id."""

    def __init__(self, service_id: Any):
        self.service_id = service_id
        super().__init__(f"Invalid service id: {service_id!r}")


class MissingContentIdError(EscrowStageError):
    def __init__(self, proposal_id: str):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal cid not found: {proposal_id}")


class FeeResolutionError(EscrowStageError):
    """The fee schedule returned by the indexer is incomplete."""


class InvalidFeeRateError(EscrowStageError, ValueError):
    """A fee rate or amount is negative or not an integer."""


class ApprovalError(EscrowStageError):
    """Base class for ERC-20 approval failures."""


class ApprovalSubmissionError(ApprovalError):
    """The approve transaction could not be submitted."""


class ApprovalFailedError(ApprovalError):
    """The approve transaction was submitted but not confirmed successfully."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class EscrowCreationError(EscrowStageError):
    """The createTransaction call was rejected or failed to submit."""


class InvalidArbitratorError(TalentLayerError, ValueError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid Arbitrator: {address}")


class IndexerError(TalentLayerError):
    """The subgraph request failed at the transport level."""


class ContentStoreError(TalentLayerError):
    """Uploading content to IPFS failed."""


class LedgerError(TalentLayerError):
    """A contract read or write failed on the RPC node."""

    def __init__(self, message: str, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(message)
