"""TalentLayer Escrow.

Creates, releases and reimburses escrow transactions. Creating an escrow
for an ERC-20 proposal is a small state machine:

1. START             fetch the proposal, check it has a cid
2. BRANCH_ON_TOKEN   native token goes straight to DIRECT_CREATE
3. RESOLVE_FEES      read the current fee rates, compute the approval amount
4. ENSURE_ALLOWANCE  approve exactly that amount if the allowance is short
5. DIRECT_CREATE     call ``createTransaction`` on the escrow contract
6. DONE

Every failure is terminal and carries the stage it happened in. A confirmed
approval is kept even when the escrow creation fails afterwards.
"""

import logging
from typing import Any, Dict, List, Optional

from ..constants import NATIVE_TOKEN, TALENTLAYER_ESCROW
from ..errors import (
    EscrowCreationError,
    FeeResolutionError,
    InvalidServiceIdError,
    MissingContentIdError,
    ProposalNotFoundError,
    ServiceNotFoundError,
    TalentLayerError,
    TransactionNotFoundError,
)
from ..graphql import IndexedDataService
from ..ledger import LedgerClient
from ..proposals import Proposals
from ..services import Services
from ..types import NetworkConfig, Proposal
from .erc20 import ERC20
from .queries import get_payments_by_service, get_protocol_and_platforms_fees
from .types import ClientTransactionResponse, EscrowStage, FeeRates
from .utils import calculate_approval_amount

logger = logging.getLogger(__name__)


def _fee_rate(record: Dict[str, Any], field: str) -> int:
    value = record.get(field)
    if value is None:
        raise FeeResolutionError(f"Fee schedule is missing {field}")
    # Subgraph BigInts arrive as strings, Ints as numbers; never truncate
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise FeeResolutionError(f"Fee schedule has a malformed {field}: {value!r}")
    try:
        return int(value)
    except ValueError:
        raise FeeResolutionError(f"Fee schedule has a malformed {field}: {value!r}") from None


def _parse_service_id(service_id: Any) -> int:
    if isinstance(service_id, bool):
        raise InvalidServiceIdError(service_id)
    if isinstance(service_id, int):
        parsed = service_id
    elif isinstance(service_id, str) and service_id.isascii() and service_id.isdecimal():
        parsed = int(service_id)
    else:
        raise InvalidServiceIdError(service_id)
    if parsed <= 0:
        raise InvalidServiceIdError(service_id)
    return parsed


def _require_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise ValueError(f"Invalid amount: {amount!r}. Must be a non-negative integer")


class Escrow:
    """Release and reimburse payments using TalentLayer escrow.

    Example:
        ```python
        escrow = Escrow(graphql_client, ledger, get_chain_config(NetworkEnum.POLYGON))

        # Buyer validates a proposal: approves tokens if needed, then locks funds
        result = await escrow.approve("12", "34", meta_evidence_cid)
        print(result.tx, result.cid)

        # Later, release part of the payment to the seller
        tx = await escrow.release("12", 500_000, user_id=7)
        ```
    """

    def __init__(
        self,
        graphql_client: IndexedDataService,
        ledger: LedgerClient,
        network_config: NetworkConfig,
    ):
        self.graphql_client = graphql_client
        self.ledger = ledger
        self.network_config = network_config
        self.proposals = Proposals(graphql_client)
        self.services = Services(graphql_client)
        self.erc20 = ERC20(ledger, network_config.contract(TALENTLAYER_ESCROW).address)

    async def approve(
        self,
        service_id: str,
        proposal_id: str,
        meta_evidence_cid: str,
    ) -> ClientTransactionResponse:
        """Validate a proposal by locking its payment in escrow.

        Args:
            service_id: Service the proposal answers
            proposal_id: Proposal to validate
            meta_evidence_cid: IPFS cid of the dispute meta-evidence

        Returns:
            Hash of the createTransaction call and the proposal cid

        Raises:
            InvalidServiceIdError: If service_id is not a positive integer id;
                raised before anything is read or written
            ProposalNotFoundError: If the proposal is not indexed
            MissingContentIdError: If the proposal has no cid
            FeeResolutionError: If the fee schedule is incomplete
            InvalidFeeRateError: If a fee rate or the rate amount is invalid
            ApprovalSubmissionError: If the token approval could not be sent
            ApprovalFailedError: If the token approval was not confirmed
            EscrowCreationError: If createTransaction was rejected or not sent
        """
        stage = EscrowStage.START
        try:
            service_number = _parse_service_id(service_id)
            proposal = await self.proposals.get_one(proposal_id)
            if proposal is None:
                raise ProposalNotFoundError(proposal_id)
            if not proposal.cid:
                raise MissingContentIdError(proposal_id)

            stage = EscrowStage.BRANCH_ON_TOKEN
            value: Optional[int] = None
            if self._is_native(proposal):
                value = proposal.rate_amount
                logger.debug("Native token proposal, creating escrow for %s", value)
            else:
                stage = EscrowStage.RESOLVE_FEES
                amount = await self._approval_amount(proposal)

                stage = EscrowStage.ENSURE_ALLOWANCE
                await self.erc20.ensure_allowance(proposal.rate_token.address, amount)

            stage = EscrowStage.DIRECT_CREATE
            tx = await self._create_transaction(
                service_number, proposal, meta_evidence_cid, value
            )
        except TalentLayerError as e:
            e.stage = stage
            raise

        logger.info("Escrow transaction created for proposal %s: %s", proposal_id, tx)
        return ClientTransactionResponse(tx=tx, cid=proposal.cid)

    def _is_native(self, proposal: Proposal) -> bool:
        return proposal.rate_token.address.lower() == NATIVE_TOKEN.lower()

    async def _approval_amount(self, proposal: Proposal) -> int:
        fees = await self.resolve_fees(proposal.service_platform_id, proposal.platform_id)
        logger.debug("Fetched protocol and platform fees: %s", fees)

        amount = calculate_approval_amount(
            proposal.rate_amount,
            fees.origin_service_fee_rate,
            fees.origin_validated_proposal_fee_rate,
            fees.protocol_escrow_fee_rate,
        )
        logger.debug("Escrow seeking approval for amount: %s", amount)
        return amount

    async def _create_transaction(
        self,
        service_id: int,
        proposal: Proposal,
        meta_evidence_cid: str,
        value: Optional[int],
    ) -> str:
        try:
            args = [service_id, int(proposal.seller_id), meta_evidence_cid, proposal.cid]
            tx = await self.ledger.write_contract(
                TALENTLAYER_ESCROW, "createTransaction", args, value
            )
        except Exception as e:
            raise EscrowCreationError(f"Error creating transaction: {e}") from e

        if not tx:
            raise EscrowCreationError("Error creating transaction: no hash returned")
        return tx

    async def release(self, service_id: str, amount: int, user_id: int) -> str:
        """Release ``amount`` of the escrowed payment to the seller.

        Args:
            service_id: Service whose escrow transaction is released
            amount: Amount in the token's smallest unit
            user_id: TalentLayer id of the buyer releasing the funds

        Returns:
            Transaction hash

        Raises:
            ServiceNotFoundError: If the service is not indexed
            TransactionNotFoundError: If the service has no escrow transaction
        """
        return await self._settle("release", service_id, amount, user_id)

    async def reimburse(self, service_id: str, amount: int, user_id: int) -> str:
        """Reimburse ``amount`` of the escrowed payment to the buyer.

        Same arguments and errors as :meth:`release`; ``user_id`` is the seller.
        """
        return await self._settle("reimburse", service_id, amount, user_id)

    async def _settle(self, method: str, service_id: str, amount: int, user_id: int) -> str:
        _require_amount(amount)

        service = await self.services.get_one(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        if not service.transaction_id:
            raise TransactionNotFoundError(service_id)

        logger.info("%s %s on transaction %s", method, amount, service.transaction_id)
        return await self.ledger.write_contract(
            TALENTLAYER_ESCROW,
            method,
            [int(user_id), int(service.transaction_id), amount],
        )

    async def get_protocol_and_platforms_fees(
        self,
        origin_service_platform_id: str,
        origin_validated_proposal_platform_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Raw fee records from the subgraph, or None when the response has no data."""
        query = get_protocol_and_platforms_fees(
            origin_service_platform_id, origin_validated_proposal_platform_id
        )
        response = await self.graphql_client.get(query)
        return (response or {}).get("data") or None

    async def resolve_fees(
        self,
        origin_service_platform_id: str,
        origin_validated_proposal_platform_id: str,
    ) -> FeeRates:
        """Fetch the current fee rates for a service/proposal platform pair.

        Never cached: rates may change between calls.

        Raises:
            FeeResolutionError: If the protocol record or either platform record
                is missing, or a rate is absent or malformed
        """
        data = await self.get_protocol_and_platforms_fees(
            origin_service_platform_id, origin_validated_proposal_platform_id
        )
        if not data:
            raise FeeResolutionError("Unable to fetch fees")

        protocols = data.get("protocols") or []
        if not protocols:
            raise FeeResolutionError("Protocol fee record not found")

        service_platform = data.get("servicePlatform")
        if not service_platform:
            raise FeeResolutionError(f"Platform {origin_service_platform_id} not found")

        proposal_platform = data.get("proposalPlatform")
        if not proposal_platform:
            raise FeeResolutionError(
                f"Platform {origin_validated_proposal_platform_id} not found"
            )

        return FeeRates(
            protocol_escrow_fee_rate=_fee_rate(protocols[0], "protocolEscrowFeeRate"),
            origin_service_fee_rate=_fee_rate(service_platform, "originServiceFeeRate"),
            origin_validated_proposal_fee_rate=_fee_rate(
                proposal_platform, "originValidatedProposalFeeRate"
            ),
        )

    async def get_by_service(
        self, service_id: str, payment_type: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Payments made for a service; an empty list when none are indexed."""
        response = await self.graphql_client.get(
            get_payments_by_service(service_id, payment_type)
        )
        return ((response or {}).get("data") or {}).get("payments") or []
