"""TalentLayer platform administration.

Covers the settings a platform owner controls that feed into escrow
payments: its fee rates, posting fees, fee timeout and arbitrator.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from eth_utils import to_wei

from ..config import get_chain_config
from ..constants import TALENTLAYER_ARBITRATOR, TALENTLAYER_PLATFORM_ID, ZERO_ADDRESS
from ..errors import ContentStoreError, InvalidArbitratorError, InvalidFeeRateError
from ..escrow.types import ClientTransactionResponse
from ..escrow.utils import fee_rate_from_percentage
from ..graphql import IndexedDataService
from ..ipfs import ContentStore
from ..ledger import LedgerClient
from ..types import NetworkConfig, NetworkEnum
from .queries import get_platform_by_id, get_platforms_by_owner
from .types import Arbitrator, PlatformDetails

logger = logging.getLogger(__name__)


def get_arbitrators(
    network_id: Union[NetworkEnum, int],
    custom_config: Optional[NetworkConfig] = None,
) -> List[Arbitrator]:
    """Arbitrators a platform may select on a network.

    Always "None" (the zero address) plus the network's TalentLayer arbitrator.
    """
    config = get_chain_config(network_id, custom_config)
    contract = config.contract(TALENTLAYER_ARBITRATOR)
    return [
        Arbitrator(address=ZERO_ADDRESS, name="None"),
        Arbitrator(address=contract.address, name="TalentLayer Arbitrator"),
    ]


def validate_arbitrator(
    network_id: Union[NetworkEnum, int],
    address: str,
    custom_config: Optional[NetworkConfig] = None,
) -> None:
    """Check ``address`` against the network's arbitrator allow-list.

    Raises:
        InvalidArbitratorError: If the address is not allowed (case-insensitive)
        UnsupportedNetworkError: If the network has no configuration
    """
    allowed = {
        arbitrator.address.lower() for arbitrator in get_arbitrators(network_id, custom_config)
    }
    if not isinstance(address, str) or address.lower() not in allowed:
        raise InvalidArbitratorError(address)


def _posting_fee_to_wei(value: Union[int, float, str, Decimal]) -> int:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise InvalidFeeRateError(f"Invalid posting fee: {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise InvalidFeeRateError(f"Posting fee must be non-negative, got {value}")
    return to_wei(amount, "ether")


class Platform:
    """Read and update a TalentLayer platform.

    Operations taking an optional ``platform_id`` fall back to the platform
    id the client was configured with when it is None.
    """

    def __init__(
        self,
        graphql_client: IndexedDataService,
        ledger: LedgerClient,
        platform_id: Optional[int],
        content_store: Optional[ContentStore] = None,
        custom_config: Optional[NetworkConfig] = None,
    ):
        self.graphql_client = graphql_client
        self.ledger = ledger
        self.platform_id = platform_id
        self.content_store = content_store
        self.custom_config = custom_config

    def _resolve_platform_id(self, platform_id: Optional[int]) -> int:
        resolved = self.platform_id if platform_id is None else platform_id
        if resolved is None:
            raise ValueError("platform_id is required when the client has no default platform")
        return int(resolved)

    async def get_one(self, platform_id: str) -> Optional[Dict[str, Any]]:
        """Platform record, or None when the platform is not indexed."""
        response = await self.graphql_client.get(get_platform_by_id(platform_id))
        return ((response or {}).get("data") or {}).get("platform") or None

    async def get_by_owner(self, address: str) -> List[Dict[str, Any]]:
        """Platforms owned by ``address``; an empty list when there are none."""
        response = await self.graphql_client.get(get_platforms_by_owner(address))
        return ((response or {}).get("data") or {}).get("platforms") or []

    async def upload(self, details: PlatformDetails) -> str:
        if self.content_store is None:
            raise ContentStoreError("No IPFS client configured")
        return await self.content_store.post(json.dumps(details))

    async def update(
        self, details: PlatformDetails, platform_id: Optional[int] = None
    ) -> ClientTransactionResponse:
        """Upload new platform details and point the platform at them."""
        platform_id = self._resolve_platform_id(platform_id)
        cid = await self.upload(details)
        logger.debug("Platform details uploaded to IPFS: %s", cid)
        tx = await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateProfileData", [platform_id, cid]
        )
        return ClientTransactionResponse(tx=tx, cid=cid)

    def get_arbitrators(self) -> List[Arbitrator]:
        return get_arbitrators(self.ledger.chain_id, self.custom_config)

    async def update_arbitrator(self, address: str, platform_id: Optional[int] = None) -> str:
        """Select the platform's arbitrator.

        Raises:
            InvalidArbitratorError: If the address is not an allowed arbitrator;
                nothing is written in that case
        """
        platform_id = self._resolve_platform_id(platform_id)
        validate_arbitrator(self.ledger.chain_id, address, self.custom_config)

        logger.info("Updating arbitrator for platform %s to %s", platform_id, address)
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateArbitrator", [platform_id, address, b""]
        )

    async def update_origin_service_fee_rate(
        self, value: Union[int, float, str, Decimal], platform_id: Optional[int] = None
    ) -> str:
        """Set the fee charged on services posted through the platform.

        Args:
            value: Fee as a percentage (5 means 5%)
            platform_id: Platform to update (defaults to the client's platform)
        """
        platform_id = self._resolve_platform_id(platform_id)
        fee_rate = fee_rate_from_percentage(value)

        logger.info("Updating service fee rate for platform %s to %s", platform_id, fee_rate)
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateOriginServiceFeeRate", [platform_id, fee_rate]
        )

    async def update_origin_validated_proposal_fee_rate(
        self, value: Union[int, float, str, Decimal], platform_id: Optional[int] = None
    ) -> str:
        """Set the fee charged on proposals validated through the platform.

        Args:
            value: Fee as a percentage (5 means 5%)
            platform_id: Platform to update (defaults to the client's platform)
        """
        platform_id = self._resolve_platform_id(platform_id)
        fee_rate = fee_rate_from_percentage(value)

        logger.info(
            "Updating validated proposal fee rate for platform %s to %s", platform_id, fee_rate
        )
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID,
            "updateOriginValidatedProposalFeeRate",
            [platform_id, fee_rate],
        )

    async def update_service_posting_fee(
        self, value: Union[int, float, str, Decimal], platform_id: Optional[int] = None
    ) -> str:
        """Set the flat fee (in ether units of the native token) to post a service."""
        platform_id = self._resolve_platform_id(platform_id)
        fee = _posting_fee_to_wei(value)
        logger.info("Updating service posting fee for platform %s to %s", platform_id, fee)
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateServicePostingFee", [platform_id, fee]
        )

    async def update_proposal_posting_fee(
        self, value: Union[int, float, str, Decimal], platform_id: Optional[int] = None
    ) -> str:
        platform_id = self._resolve_platform_id(platform_id)
        fee = _posting_fee_to_wei(value)
        logger.info("Updating proposal posting fee for platform %s to %s", platform_id, fee)
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateProposalPostingFee", [platform_id, fee]
        )

    async def set_fee_timeout(self, timeout: int, platform_id: Optional[int] = None) -> str:
        """Set how long (seconds) parties have to pay arbitration fees."""
        platform_id = self._resolve_platform_id(platform_id)
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
            raise ValueError(f"Invalid timeout: {timeout!r}")
        return await self.ledger.write_contract(
            TALENTLAYER_PLATFORM_ID, "updateArbitrationFeeTimeout", [platform_id, timeout]
        )
