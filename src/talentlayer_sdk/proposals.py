"""Proposal lookups against the subgraph."""

import json
import logging
from typing import Any, Mapping, Optional

from .errors import IndexerError
from .graphql import IndexedDataService
from .types import Proposal, RateToken

logger = logging.getLogger(__name__)


def get_proposal_by_id(proposal_id: str) -> str:
    return f"""
    {{
      proposal(id: {json.dumps(str(proposal_id))}) {{
        id
        cid
        status
        rateAmount
        rateToken {{
          address
          symbol
        }}
        seller {{
          id
        }}
        service {{
          id
          platform {{
            id
          }}
        }}
        platform {{
          id
        }}
      }}
    }}
    """


def parse_proposal(raw: Mapping[str, Any]) -> Proposal:
    """Build a Proposal from a subgraph record.

    Raises:
        IndexerError: If a field the escrow flow relies on is missing
    """
    try:
        return Proposal(
            id=str(raw["id"]),
            cid=raw.get("cid") or None,
            seller_id=str(raw["seller"]["id"]),
            rate_amount=int(raw["rateAmount"]),
            rate_token=RateToken(
                address=raw["rateToken"]["address"],
                symbol=raw["rateToken"].get("symbol"),
            ),
            service_id=str(raw["service"]["id"]),
            service_platform_id=str(raw["service"]["platform"]["id"]),
            platform_id=str(raw["platform"]["id"]),
            status=raw.get("status"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise IndexerError(f"Malformed proposal record: {raw!r}") from e


class Proposals:
    """Read access to indexed proposals."""

    def __init__(self, graphql_client: IndexedDataService):
        self.graphql_client = graphql_client

    async def get_one(self, proposal_id: str) -> Optional[Proposal]:
        """Fetch a proposal by id.

        Returns:
            The proposal, or None when the subgraph has no such proposal
        """
        response = await self.graphql_client.get(get_proposal_by_id(proposal_id))
        raw = ((response or {}).get("data") or {}).get("proposal")
        if not raw:
            logger.debug("Proposal %s not indexed", proposal_id)
            return None
        return parse_proposal(raw)
