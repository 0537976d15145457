"""Subgraph queries used by the escrow module."""

import json
from typing import Optional


def _literal(value: str) -> str:
    # JSON string escaping is valid GraphQL string escaping
    return json.dumps(str(value))


def get_protocol_and_platforms_fees(
    origin_service_platform_id: str, origin_validated_proposal_platform_id: str
) -> str:
    return f"""
    {{
      protocols {{
        protocolEscrowFeeRate
      }}
      servicePlatform: platform(id: {_literal(origin_service_platform_id)}) {{
        originServiceFeeRate
      }}
      proposalPlatform: platform(id: {_literal(origin_validated_proposal_platform_id)}) {{
        originValidatedProposalFeeRate
      }}
    }}
    """


def get_payments_by_service(service_id: str, payment_type: Optional[str] = None) -> str:
    payment_type_filter = (
        f", paymentType: {_literal(payment_type)}" if payment_type else ""
    )
    return f"""
    {{
      payments(
        where: {{service: {_literal(service_id)}{payment_type_filter}}}
        orderBy: id
        orderDirection: asc
      ) {{
        id
        amount
        rateToken {{
          address
          decimals
          name
          symbol
        }}
        paymentType
        transactionHash
        createdAt
      }}
    }}
    """
