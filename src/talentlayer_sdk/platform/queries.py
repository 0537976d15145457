"""Subgraph queries used by the platform module."""

import json


def get_platform_by_id(platform_id: str) -> str:
    return f"""
    {{
      platform(id: {json.dumps(str(platform_id))}) {{
        id
        address
        name
        createdAt
        updatedAt
        originServiceFeeRate
        originValidatedProposalFeeRate
        servicePostingFee
        proposalPostingFee
        arbitrator
        arbitratorExtraData
        arbitrationFeeTimeout
        cid
        description {{
          about
          website
          video_url
          image_url
        }}
      }}
    }}
    """


def get_platforms_by_owner(address: str) -> str:
    return f"""
    {{
      platforms(where: {{address: {json.dumps(address.lower())}}}) {{
        id
        name
        address
        originServiceFeeRate
        originValidatedProposalFeeRate
      }}
    }}
    """
