"""Service lookups against the subgraph."""

import json
from typing import Any, Mapping, Optional

from .errors import IndexerError
from .graphql import IndexedDataService
from .types import Service


def get_service_by_id(service_id: str) -> str:
    return f"""
    {{
      service(id: {json.dumps(str(service_id))}) {{
        id
        cid
        status
        platform {{
          id
        }}
        transaction {{
          id
        }}
      }}
    }}
    """


def parse_service(raw: Mapping[str, Any]) -> Service:
    try:
        platform = raw.get("platform") or {}
        transaction = raw.get("transaction") or {}
        return Service(
            id=str(raw["id"]),
            platform_id=str(platform["id"]) if platform.get("id") is not None else None,
            cid=raw.get("cid") or None,
            status=raw.get("status"),
            transaction_id=(
                str(transaction["id"]) if transaction.get("id") is not None else None
            ),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise IndexerError(f"Malformed service record: {raw!r}") from e


class Services:
    """Read access to indexed services."""

    def __init__(self, graphql_client: IndexedDataService):
        self.graphql_client = graphql_client

    async def get_one(self, service_id: str) -> Optional[Service]:
        """Fetch a service by id; returns None when it is not indexed."""
        response = await self.graphql_client.get(get_service_by_id(service_id))
        raw = ((response or {}).get("data") or {}).get("service")
        if not raw:
            return None
        return parse_service(raw)
