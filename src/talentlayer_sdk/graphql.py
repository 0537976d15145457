"""Subgraph client.

Thin async GraphQL client over httpx. Responses are returned as the decoded
JSON body (``{"data": ..., "errors": ...}``); interpreting missing data is
left to the caller.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .constants import DEFAULT_HTTP_TIMEOUT
from .errors import IndexerError

logger = logging.getLogger(__name__)


class IndexedDataService(Protocol):
    """Read-only indexed data source (the TalentLayer subgraph)."""

    async def get(self, query: str) -> Optional[Dict[str, Any]]:
        ...


class GraphQLClient:
    """Async client for a TalentLayer subgraph.

    Example:
        ```python
        client = GraphQLClient("https://api.thegraph.com/subgraphs/name/...")
        response = await client.get("{ protocols { id } }")
        await client.close()
        ```
    """

    def __init__(
        self,
        subgraph_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            subgraph_url: GraphQL endpoint of the subgraph
            http_client: Optional shared httpx client (not closed by ``close``)
            timeout: Request timeout in seconds when creating our own client
        """
        self.subgraph_url = subgraph_url
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def get(self, query: str) -> Optional[Dict[str, Any]]:
        """Run a query against the subgraph.

        Args:
            query: GraphQL query document

        Returns:
            Decoded response body

        Raises:
            IndexerError: On transport failure, non-2xx status or a non-JSON body
        """
        try:
            response = await self._http_client.post(
                self.subgraph_url,
                headers={"Content-Type": "application/json"},
                json={"query": query},
            )
        except httpx.HTTPError as e:
            raise IndexerError(f"Subgraph request failed: {e}") from e

        if not response.is_success:
            raise IndexerError(
                f"Subgraph request failed: {response.status_code} {response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise IndexerError(f"Subgraph returned invalid JSON: {response.text}") from e

        if not isinstance(body, dict):
            raise IndexerError(f"Subgraph returned unexpected payload: {body!r}")

        if body.get("errors"):
            logger.warning("Subgraph returned errors: %s", body["errors"])

        return body

    async def close(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
