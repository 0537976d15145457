"""IPFS content store client (Infura-compatible ``/add`` API)."""

import logging
from typing import Optional, Protocol

import httpx

from .constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_IPFS_URL
from .errors import ContentStoreError

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    async def post(self, payload: str) -> str:
        ...


class IPFSClient:
    """Uploads JSON documents to IPFS and returns their cid."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        base_url: str = DEFAULT_IPFS_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id and client_secret else None
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def post(self, payload: str) -> str:
        """Add a document to IPFS.

        Args:
            payload: Serialized document (usually JSON)

        Returns:
            Content identifier of the stored document

        Raises:
            ContentStoreError: If the upload fails or no hash is returned
        """
        try:
            response = await self._http_client.post(
                f"{self.base_url}/add",
                files={"file": ("data.json", payload.encode("utf-8"))},
                auth=self._auth,
            )
        except httpx.HTTPError as e:
            raise ContentStoreError(f"IPFS upload failed: {e}") from e

        if not response.is_success:
            raise ContentStoreError(
                f"IPFS upload failed: {response.status_code} {response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ContentStoreError(f"IPFS returned invalid JSON: {response.text}") from e

        if not isinstance(body, dict):
            raise ContentStoreError(f"IPFS returned unexpected payload: {body!r}")

        cid = body.get("Hash")
        if not cid:
            raise ContentStoreError("IPFS response did not include a Hash")

        logger.debug("Uploaded document to IPFS: %s", cid)
        return cid

    async def close(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
