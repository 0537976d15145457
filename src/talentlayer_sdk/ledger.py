"""Ledger client: contract reads, signed writes and receipts.

Contracts are addressed by their logical registry name (``talentLayerEscrow``)
or, for ERC-20 tokens, directly by address.
"""

import logging
from typing import Any, Optional, Protocol, Sequence

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex, is_address, to_checksum_address
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, Web3Exception

from .contracts import ERC20_ABI
from .errors import LedgerError
from .types import NetworkConfig, TransactionReceipt

logger = logging.getLogger(__name__)

# Solidity Error(string) selector
REVERT_SELECTOR = "0x08c379a0"

DEFAULT_RECEIPT_TIMEOUT = 120


class LedgerClient(Protocol):
    """Interface the SDK uses to talk to the chain."""

    chain_id: int

    @property
    def address(self) -> str:
        """Address of the signing account."""
        ...

    async def read_contract(
        self, contract: str, method: str, args: Sequence[Any] = ()
    ) -> Any:
        ...

    async def write_contract(
        self,
        contract: str,
        method: str,
        args: Sequence[Any] = (),
        value: Optional[int] = None,
    ) -> str:
        """Submit a transaction and return its hash."""
        ...

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        ...


def decode_revert_reason(data: Any) -> Optional[str]:
    """Decode a Solidity ``Error(string)`` revert payload.

    Args:
        data: Hex-encoded revert data

    Returns:
        Revert reason, or None if the payload is not an Error(string)
    """
    if not isinstance(data, str) or not data.startswith(REVERT_SELECTOR):
        return None
    try:
        (reason,) = decode(["string"], bytes.fromhex(data[len(REVERT_SELECTOR):]))
    except (DecodingError, ValueError):
        return None
    return reason


class Web3LedgerClient:
    """LedgerClient backed by web3.py's AsyncWeb3."""

    def __init__(
        self,
        network_config: NetworkConfig,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        web3: Optional[AsyncWeb3] = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        """Initialize the ledger client.

        Args:
            network_config: Network whose contracts are addressed by name
            rpc_url: JSON-RPC endpoint (ignored when ``web3`` is given)
            private_key: Key of the account signing writes; reads only if omitted
            web3: Pre-built AsyncWeb3 instance
            receipt_timeout: Seconds to wait for a transaction receipt
        """
        if web3 is None and not rpc_url:
            raise ValueError("Either rpc_url or web3 must be provided")

        self.network_config = network_config
        self.chain_id = int(network_config.network_id)
        self.w3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.receipt_timeout = receipt_timeout

        self._account: Optional[LocalAccount] = None
        if private_key:
            # Do not leak the key through the exception chain
            try:
                self._account = Account.from_key(private_key)
            except Exception:
                raise ValueError("Invalid private key format (key not shown)") from None

    @property
    def address(self) -> str:
        return self._require_account().address

    def _require_account(self) -> LocalAccount:
        if self._account is None:
            raise LedgerError("No private key configured; cannot sign transactions")
        return self._account

    def _contract(self, contract: str):
        if is_address(contract):
            return self.w3.eth.contract(address=to_checksum_address(contract), abi=ERC20_ABI)
        info = self.network_config.contract(contract)
        return self.w3.eth.contract(address=info.address, abi=info.abi)

    async def read_contract(
        self, contract: str, method: str, args: Sequence[Any] = ()
    ) -> Any:
        function = getattr(self._contract(contract).functions, method)(*args)
        try:
            return await function.call()
        except ContractLogicError as e:
            reason = decode_revert_reason(e.data) or e.message
            raise LedgerError(f"{contract}.{method} reverted: {reason}", reason) from e
        except Web3Exception as e:
            raise LedgerError(f"{contract}.{method} call failed: {e}") from e

    async def write_contract(
        self,
        contract: str,
        method: str,
        args: Sequence[Any] = (),
        value: Optional[int] = None,
    ) -> str:
        account = self._require_account()
        function = getattr(self._contract(contract).functions, method)(*args)

        params = {
            "from": account.address,
            "chainId": self.chain_id,
            "nonce": await self.w3.eth.get_transaction_count(account.address, "pending"),
        }
        if value:
            params["value"] = value

        try:
            tx = await function.build_transaction(params)
            signed = account.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except ContractLogicError as e:
            reason = decode_revert_reason(e.data) or e.message
            raise LedgerError(f"{contract}.{method} reverted: {reason}", reason) from e
        except (Web3Exception, ValueError) as e:
            raise LedgerError(f"{contract}.{method} submission failed: {e}") from e

        tx_hex = encode_hex(bytes(tx_hash))
        logger.info("Submitted %s.%s: %s", contract, method, tx_hex)
        return tx_hex

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except Web3Exception as e:
            raise LedgerError(f"No receipt for {tx_hash}: {e}") from e

        return TransactionReceipt(
            transaction_hash=tx_hash,
            status="success" if receipt["status"] == 1 else "failure",
            block_number=receipt.get("blockNumber"),
        )
