"""ERC-20 allowance handling for escrow payments."""

import logging
from typing import Optional

from ..errors import ApprovalFailedError, ApprovalSubmissionError
from ..ledger import LedgerClient

logger = logging.getLogger(__name__)


class ERC20:
    """Reads and raises token allowances granted to the escrow contract.

    Args:
        ledger: Ledger client signing as the payer
        spender: Address of the escrow contract pulling the tokens
    """

    def __init__(self, ledger: LedgerClient, spender: str):
        self.ledger = ledger
        self.spender = spender

    async def check_allowance(self, token_address: str) -> int:
        """Current amount of ``token_address`` the escrow may pull from the payer."""
        allowance = await self.ledger.read_contract(
            token_address, "allowance", [self.ledger.address, self.spender]
        )
        return int(allowance)

    async def balance_of(self, token_address: str, owner: Optional[str] = None) -> int:
        balance = await self.ledger.read_contract(
            token_address, "balanceOf", [owner or self.ledger.address]
        )
        return int(balance)

    async def approve(self, token_address: str, amount: int) -> str:
        """Submit ``approve(escrow, amount)`` and return the transaction hash."""
        return await self.ledger.write_contract(
            token_address, "approve", [self.spender, amount]
        )

    async def ensure_allowance(self, token_address: str, required_amount: int) -> Optional[str]:
        """Make sure the escrow can pull ``required_amount`` of the token.

        Approves exactly ``required_amount`` when the current allowance is
        lower, then blocks until the approval is mined. Nothing is retried.

        Args:
            token_address: ERC-20 token the payment is made in
            required_amount: Amount the escrow will pull, fees included

        Returns:
            Hash of the approval transaction, or None if no approval was needed

        Raises:
            ApprovalSubmissionError: If the approve call could not be submitted
            ApprovalFailedError: If the approval was not confirmed successfully
        """
        allowance = await self.check_allowance(token_address)
        logger.debug("Allowance for %s: %s (required %s)", token_address, allowance, required_amount)

        if allowance >= required_amount:
            return None

        logger.debug("Allowance below required amount, requesting approval")
        try:
            tx_hash = await self.approve(token_address, required_amount)
        except Exception as e:
            logger.error("Approval submission failed for %s: %s", token_address, e)
            raise ApprovalSubmissionError(f"Approval transaction failed to submit: {e}") from e

        try:
            receipt = await self.ledger.wait_for_receipt(tx_hash)
        except Exception as e:
            logger.error("Approval %s was not confirmed: %s", tx_hash, e)
            raise ApprovalFailedError(
                f"Approval transaction {tx_hash} was not confirmed: {e}", tx_hash
            ) from e

        if not receipt.succeeded:
            logger.error("Approval %s failed on-chain", tx_hash)
            raise ApprovalFailedError(f"Approval transaction {tx_hash} failed", tx_hash)

        logger.debug("Approval %s confirmed", tx_hash)
        return tx_hash
