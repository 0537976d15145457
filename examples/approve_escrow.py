"""Fund a TalentLayer escrow for a validated proposal.

This example accepts a seller's proposal as the buyer of a service:
- Looks up the proposal and the fee schedule of both platforms
- Approves the escrow contract for the rate plus fees (ERC-20 only)
- Creates the escrow transaction that locks the funds

Prerequisites:
1. pip install talentlayer-sdk[examples]
2. Set TALENTLAYER_* environment variables (a .env file works too)
3. Fund the buyer wallet with the proposal's token and gas

Usage:
    python approve_escrow.py <service_id> <proposal_id> <meta_evidence_cid>
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()


async def main(service_id: str, proposal_id: str, meta_evidence_cid: str):
    from talentlayer_sdk import (
        TalentLayerClient,
        TalentLayerError,
        calculate_approval_amount,
        config_from_env,
        format_bps,
        format_token_amount,
    )

    required = ["TALENTLAYER_RPC_URL", "TALENTLAYER_PRIVATE_KEY"]
    missing = [var for var in required if not os.environ.get(var)]
    if missing:
        print(f"Missing required environment variables: {', '.join(missing)}")
        return

    print("=" * 60)
    print("  TALENTLAYER ESCROW")
    print("=" * 60)

    async with TalentLayerClient(config_from_env()) as client:
        print(f"\n[1] Buyer wallet: {client.ledger.address}")

        proposal = await client.proposals.get_one(proposal_id)
        if proposal is None:
            print(f"    Proposal {proposal_id} not found")
            return

        token = client.config.network_config.token(proposal.rate_token.address)
        decimals = token.decimals if token else 18
        print(f"\n[2] Proposal {proposal.id}")
        print(f"    Rate: {format_token_amount(proposal.rate_amount, decimals)} {proposal.rate_token.symbol}")

        fees = await client.escrow.resolve_fees(
            proposal.service_platform_id, proposal.platform_id
        )
        print("\n[3] Fees")
        print(f"    Protocol:           {format_bps(fees.protocol_escrow_fee_rate)}")
        print(f"    Service platform:   {format_bps(fees.origin_service_fee_rate)}")
        print(f"    Proposal platform:  {format_bps(fees.origin_validated_proposal_fee_rate)}")
        total = calculate_approval_amount(
            proposal.rate_amount,
            fees.origin_service_fee_rate,
            fees.origin_validated_proposal_fee_rate,
            fees.protocol_escrow_fee_rate,
        )
        print(f"    Total to approve:   {format_token_amount(total, decimals)}")

        print("\n[4] Creating escrow transaction...")
        try:
            result = await client.escrow.approve(service_id, proposal_id, meta_evidence_cid)
        except TalentLayerError as e:
            print(f"    Failed at stage {e.stage}: {e}")
            return

        print(f"    Transaction: {result.tx}")
        receipt = await client.ledger.wait_for_receipt(result.tx)
        print(f"    Status: {receipt.status} (block {receipt.block_number})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(*sys.argv[1:]))
