"""Shared fakes for the TalentLayer SDK tests."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from talentlayer_sdk.config import POLYGON
from talentlayer_sdk.constants import ZERO_ADDRESS
from talentlayer_sdk.types import NetworkEnum, TransactionReceipt

PAYER_ADDRESS = "0x1111111111111111111111111111111111111111"
USDC_POLYGON = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"
ESCROW_POLYGON = POLYGON.contract("talentLayerEscrow").address


LOCAL_CONFIG = {
    "networkId": 1337,
    "subgraphUrl": "http://localhost:8020/subgraphs/name/talentlayer",
    "contracts": {
        "talentLayerEscrow": {"address": "0x5fbdb2315678afecb367f032d93f642f64180aa3"},
        "talentLayerPlatformId": {"address": "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"},
        "talentLayerArbitrator": {"address": "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0"},
    },
    "escrowConfig": {
        "adminFee": "0",
        "adminWallet": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
        "timeoutPayment": 3600,
    },
    "tokens": {
        ZERO_ADDRESS: {"address": ZERO_ADDRESS, "symbol": "ETH", "name": "Ether", "decimals": 18},
        "0xCf7Ed3AccA5a467e9e704C703E8D87F634fB0Fc9": {"symbol": "SERC20", "decimals": 18},
    },
}



@dataclass
class WriteCall:
    contract: str
    method: str
    args: List[Any]
    value: Optional[int]


@dataclass
class FakeLedger:
    """In-memory LedgerClient recording every call."""

    chain_id: int = int(NetworkEnum.POLYGON)
    address: str = PAYER_ADDRESS
    allowance: int = 0
    balance: int = 0
    receipt_status: str = "success"
    receipt_error: Optional[Exception] = None
    write_errors: Dict[str, Exception] = field(default_factory=dict)
    tx_hashes: Dict[str, str] = field(default_factory=dict)
    reads: List[tuple] = field(default_factory=list)
    writes: List[WriteCall] = field(default_factory=list)
    waited: List[str] = field(default_factory=list)

    async def read_contract(self, contract, method, args=()):
        self.reads.append((contract, method, list(args)))
        if method == "allowance":
            return self.allowance
        if method == "balanceOf":
            return self.balance
        raise AssertionError(f"unexpected read {contract}.{method}")

    async def write_contract(self, contract, method, args=(), value=None):
        self.writes.append(WriteCall(contract, method, list(args), value))
        if method in self.write_errors:
            raise self.write_errors[method]
        return self.tx_hashes.get(method, "0x" + method.encode().hex().ljust(64, "0")[:64])

    async def wait_for_receipt(self, tx_hash):
        self.waited.append(tx_hash)
        if self.receipt_error is not None:
            raise self.receipt_error
        return TransactionReceipt(
            transaction_hash=tx_hash, status=self.receipt_status, block_number=1
        )

    def methods_written(self) -> List[str]:
        return [call.method for call in self.writes]


class FakeGraphQL:
    """IndexedDataService answering queries by substring match."""

    def __init__(self):
        self.routes: List[tuple] = []
        self.queries: List[str] = []

    def route(self, needle: str, response: Optional[Dict[str, Any]]) -> None:
        self.routes.append((needle, response))

    async def get(self, query: str):
        self.queries.append(query)
        for needle, response in self.routes:
            if needle in query:
                return response
        return {"data": {}}

    def count(self, needle: str) -> int:
        return sum(1 for query in self.queries if needle in query)


class FakeContentStore:
    def __init__(self, cid: str = "QmPlatformDetails"):
        self.cid = cid
        self.payloads: List[str] = []

    async def post(self, payload: str) -> str:
        self.payloads.append(payload)
        return self.cid


def proposal_response(
    rate_token: str = USDC_POLYGON,
    rate_amount: str = "1000000",
    cid: Optional[str] = "QmProposalCid",
    seller_id: str = "7",
    service_platform_id: str = "1",
    proposal_platform_id: str = "2",
) -> Dict[str, Any]:
    return {
        "data": {
            "proposal": {
                "id": "12-7",
                "cid": cid,
                "status": "Pending",
                "rateAmount": rate_amount,
                "rateToken": {"address": rate_token, "symbol": "USDC"},
                "seller": {"id": seller_id},
                "service": {"id": "12", "platform": {"id": service_platform_id}},
                "platform": {"id": proposal_platform_id},
            }
        }
    }


def fees_response(protocol=300, service=500, proposal=200) -> Dict[str, Any]:
    return {
        "data": {
            "protocols": [{"protocolEscrowFeeRate": protocol}],
            "servicePlatform": {"originServiceFeeRate": service},
            "proposalPlatform": {"originValidatedProposalFeeRate": proposal},
        }
    }


def service_response(transaction_id: Optional[str] = "3") -> Dict[str, Any]:
    return {
        "data": {
            "service": {
                "id": "12",
                "cid": "QmServiceCid",
                "status": "Confirmed",
                "platform": {"id": "1"},
                "transaction": {"id": transaction_id} if transaction_id else None,
            }
        }
    }


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def graphql() -> FakeGraphQL:
    return FakeGraphQL()
