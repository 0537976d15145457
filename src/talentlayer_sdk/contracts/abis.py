"""TalentLayer contract ABIs.

Trimmed to the functions the SDK calls. Contracts that are only referenced
by address (ID, service, review, arbitrator) carry an empty ABI.
"""

ERC20_ABI = [
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]

TALENTLAYER_ESCROW_ABI = [
    {
        "inputs": [
            {"name": "_serviceId", "type": "uint256"},
            {"name": "_proposalId", "type": "uint256"},
            {"name": "_metaEvidence", "type": "string"},
            {"name": "_originDataUri", "type": "string"},
        ],
        "name": "createTransaction",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_profileId", "type": "uint256"},
            {"name": "_transactionId", "type": "uint256"},
            {"name": "_amount", "type": "uint256"},
        ],
        "name": "release",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_profileId", "type": "uint256"},
            {"name": "_transactionId", "type": "uint256"},
            {"name": "_amount", "type": "uint256"},
        ],
        "name": "reimburse",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

TALENTLAYER_PLATFORM_ID_ABI = [
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_arbitrator", "type": "address"},
            {"name": "_extraData", "type": "bytes"},
        ],
        "name": "updateArbitrator",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_originServiceFeeRate", "type": "uint16"},
        ],
        "name": "updateOriginServiceFeeRate",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_originValidatedProposalFeeRate", "type": "uint16"},
        ],
        "name": "updateOriginValidatedProposalFeeRate",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_servicePostingFee", "type": "uint256"},
        ],
        "name": "updateServicePostingFee",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_proposalPostingFee", "type": "uint256"},
        ],
        "name": "updateProposalPostingFee",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_arbitrationFeeTimeout", "type": "uint256"},
        ],
        "name": "updateArbitrationFeeTimeout",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "_platformId", "type": "uint256"},
            {"name": "_newCid", "type": "string"},
        ],
        "name": "updateProfileData",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

# Contract name -> ABI, used when building network configurations
CONTRACT_ABIS = {
    "talentLayerId": [],
    "talentLayerService": [],
    "talentLayerReview": [],
    "talentLayerEscrow": TALENTLAYER_ESCROW_ABI,
    "talentLayerPlatformId": TALENTLAYER_PLATFORM_ID_ABI,
    "talentLayerArbitrator": [],
}
