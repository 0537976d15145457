"""Protocol-wide constants."""

# Zero address, also used as the native currency sentinel for rate tokens
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
NATIVE_TOKEN = ZERO_ADDRESS

# Fee rates are expressed in basis points against this divider (500 = 5%)
FEE_RATE_DIVIDER = 10000

# Default escrow payment timeout (7 days)
DEFAULT_TIMEOUT_PAYMENT = 3600 * 24 * 7

# Logical contract names used by the network registry
TALENTLAYER_ID = "talentLayerId"
TALENTLAYER_SERVICE = "talentLayerService"
TALENTLAYER_REVIEW = "talentLayerReview"
TALENTLAYER_ESCROW = "talentLayerEscrow"
TALENTLAYER_PLATFORM_ID = "talentLayerPlatformId"
TALENTLAYER_ARBITRATOR = "talentLayerArbitrator"

# Default IPFS endpoint (Infura compatible add API)
DEFAULT_IPFS_URL = "https://ipfs.infura.io:5001/api/v0"

DEFAULT_HTTP_TIMEOUT = 30.0
