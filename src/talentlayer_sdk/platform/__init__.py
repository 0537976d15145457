"""Platform module: fee administration and arbitrator selection."""

from .platform import Platform, get_arbitrators, validate_arbitrator
from .types import Arbitrator, PlatformDetails

__all__ = [
    "Arbitrator",
    "Platform",
    "PlatformDetails",
    "get_arbitrators",
    "validate_arbitrator",
]
