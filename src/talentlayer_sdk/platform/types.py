"""Platform types."""

from dataclasses import dataclass
from typing import TypedDict


@dataclass(frozen=True)
class Arbitrator:
    """Arbitrator a platform may select."""

    address: str
    name: str


class PlatformDetails(TypedDict, total=False):
    """Platform profile document stored on IPFS."""

    about: str
    website: str
    video_url: str
    image_url: str
