"""Service layer -- feed orchestration, feed registry and mint authorization."""

from pricefeed.service.feed_service import FeedService
from pricefeed.service.mint import AllowListKycRegistry, KycRegistry, MintAuthorizer
from pricefeed.service.registry import FeedRegistry

__all__ = [
    "AllowListKycRegistry",
    "FeedRegistry",
    "FeedService",
    "KycRegistry",
    "MintAuthorizer",
]
