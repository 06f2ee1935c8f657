"""Caching layer -- single-slot TTL cache with coalesced refreshes."""

from pricefeed.cache.freshness import CacheState, FreshnessCache

__all__ = ["CacheState", "FreshnessCache"]
