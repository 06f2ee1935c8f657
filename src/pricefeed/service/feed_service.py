"""Attested feed orchestration: fetch -> convert -> digest -> sign -> cache.

The service owns one FreshnessCache, so refreshes of a feed are totally
ordered and never overlap. Errors are not logged here; they propagate as
FeedUnavailable with the cause attached and the request boundary logs them.
"""

import asyncio
import time
from collections.abc import Callable

from pricefeed.cache.freshness import CacheState, FreshnessCache
from pricefeed.config import FeedDefinition
from pricefeed.encoding.digest import asset_pair_hash, build_digest
from pricefeed.encoding.fixed_point import FixedPointValue
from pricefeed.exceptions import FeedUnavailable, RefreshFailed
from pricefeed.models import SignedAttestation
from pricefeed.signing.signer import Signer
from pricefeed.sources.base import QuoteSource


class FeedService:
    """Serves signed attestations for a single feed.

    Args:
        definition: Feed identity, asset pair, decimals and TTL.
        source: Upstream quote source.
        signer: Process-wide signer.
        cache: Cache for this feed; created from definition.ttl_ms if omitted.
        clock: Returns the current Unix time in milliseconds.
    """

    def __init__(
        self,
        definition: FeedDefinition,
        source: QuoteSource,
        signer: Signer,
        cache: FreshnessCache | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._definition = definition
        self._source = source
        self._signer = signer
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._cache = cache or FreshnessCache(definition.ttl_ms, clock=self._clock)
        self._asset_pair_id = "0x" + asset_pair_hash(definition.asset_pair).hex()

    @property
    def feed_id(self) -> str:
        return self._definition.feed_id

    @property
    def definition(self) -> FeedDefinition:
        return self._definition

    @property
    def source(self) -> QuoteSource:
        return self._source

    @property
    def asset_pair_id(self) -> str:
        """0x-prefixed keccak256 of the asset pair, as served in responses."""
        return self._asset_pair_id

    @property
    def cache_state(self) -> CacheState:
        return self._cache.state()

    async def get_attestation(self, timeout: float | None = None) -> SignedAttestation:
        """Return a fresh signed attestation, refreshing at most once concurrently.

        Args:
            timeout: Seconds to wait on an in-flight refresh.

        Raises:
            FeedUnavailable: If the refresh failed or the wait timed out.
        """
        try:
            return await self._cache.get_or_refresh(self._refresh, timeout=timeout)
        except RefreshFailed as exc:
            raise FeedUnavailable(self.feed_id, cause=exc.cause) from exc
        except asyncio.TimeoutError as exc:
            raise FeedUnavailable(self.feed_id, cause=exc) from exc

    async def _refresh(self) -> SignedAttestation:
        request_timestamp = self._clock()
        quote = await self._source.fetch_quote(self._definition.symbol)

        price = FixedPointValue.from_raw(quote.raw_price, self._definition.decimals)
        digest = build_digest(price, quote.observed_at_ms, self._definition.asset_pair)
        signature = self._signer.sign_hex(digest)

        return SignedAttestation(
            price=price,
            data_timestamp=quote.observed_at_ms,
            request_timestamp=request_timestamp,
            asset_pair=self._asset_pair_id,
            signature=signature,
        )
