"""Tests for FeedRegistry."""

from unittest.mock import AsyncMock

import pytest

from pricefeed.config import AppSettings, FeedDefinition
from pricefeed.exceptions import UnknownFeed
from pricefeed.service.feed_service import FeedService
from pricefeed.service.registry import FeedRegistry
from pricefeed.signing.signer import Signer
from pricefeed.sources.http_source import HttpQuoteSource


def _feed(feed_id: str, asset_pair: str = "MORPHER:ETH_USD") -> FeedDefinition:
    return FeedDefinition(feed_id=feed_id, asset_pair=asset_pair, symbol="X")


class TestFeedRegistry:
    def test_get_and_unknown(self, signer: Signer) -> None:
        service = FeedService(_feed("eth-usd"), AsyncMock(), signer)
        registry = FeedRegistry([service])

        assert registry.get("eth-usd") is service
        assert registry.feed_ids() == ["eth-usd"]
        assert len(registry) == 1
        with pytest.raises(UnknownFeed):
            registry.get("btc-usd")

    def test_duplicate_feed_id(self, signer: Signer) -> None:
        registry = FeedRegistry([FeedService(_feed("eth-usd"), AsyncMock(), signer)])
        with pytest.raises(ValueError, match="Duplicate"):
            registry.add(FeedService(_feed("eth-usd"), AsyncMock(), signer))

    def test_from_settings_shares_source_per_kind(
        self, mock_settings: AppSettings, signer: Signer
    ) -> None:
        mock_settings.feeds = [
            _feed("eth-usd"),
            _feed("btc-usd", asset_pair="MORPHER:BTC_USD"),
        ]

        registry = FeedRegistry.from_settings(mock_settings, signer)

        eth, btc = registry.get("eth-usd"), registry.get("btc-usd")
        assert isinstance(eth.source, HttpQuoteSource)
        assert eth.source is btc.source
        assert eth.asset_pair_id != btc.asset_pair_id

    @pytest.mark.asyncio()
    async def test_close_closes_each_source_once(self, signer: Signer) -> None:
        shared, other = AsyncMock(), AsyncMock()
        registry = FeedRegistry([
            FeedService(_feed("a"), shared, signer),
            FeedService(_feed("b"), shared, signer),
            FeedService(_feed("c"), other, signer),
        ])

        await registry.close()

        shared.close.assert_awaited_once()
        other.close.assert_awaited_once()
