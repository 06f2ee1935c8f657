"""Shared test fixtures for the attested price feed."""

import pytest

from pricefeed.config import (
    AppSettings,
    FeedDefinition,
    HttpSourceSettings,
    MintSettings,
    SignerSettings,
)
from pricefeed.signing.signer import Signer

# Well-known development key; its address is published alongside it.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def signer() -> Signer:
    return Signer.from_settings(SignerSettings(private_key=TEST_PRIVATE_KEY))  # type: ignore[arg-type]


@pytest.fixture
def eth_usd_feed() -> FeedDefinition:
    return FeedDefinition(
        feed_id="eth-usd",
        asset_pair="MORPHER:ETH_USD",
        symbol="ETHUSD",
        decimals=18,
        ttl_ms=5000,
        source="http",
    )


@pytest.fixture
def mock_settings(eth_usd_feed: FeedDefinition) -> AppSettings:
    """Return AppSettings with test defaults (test key, one HTTP feed)."""
    return AppSettings(
        log_level="DEBUG",
        signer=SignerSettings(private_key=TEST_PRIVATE_KEY),  # type: ignore[arg-type]
        http_source=HttpSourceSettings(url_template="http://upstream.test/price/{symbol}"),
        mint=MintSettings(enabled=False),
        feeds=[eth_usd_feed],
    )


@pytest.fixture
def signer_address() -> str:
    return TEST_ADDRESS
