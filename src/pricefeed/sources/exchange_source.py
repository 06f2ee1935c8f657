"""Exchange ticker quote source via ccxt async (public endpoints only).

ccxt normalizes ticker prices to float. The shortest repr of that float is
taken as the decimal string, which is exactly the number the exchange sent
for any price with at most 15 significant digits.
"""

import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import ccxt.async_support as ccxt_async

from pricefeed.config import ExchangeSourceSettings
from pricefeed.exceptions import QuoteFetchError
from pricefeed.models import Quote
from pricefeed.sources.base import QuoteSource


class ExchangeQuoteSource(QuoteSource):
    """Reads the last traded price from an exchange ticker."""

    def __init__(
        self,
        settings: ExchangeSourceSettings,
        exchange: Any = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._settings = settings
        if exchange is None:
            exchange_cls = getattr(ccxt_async, settings.exchange_id, None)
            if exchange_cls is None:
                raise ValueError(f"Unknown ccxt exchange id: {settings.exchange_id!r}")
            exchange = exchange_cls({"enableRateLimit": True, "timeout": settings.timeout_ms})
        self._exchange = exchange
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def fetch_quote(self, symbol: str) -> Quote:
        try:
            ticker = await self._exchange.fetch_ticker(symbol)
        except ccxt_async.BaseError as exc:
            raise QuoteFetchError(f"{symbol}: ticker fetch failed: {exc!r}") from exc

        last = ticker.get("last")
        if last is None or isinstance(last, bool):
            raise QuoteFetchError(f"{symbol}: ticker has no last price")
        if isinstance(last, float):
            raw_price = format(Decimal(repr(last)), "f")
        else:
            raw_price = str(last)

        timestamp = ticker.get("timestamp")
        return Quote(
            symbol_pair=symbol,
            raw_price=raw_price,
            observed_at_ms=int(timestamp) if timestamp is not None else self._clock(),
        )

    async def close(self) -> None:
        """Clean up ccxt async resources."""
        await self._exchange.close()
