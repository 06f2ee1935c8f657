"""Redis market-hash quote source via redis.asyncio.

Market data writers keep one hash per market (e.g. ``markets:CRYPTO_ETH``)
with the last close under a field. The hash carries no timestamp, so the
observation time is the moment of the read.
"""

import time
from collections.abc import Callable
from typing import Any

import redis.asyncio as redis

from pricefeed.config import RedisSourceSettings
from pricefeed.exceptions import QuoteFetchError
from pricefeed.models import Quote
from pricefeed.sources.base import QuoteSource


def build_redis_client(settings: RedisSourceSettings) -> redis.Redis:
    password = settings.password.get_secret_value() or None
    return redis.Redis(
        host=settings.host,
        port=settings.port,
        password=password,
        ssl=settings.tls,
        decode_responses=True,
    )


class RedisQuoteSource(QuoteSource):
    """Reads the latest close from a Redis hash."""

    def __init__(
        self,
        settings: RedisSourceSettings,
        client: Any = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._settings = settings
        self._client = client if client is not None else build_redis_client(settings)
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def fetch_quote(self, symbol: str) -> Quote:
        key = self._settings.key_template.format(symbol=symbol)
        try:
            value = await self._client.hget(key, self._settings.field)
        except redis.RedisError as exc:
            raise QuoteFetchError(f"{symbol}: redis HGET {key} failed: {exc!r}") from exc

        if value is None:
            raise QuoteFetchError(f"{symbol}: key {key!r} with field {self._settings.field!r} not found")
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")

        return Quote(symbol_pair=symbol, raw_price=value, observed_at_ms=self._clock())

    async def close(self) -> None:
        await self._client.aclose()
