"""HTTP quote source via httpx async.

Expects a JSON body {"symbol": ..., "price": ..., "timestamp": ...} where
price is a decimal string (or JSON number) and timestamp is Unix milliseconds.
JSON numbers are decoded straight to Decimal so no float ever touches a price.
"""

import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx

from pricefeed.config import HttpSourceSettings
from pricefeed.exceptions import QuoteFetchError
from pricefeed.models import Quote
from pricefeed.sources.base import QuoteSource


def price_to_str(value: Any) -> str:
    """Normalize an upstream price field to a decimal string."""
    if isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise QuoteFetchError(f"price has unsupported type {type(value).__name__}")


def timestamp_to_ms(value: Any, fallback: Callable[[], int]) -> int:
    """Normalize an upstream timestamp (Unix ms) or fall back to the local clock."""
    if value is None:
        return fallback()
    if isinstance(value, bool):
        raise QuoteFetchError("timestamp must be a number")
    try:
        ts = int(Decimal(str(value)))
    except (ArithmeticError, ValueError) as exc:
        raise QuoteFetchError(f"timestamp is not numeric: {value!r}") from exc
    if ts < 0:
        raise QuoteFetchError(f"timestamp is negative: {ts}")
    return ts


class HttpQuoteSource(QuoteSource):
    """Reads quotes from a read-only HTTP endpoint."""

    def __init__(
        self,
        settings: HttpSourceSettings,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def fetch_quote(self, symbol: str) -> Quote:
        url = self._settings.url_template.format(symbol=symbol)
        try:
            response = await self._client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise QuoteFetchError(f"{symbol}: request to {url} failed: {exc!r}") from exc

        if not response.is_success:
            raise QuoteFetchError(f"{symbol}: upstream returned HTTP {response.status_code}")

        try:
            body = response.json(parse_float=Decimal)
        except ValueError as exc:
            raise QuoteFetchError(f"{symbol}: upstream body is not JSON") from exc
        if not isinstance(body, dict):
            raise QuoteFetchError(f"{symbol}: upstream body is not a JSON object")

        raw_price = body.get(self._settings.price_field)
        if raw_price is None:
            raise QuoteFetchError(f"{symbol}: upstream body has no {self._settings.price_field!r}")

        return Quote(
            symbol_pair=str(body.get("symbol") or symbol),
            raw_price=price_to_str(raw_price),
            observed_at_ms=timestamp_to_ms(body.get(self._settings.timestamp_field), self._clock),
        )

    async def close(self) -> None:
        await self._client.aclose()
