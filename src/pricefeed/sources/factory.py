"""Quote source construction from settings."""

from pricefeed.config import AppSettings, SourceKind
from pricefeed.sources.base import QuoteSource


def build_quote_source(kind: SourceKind, settings: AppSettings) -> QuoteSource:
    """Create the quote source for a feed's configured source kind.

    Imports are deferred so a deployment only loads the transport it uses.
    """
    if kind == "http":
        from pricefeed.sources.http_source import HttpQuoteSource

        return HttpQuoteSource(settings.http_source)
    if kind == "exchange":
        from pricefeed.sources.exchange_source import ExchangeQuoteSource

        return ExchangeQuoteSource(settings.exchange_source)
    if kind == "redis":
        from pricefeed.sources.redis_source import RedisQuoteSource

        return RedisQuoteSource(settings.redis)
    raise ValueError(f"Unknown quote source kind: {kind!r}")
