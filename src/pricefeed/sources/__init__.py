"""Upstream quote sources -- HTTP, exchange ticker (ccxt) and Redis."""

from pricefeed.sources.base import QuoteSource
from pricefeed.sources.factory import build_quote_source

__all__ = ["QuoteSource", "build_quote_source"]
