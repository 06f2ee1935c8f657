"""Abstract upstream quote source interface.

FeedService depends only on this interface, keeping the transport details
(HTTP, exchange API, Redis) isolated in the concrete implementations.
"""

from abc import ABC, abstractmethod

from pricefeed.models import Quote


class QuoteSource(ABC):
    """Abstract base class for upstream price sources."""

    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch the latest price observation for a symbol.

        Raises:
            QuoteFetchError: On any transport failure, non-success response
                or malformed body.
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None
