"""Feed registry -- one FeedService per configured feed id."""

from pricefeed.config import AppSettings
from pricefeed.exceptions import UnknownFeed
from pricefeed.service.feed_service import FeedService
from pricefeed.signing.signer import Signer
from pricefeed.sources.base import QuoteSource
from pricefeed.sources.factory import build_quote_source


class FeedRegistry:
    """Owns the feed services and the quote sources they share."""

    def __init__(self, services: list[FeedService] | None = None) -> None:
        self._services: dict[str, FeedService] = {}
        for service in services or []:
            self.add(service)

    @classmethod
    def from_settings(cls, settings: AppSettings, signer: Signer) -> "FeedRegistry":
        """Build services for settings.feeds, one quote source per source kind."""
        sources: dict[str, QuoteSource] = {}
        registry = cls()
        for definition in settings.feeds:
            if definition.source not in sources:
                sources[definition.source] = build_quote_source(definition.source, settings)
            registry.add(FeedService(definition, sources[definition.source], signer))
        return registry

    def add(self, service: FeedService) -> None:
        if service.feed_id in self._services:
            raise ValueError(f"Duplicate feed id: {service.feed_id!r}")
        self._services[service.feed_id] = service

    def get(self, feed_id: str) -> FeedService:
        try:
            return self._services[feed_id]
        except KeyError:
            raise UnknownFeed(feed_id) from None

    def feed_ids(self) -> list[str]:
        return list(self._services)

    def __iter__(self):
        return iter(self._services.values())

    def __len__(self) -> int:
        return len(self._services)

    async def close(self) -> None:
        """Close every distinct quote source once."""
        seen: set[int] = set()
        for service in self._services.values():
            if id(service.source) in seen:
                continue
            seen.add(id(service.source))
            await service.source.close()
