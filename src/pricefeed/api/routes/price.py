"""Price attestation endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from pricefeed.exceptions import FeedUnavailable, UnknownFeed

log = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/price/{feed_id}")
async def get_price(feed_id: str, request: Request) -> JSONResponse:
    """Signed attestation for a feed, served from cache while fresh."""
    registry = request.app.state.registry
    try:
        service = registry.get(feed_id)
    except UnknownFeed:
        return JSONResponse({"error": f"Unknown feed: {feed_id}"}, status_code=404)

    try:
        attestation = await service.get_attestation(timeout=request.app.state.request_timeout)
    except FeedUnavailable as exc:
        log.error(
            "price_attestation_failed",
            feed_id=feed_id,
            cause=repr(exc.cause),
            cause_type=type(exc.cause).__name__,
        )
        return JSONResponse({"error": "Failed to fetch price data"}, status_code=503)

    return JSONResponse(attestation.to_response())


@router.get("/feeds")
async def list_feeds(request: Request) -> JSONResponse:
    """Configured feeds with their asset pair ids and cache state."""
    registry = request.app.state.registry
    return JSONResponse([
        {
            "feedId": service.feed_id,
            "assetPair": service.definition.asset_pair,
            "assetPairId": service.asset_pair_id,
            "decimals": service.definition.decimals,
            "ttlMs": service.definition.ttl_ms,
            "source": service.definition.source,
            "cacheState": service.cache_state.value,
        }
        for service in registry
    ])
