"""Entry point for the attested price feed service.

Component wiring order (in build_components):
1. AppSettings (configuration)
2. Logging setup
3. Signer (fatal if ORACLE_PRIVATE_KEY is missing)
4. Quote sources and FeedServices (FeedRegistry)
5. MintAuthorizer (only when MINT_ENABLED)
6. FastAPI app, served by uvicorn

Refresh is demand-driven: there is no background polling task. The lifespan
only closes the quote sources on shutdown.
"""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from pricefeed.api.app import create_app
from pricefeed.config import AppSettings
from pricefeed.exceptions import MissingCredential
from pricefeed.logging import get_logger, setup_logging
from pricefeed.service.mint import AllowListKycRegistry, MintAuthorizer
from pricefeed.service.registry import FeedRegistry
from pricefeed.signing.signer import Signer


def build_components(settings: AppSettings) -> dict[str, Any]:
    """Build signer, feed registry and optional mint authorizer from settings.

    Raises:
        MissingCredential: If the signing key is absent or malformed.
    """
    logger = get_logger("pricefeed.main")

    signer = Signer.from_settings(settings.signer)
    logger.info("signer_loaded", address=signer.address)

    registry = FeedRegistry.from_settings(settings, signer)
    for service in registry:
        logger.info(
            "feed_configured",
            feed_id=service.feed_id,
            asset_pair=service.definition.asset_pair,
            decimals=service.definition.decimals,
            ttl_ms=service.definition.ttl_ms,
            source=service.definition.source,
        )

    mint_authorizer = None
    if settings.mint.enabled:
        mint_authorizer = MintAuthorizer(
            signer,
            AllowListKycRegistry(settings.mint.allowlist),
            validity_seconds=settings.mint.validity_seconds,
        )
        logger.info("mint_authorization_enabled", allowlisted=len(settings.mint.allowlist))

    return {
        "signer": signer,
        "registry": registry,
        "mint_authorizer": mint_authorizer,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close quote sources on shutdown."""
    logger = get_logger("pricefeed.main")
    logger.info("lifespan_started", feeds=app.state.registry.feed_ids())

    yield

    await app.state.registry.close()
    logger.info("price_feed_stopped")


def build_app(settings: AppSettings) -> FastAPI:
    components = build_components(settings)
    return create_app(
        registry=components["registry"],
        signer=components["signer"],
        mint_authorizer=components["mint_authorizer"],
        request_timeout=settings.server.request_timeout,
        lifespan=lifespan,
    )


async def run(settings: AppSettings) -> None:
    """Serve the FastAPI app on the configured host and port."""
    logger = get_logger("pricefeed.main")
    app = build_app(settings)

    logger.info("starting_server", host=settings.server.host, port=settings.server.port)
    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="warning",
        log_config=None,
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("pricefeed.main")

    try:
        asyncio.run(run(settings))
    except MissingCredential as exc:
        logger.critical("startup_aborted", reason=str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
