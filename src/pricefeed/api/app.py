"""FastAPI application factory for the attested price feed."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from pricefeed.api.routes import health, mint, price
from pricefeed.service.mint import MintAuthorizer
from pricefeed.service.registry import FeedRegistry
from pricefeed.signing.signer import Signer


def create_app(
    registry: FeedRegistry,
    signer: Signer,
    mint_authorizer: MintAuthorizer | None = None,
    request_timeout: float | None = None,
    lifespan: Any = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        registry: Feed services, constructed once at startup.
        signer: Process-wide signer (exposed by address only).
        mint_authorizer: Enables the KYC mint-signature route when given.
        request_timeout: Seconds a request waits on an in-flight refresh.
        lifespan: Optional async context manager for startup/shutdown.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Attested Price Feed",
        description="Signed fixed-point price attestations for on-chain verifiers",
        lifespan=lifespan,
    )

    app.state.registry = registry
    app.state.signer = signer
    app.state.mint_authorizer = mint_authorizer
    app.state.request_timeout = request_timeout

    app.include_router(health.router)
    app.include_router(price.router, prefix="/api/v1")
    if mint_authorizer is not None:
        app.include_router(mint.router, prefix="/api/v1")

    return app
