"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    signer = request.app.state.signer
    return {
        "status": "ok",
        "signer": signer.address,
        "feeds": request.app.state.registry.feed_ids(),
    }
