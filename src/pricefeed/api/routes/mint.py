"""KYC mint-signature endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from pricefeed.exceptions import AuthorizationDenied, InvalidMintRequest

log = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/kyc/mint-signature")
async def mint_signature(request: Request) -> JSONResponse:
    """Sign a mint authorization for a KYC-verified address."""
    authorizer = request.app.state.mint_authorizer
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be JSON"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

    try:
        authorization = await authorizer.authorize(body.get("to"), body.get("sharesAmount"))
    except InvalidMintRequest as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except AuthorizationDenied as exc:
        log.info("mint_authorization_denied", to=body.get("to"))
        return JSONResponse({"error": str(exc)}, status_code=403)
    except Exception:
        log.exception("mint_signature_failed")
        return JSONResponse({"error": "Failed to generate KYC signature"}, status_code=500)

    log.info("mint_authorization_issued", to=authorization.to, nonce=authorization.nonce)
    return JSONResponse(authorization.to_response())
