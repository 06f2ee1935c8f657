"""KYC-gated mint authorization signing.

Signs keccak256(abi.encodePacked(address to, uint256 sharesAmount, uint256 nonce))
with the same personal-message prefix as price attestations. The nonce is the
issue time in Unix seconds and the authorization expires validity_seconds later.

Whether an address is verified is decided by a KycRegistry supplied by the
deploying system. The only built-in registry is an explicit allowlist.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from pricefeed.encoding.digest import UINT256_MAX, build_mint_digest, encode_address
from pricefeed.exceptions import AuthorizationDenied, InvalidMintRequest
from pricefeed.models import MintAuthorization
from pricefeed.signing.signer import Signer


class KycRegistry(ABC):
    """Source of truth for KYC status (external collaborator)."""

    @abstractmethod
    async def is_verified(self, address: str) -> bool:
        """Return True if the address passed KYC."""
        ...


class AllowListKycRegistry(KycRegistry):
    """Verifies exactly the configured addresses (case-insensitive)."""

    def __init__(self, addresses: Iterable[str] = ()) -> None:
        self._addresses = frozenset(a.lower() for a in addresses)

    async def is_verified(self, address: str) -> bool:
        return address.lower() in self._addresses


def _parse_shares(raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidMintRequest("sharesAmount must be an integer")
    if isinstance(raw, int):
        shares = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        shares = int(raw)
    else:
        raise InvalidMintRequest("sharesAmount must be a non-negative integer string")
    if not 0 < shares <= UINT256_MAX:
        raise InvalidMintRequest("sharesAmount must be positive and fit in uint256")
    return shares


class MintAuthorizer:
    """Issues signed mint authorizations for KYC-verified addresses."""

    def __init__(
        self,
        signer: Signer,
        registry: KycRegistry,
        validity_seconds: int = 300,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._signer = signer
        self._registry = registry
        self._validity_seconds = validity_seconds
        self._clock = clock or time.time

    async def authorize(self, to: Any, shares_amount: Any) -> MintAuthorization:
        """Sign a mint authorization.

        Raises:
            InvalidMintRequest: If to or shares_amount is missing or malformed.
            AuthorizationDenied: If the registry does not verify the address.
        """
        if not to or shares_amount in (None, ""):
            raise InvalidMintRequest("Missing required parameters: to, sharesAmount")
        if not isinstance(to, str):
            raise InvalidMintRequest("to must be a 0x-prefixed address")
        try:
            encode_address(to)
        except ValueError as exc:
            raise InvalidMintRequest(str(exc)) from exc
        shares = _parse_shares(shares_amount)

        if not await self._registry.is_verified(to):
            raise AuthorizationDenied("Address not KYC verified")

        nonce = int(self._clock())
        digest = build_mint_digest(to, shares, nonce)
        return MintAuthorization(
            signature=self._signer.sign_hex(digest),
            nonce=nonce,
            to=to,
            shares_amount=str(shares),
            expires_at=nonce + self._validity_seconds,
        )
