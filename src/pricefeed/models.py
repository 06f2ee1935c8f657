"""Shared data models for the attested price feed.

All models are frozen: an attestation is superseded by the next refresh,
never mutated. Prices travel as strings or FixedPointValue, never as float.
"""

from dataclasses import dataclass
from typing import Any

from pricefeed.encoding.fixed_point import FixedPointValue


@dataclass(frozen=True)
class Quote:
    """An upstream price observation."""

    symbol_pair: str
    raw_price: str  # decimal string as received
    observed_at_ms: int  # Unix milliseconds


@dataclass(frozen=True)
class SignedAttestation:
    """A signed price statement verifiable by the on-chain consumer."""

    price: FixedPointValue
    data_timestamp: int  # Unix milliseconds, part of the digest
    request_timestamp: int  # Unix milliseconds, when the refresh started
    asset_pair: str  # 0x-prefixed keccak256 of the asset pair identifier
    signature: str  # 0x-prefixed 65-byte r || s || v

    @property
    def decimals(self) -> int:
        return self.price.decimals

    def to_response(self) -> dict[str, Any]:
        """JSON body served to API consumers (camelCase wire names)."""
        return {
            "price": self.price.integer_value,
            "dataTimestamp": self.data_timestamp,
            "requestTimestamp": self.request_timestamp,
            "signature": self.signature,
            "assetPair": self.asset_pair,
            "decimals": self.decimals,
        }


@dataclass(frozen=True)
class CacheEntry:
    """The single cached value of a FreshnessCache, replaced wholesale."""

    value: Any
    cached_at_ms: int


@dataclass(frozen=True)
class MintAuthorization:
    """A signed KYC mint authorization."""

    signature: str
    nonce: int  # Unix seconds
    to: str
    shares_amount: str
    expires_at: int  # Unix seconds

    def to_response(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "nonce": self.nonce,
            "to": self.to,
            "sharesAmount": self.shares_amount,
            "expiresAt": self.expires_at,
        }
