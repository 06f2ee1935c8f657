"""Encoding layer -- fixed-point conversion and verifier-compatible digests."""

from pricefeed.encoding.digest import (
    DIGEST_LAYOUT_VERSION,
    asset_pair_hash,
    build_digest,
    build_mint_digest,
    keccak256,
    pack_attestation,
)
from pricefeed.encoding.fixed_point import FixedPointValue, to_fixed_point

__all__ = [
    "DIGEST_LAYOUT_VERSION",
    "FixedPointValue",
    "asset_pair_hash",
    "build_digest",
    "build_mint_digest",
    "keccak256",
    "pack_attestation",
    "to_fixed_point",
]
