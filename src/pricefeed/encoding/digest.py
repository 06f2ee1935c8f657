"""Packed encoding and Keccak-256 digests matching the on-chain verifier.

The verifier recomputes the digest as

    keccak256(abi.encodePacked(price, decimals, dataTimestamp, keccak256(bytes(assetPair))))

with ``price`` a ``string`` and ``decimals`` / ``dataTimestamp`` as ``uint256``.
Layout version 1, packed, no padding between fields:

    | field                | encoding                        | width    |
    |----------------------|---------------------------------|----------|
    | price integer string | UTF-8 bytes                     | variable |
    | decimals             | uint256 big-endian              | 32 bytes |
    | data timestamp (ms)  | uint256 big-endian              | 32 bytes |
    | asset pair hash      | keccak256(UTF-8 asset pair)     | 32 bytes |

Changing the order or width of any field invalidates every deployed verifier
and requires bumping DIGEST_LAYOUT_VERSION together with the contract.
"""

from Crypto.Hash import keccak

from pricefeed.encoding.fixed_point import FixedPointValue

DIGEST_LAYOUT_VERSION = 1

UINT256_BYTES = 32
ADDRESS_BYTES = 20
UINT256_MAX = 2**256 - 1


def keccak256(data: bytes) -> bytes:
    """Ethereum Keccak-256 (original Keccak padding, not NIST SHA3-256)."""
    hasher = keccak.new(digest_bits=256)
    hasher.update(data)
    return hasher.digest()


def encode_uint256(value: int) -> bytes:
    """Encode a non-negative int as a 32-byte big-endian uint256."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"uint256 must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"uint256 out of range: {value}")
    return value.to_bytes(UINT256_BYTES, "big")


def encode_address(address: str) -> bytes:
    """Decode a 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str) or not address.startswith(("0x", "0X")):
        raise ValueError(f"address must be 0x-prefixed hex: {address!r}")
    body = address[2:]
    if len(body) != ADDRESS_BYTES * 2:
        raise ValueError(f"address must be {ADDRESS_BYTES} bytes: {address!r}")
    try:
        return bytes.fromhex(body)
    except ValueError as exc:
        raise ValueError(f"address is not hex: {address!r}") from exc


def asset_pair_hash(asset_pair: str) -> bytes:
    """keccak256 of the asset pair identifier's UTF-8 bytes (a Solidity bytes32)."""
    return keccak256(asset_pair.encode("utf-8"))


def pack_attestation(value: FixedPointValue, data_timestamp: int, asset_pair: str) -> bytes:
    """Return the packed preimage of the attestation digest (layout version 1)."""
    return b"".join(
        (
            value.integer_value.encode("utf-8"),
            encode_uint256(value.decimals),
            encode_uint256(data_timestamp),
            asset_pair_hash(asset_pair),
        )
    )


def build_digest(value: FixedPointValue, data_timestamp: int, asset_pair: str) -> bytes:
    """Compute the 32-byte attestation digest the verifier recomputes."""
    return keccak256(pack_attestation(value, data_timestamp, asset_pair))


def pack_mint_authorization(to_address: str, shares_amount: int, nonce: int) -> bytes:
    """abi.encodePacked(address to, uint256 sharesAmount, uint256 nonce)."""
    return encode_address(to_address) + encode_uint256(shares_amount) + encode_uint256(nonce)


def build_mint_digest(to_address: str, shares_amount: int, nonce: int) -> bytes:
    return keccak256(pack_mint_authorization(to_address, shares_amount, nonce))
