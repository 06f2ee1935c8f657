"""Reference verifier: recovers the signer the way the contract's ecrecover does."""

from coincurve import PublicKey

from pricefeed.signing.signer import (
    SIGNATURE_BYTES,
    eth_message_hash,
    public_key_to_address,
    to_checksum_address,
)


def _signature_bytes(signature: bytes | str) -> bytes:
    if isinstance(signature, str):
        body = signature[2:] if signature.startswith(("0x", "0X")) else signature
        signature = bytes.fromhex(body)
    if len(signature) != SIGNATURE_BYTES:
        raise ValueError(f"signature must be {SIGNATURE_BYTES} bytes, got {len(signature)}")
    return signature


def recover_address(digest: bytes, signature: bytes | str) -> str:
    """Recover the checksummed signer address from a prefixed-message signature.

    Raises:
        ValueError: If the signature is malformed or recovery fails.
    """
    sig = _signature_bytes(signature)
    v = sig[64]
    if v not in (27, 28):
        raise ValueError(f"signature v must be 27 or 28, got {v}")
    public_key = PublicKey.from_signature_and_message(
        sig[:64] + bytes([v - 27]), eth_message_hash(digest), hasher=None
    )
    return public_key_to_address(public_key.format(compressed=False))


def verify(digest: bytes, signature: bytes | str, expected_address: str) -> bool:
    """Return True if signature over digest recovers to expected_address.

    A malformed signature or expected_address verifies as False.
    """
    try:
        recovered = recover_address(digest, signature)
        expected = to_checksum_address(expected_address)
    except ValueError:
        return False
    return recovered == expected
