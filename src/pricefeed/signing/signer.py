"""secp256k1 attestation signer with the Ethereum personal-message prefix.

Signatures are produced over

    keccak256(b"\\x19Ethereum Signed Message:\\n32" + digest)

which is what ``ECDSA.toEthSignedMessageHash(digest)`` followed by
``ecrecover`` checks on-chain, and what ethers' ``signMessage(arrayify(digest))``
produces off-chain. Output is 65 bytes: r (32) || s (32) || v (1), v in {27, 28}.
"""

from coincurve import PrivateKey

from pricefeed.config import SignerSettings
from pricefeed.encoding.digest import keccak256
from pricefeed.exceptions import MissingCredential

DIGEST_BYTES = 32
SIGNATURE_BYTES = 65
ETH_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n32"


def eth_message_hash(digest: bytes) -> bytes:
    """Apply the EIP-191 personal-message prefix to a 32-byte digest and hash it."""
    if len(digest) != DIGEST_BYTES:
        raise ValueError(f"digest must be {DIGEST_BYTES} bytes, got {len(digest)}")
    return keccak256(ETH_MESSAGE_PREFIX + digest)


def to_checksum_address(address: str) -> str:
    """EIP-55 mixed-case checksum encoding of a 20-byte hex address."""
    body = address[2:] if address.startswith(("0x", "0X")) else address
    body = body.lower()
    if len(body) != 40 or any(c not in "0123456789abcdef" for c in body):
        raise ValueError(f"not a 20-byte hex address: {address!r}")
    hashed = keccak256(body.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if int(hashed[i], 16) >= 8 else c for i, c in enumerate(body)
    )


def public_key_to_address(uncompressed: bytes) -> str:
    """Derive the checksummed address from a 65-byte uncompressed public key."""
    return to_checksum_address(keccak256(uncompressed[1:])[-20:].hex())


class Signer:
    """Holds the process-wide signing key.

    Read-only after construction and shared by all requests without locking.
    The key never appears in repr/str and the signer cannot be pickled.
    """

    __slots__ = ("_key", "_address")

    def __init__(self, private_key: bytes) -> None:
        try:
            self._key = PrivateKey(private_key)
        except (ValueError, TypeError):
            raise MissingCredential("Signing key is not a valid secp256k1 private key") from None
        self._address = public_key_to_address(self._key.public_key.format(compressed=False))

    @classmethod
    def from_settings(cls, settings: SignerSettings) -> "Signer":
        """Load the key from settings (ORACLE_PRIVATE_KEY).

        Raises:
            MissingCredential: If the key is empty or malformed.
        """
        raw = settings.private_key.get_secret_value().strip()
        if not raw:
            raise MissingCredential("ORACLE_PRIVATE_KEY is not set")
        if raw.startswith(("0x", "0X")):
            raw = raw[2:]
        if len(raw) != 64:
            raise MissingCredential("ORACLE_PRIVATE_KEY must be 32 bytes of hex")
        try:
            key_bytes = bytes.fromhex(raw)
        except ValueError:
            raise MissingCredential("ORACLE_PRIVATE_KEY is not valid hex") from None
        return cls(key_bytes)

    @property
    def address(self) -> str:
        """EIP-55 address the verifier recovers from this signer's signatures."""
        return self._address

    @property
    def public_key_hex(self) -> str:
        """Compressed SEC1 public key, hex encoded."""
        return self._key.public_key.format(compressed=True).hex()

    def sign(self, digest: bytes) -> bytes:
        """Sign a 32-byte digest with the personal-message prefix.

        Returns:
            65 bytes r || s || v with v in {27, 28}.
        """
        message_hash = eth_message_hash(digest)
        recoverable = self._key.sign_recoverable(message_hash, hasher=None)
        return recoverable[:64] + bytes([recoverable[64] + 27])

    def sign_hex(self, digest: bytes) -> str:
        return "0x" + self.sign(digest).hex()

    def __repr__(self) -> str:
        return f"Signer(address={self._address})"

    def __reduce__(self):
        raise TypeError("Signer holds a private key and cannot be serialized")
