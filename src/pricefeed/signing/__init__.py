"""Signing layer -- Ethereum-style secp256k1 signer and reference verifier."""

from pricefeed.signing.signer import Signer, eth_message_hash, to_checksum_address
from pricefeed.signing.verify import recover_address, verify

__all__ = ["Signer", "eth_message_hash", "recover_address", "to_checksum_address", "verify"]
