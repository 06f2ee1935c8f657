"""Attested price feed -- signed fixed-point price attestations for on-chain verifiers."""

__version__ = "0.1.0"
