"""
Cryptographic primitives for the Massa protocol.

Provides the BLAKE3 hash and BIP-340 Schnorr signatures behind an injectable backend.
"""

from .backend import (
    CryptoBackend,
    Secp256k1SchnorrBackend,
    SECP256K1_N,
    get_default_backend,
    set_default_backend,
)

__all__ = [
    "CryptoBackend",
    "Secp256k1SchnorrBackend",
    "SECP256K1_N",
    "get_default_backend",
    "set_default_backend",
]
