"""
Cryptographic primitives for the Massa protocol.

Provides the hash function and the BIP-340 Schnorr signature scheme over
secp256k1 used by the network. Primitives are grouped behind a CryptoBackend
so codecs, account derivation and signing receive them explicitly instead of
patching a third-party library at import time.
"""

from __future__ import annotations
import secrets
from abc import ABC, abstractmethod
from typing import Optional

from blake3 import blake3
from coincurve import PrivateKey, PublicKeyXOnly

from ..runtime.errors import DecodeError, ErrorCode

# secp256k1 group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

MIN_ENTROPY_BYTES = 32
MAX_ENTROPY_BYTES = 1024


class CryptoBackend(ABC):
    """
    Hash and signature primitives.

    Implementations must be deterministic: the same inputs always produce the
    same digest, public key, private key and signature.
    """

    name = "abstract"

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """Return the 32-byte digest of data."""

    @abstractmethod
    def public_key(self, private_key: bytes) -> bytes:
        """Derive the public key bytes from a private key."""

    @abstractmethod
    def hash_to_private_key(self, entropy: bytes) -> bytes:
        """Map entropy bytes to a valid private key."""

    @abstractmethod
    def sign(self, digest: bytes, private_key: bytes) -> bytes:
        """Sign a 32-byte digest."""

    @abstractmethod
    def verify(self, signature: bytes, digest: bytes, public_key: bytes) -> bool:
        """Verify a signature over a 32-byte digest."""

    def random_bytes(self, length: int) -> bytes:
        """Return cryptographically secure random bytes."""
        return secrets.token_bytes(length)


class Secp256k1SchnorrBackend(CryptoBackend):
    """
    BLAKE3 hashing with BIP-340 Schnorr signatures (libsecp256k1 via coincurve).

    Public keys are 32-byte x-only keys, signatures are 64 bytes. Signing uses
    a fixed all-zero auxiliary value, so signatures are reproducible.
    """

    name = "secp256k1-schnorr-blake3"

    _AUX_RANDOMNESS = bytes(32)

    def hash(self, data: bytes) -> bytes:
        return blake3(bytes(data)).digest()

    def public_key(self, private_key: bytes) -> bytes:
        return PublicKeyXOnly.from_secret(self._check_private_key(private_key)).format()

    def hash_to_private_key(self, entropy: bytes) -> bytes:
        """
        Reduce entropy into the range [1, N-1].

        Args:
            entropy: 32 to 1024 bytes, read as a big-endian integer

        Returns:
            32-byte big-endian private key

        Raises:
            DecodeError: If the entropy length is out of range
        """
        if not MIN_ENTROPY_BYTES <= len(entropy) <= MAX_ENTROPY_BYTES:
            raise DecodeError(
                f"Expected {MIN_ENTROPY_BYTES}-{MAX_ENTROPY_BYTES} bytes of entropy, got {len(entropy)}",
                ErrorCode.INVALID_KEY
            )
        num = int.from_bytes(entropy, "big") % (SECP256K1_N - 1) + 1
        return num.to_bytes(32, "big")

    def sign(self, digest: bytes, private_key: bytes) -> bytes:
        key = PrivateKey(self._check_private_key(private_key))
        return key.sign_schnorr(digest, self._AUX_RANDOMNESS)

    def verify(self, signature: bytes, digest: bytes, public_key: bytes) -> bool:
        if len(signature) != 64 or len(public_key) != 32:
            return False
        try:
            return PublicKeyXOnly(public_key).verify(signature, digest)
        except (ValueError, TypeError):
            return False

    @staticmethod
    def _check_private_key(private_key: bytes) -> bytes:
        if len(private_key) != 32:
            raise DecodeError(f"Private key must be 32 bytes, got {len(private_key)}", ErrorCode.INVALID_KEY)
        if not 0 < int.from_bytes(private_key, "big") < SECP256K1_N:
            raise DecodeError("Private key is outside the secp256k1 scalar range", ErrorCode.INVALID_KEY)
        return private_key


_default_backend: Optional[CryptoBackend] = None


def get_default_backend() -> CryptoBackend:
    """Get the process-wide backend, creating the Schnorr/BLAKE3 one on first use."""
    global _default_backend
    if _default_backend is None:
        _default_backend = Secp256k1SchnorrBackend()
    return _default_backend


def set_default_backend(backend: Optional[CryptoBackend]) -> None:
    """Replace the process-wide backend (None restores the built-in one)."""
    global _default_backend
    _default_backend = backend


__all__ = [
    "CryptoBackend",
    "Secp256k1SchnorrBackend",
    "SECP256K1_N",
    "get_default_backend",
    "set_default_backend",
]
