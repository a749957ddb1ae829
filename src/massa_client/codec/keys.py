"""
Key and address encodings.

Converts between raw key bytes and the textual forms used on the network:
base-58 with a 4-byte double SHA-256 checksum for keys, entropy and
signatures, and "A"-prefixed addresses derived from public keys.

Address rule (must stay bit-exact with previously derived addresses):

    address = "A" + base58check(uvarint(VERSION_NUMBER) + hash(public_key))
"""

from __future__ import annotations
from typing import Optional

import base58

from ..crypto.backend import CryptoBackend, get_default_backend
from ..runtime.errors import DecodeError
from .writer import BinaryWriter

VERSION_NUMBER = 0
ADDRESS_PREFIX = "A"


def base58_encode(data: bytes) -> str:
    """Encode bytes as base-58 with checksum."""
    return base58.b58encode_check(bytes(data)).decode("ascii")


def base58_decode(text: str) -> bytes:
    """
    Decode base-58 with checksum.

    Raises:
        DecodeError: On characters outside the alphabet or a bad checksum
    """
    if not isinstance(text, str) or not text:
        raise DecodeError(f"Expected a non-empty base58 string, got {text!r}")
    try:
        return base58.b58decode_check(text)
    except ValueError as e:
        raise DecodeError(f"Invalid base58 input: {e}", cause=e) from e


def varint_encode(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned LEB128 varint."""
    writer = BinaryWriter()
    writer.uvarint(value)
    return writer.to_bytes()


def hash_bytes(data: bytes, backend: Optional[CryptoBackend] = None) -> bytes:
    """Hash data with the configured backend (BLAKE3 by default)."""
    return (backend or get_default_backend()).hash(data)


def derive_address(public_key: bytes, backend: Optional[CryptoBackend] = None) -> str:
    """
    Derive the account address of a public key.

    Args:
        public_key: Raw public key bytes
        backend: Hash provider, defaults to the process-wide backend

    Returns:
        Address string starting with "A"
    """
    payload = varint_encode(VERSION_NUMBER) + hash_bytes(public_key, backend)
    return ADDRESS_PREFIX + base58_encode(payload)


def address_payload(address: str) -> bytes:
    """
    Decode an address into its versioned hash payload.

    Raises:
        DecodeError: If the prefix is missing or the body is not valid base58
    """
    if not isinstance(address, str) or not address.startswith(ADDRESS_PREFIX):
        raise DecodeError(f"Address must start with '{ADDRESS_PREFIX}': {address!r}")
    return base58_decode(address[len(ADDRESS_PREFIX):])


__all__ = [
    "VERSION_NUMBER",
    "ADDRESS_PREFIX",
    "base58_encode",
    "base58_decode",
    "varint_encode",
    "hash_bytes",
    "derive_address",
    "address_payload",
]
