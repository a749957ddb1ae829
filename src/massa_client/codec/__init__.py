"""
Massa codecs.

- keys.py: base58 check encoding, varints, hashing and address derivation
- writer.py: binary writer for operation payloads
- operation.py: signable byte layout of operations
"""

from .keys import (
    VERSION_NUMBER,
    ADDRESS_PREFIX,
    base58_encode,
    base58_decode,
    varint_encode,
    hash_bytes,
    derive_address,
    address_payload,
)
from .writer import BinaryWriter

__all__ = [
    "VERSION_NUMBER",
    "ADDRESS_PREFIX",
    "base58_encode",
    "base58_decode",
    "varint_encode",
    "hash_bytes",
    "derive_address",
    "address_payload",
    "BinaryWriter",
]
