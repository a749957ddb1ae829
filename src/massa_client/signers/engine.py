"""
Message signing for Massa accounts.

Every signature is produced over the hash of the payload and verified
against the account's public key before it is returned, so a key pair
mismatch fails locally instead of being rejected by the node.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional, Union

from pydantic import BaseModel, Field

from ..codec.keys import base58_decode, base58_encode
from ..crypto.backend import CryptoBackend, get_default_backend
from ..runtime.errors import (
    DecodeError,
    InvalidSignatureLengthError,
    MissingKeyMaterialError,
    SignatureVerificationError,
)

if TYPE_CHECKING:
    from ..keys.account import Account

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64

Payload = Union[bytes, bytearray, str]


class Signature(BaseModel):
    """Two encodings of one 64-byte signature."""
    hex: str
    base58_encoded: str = Field(alias="base58Encoded")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.hex)


def _payload_bytes(payload: Payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return bytes(payload)


class SigningEngine:
    """
    Hash, sign, self-verify, encode.

    Stateless apart from its backend; safe to share between tasks.
    """

    def __init__(self, backend: Optional[CryptoBackend] = None):
        self.backend = backend or get_default_backend()

    def sign(self, payload: Payload, account: Account) -> Signature:
        """
        Sign a payload with an account's private key.

        Args:
            payload: Bytes to sign (str is UTF-8 encoded)
            account: Signer, must carry both private and public key

        Returns:
            Signature in hex and base58

        Raises:
            MissingKeyMaterialError: If the account lacks a private or public key
            InvalidSignatureLengthError: If the backend returns a non 64-byte signature
            SignatureVerificationError: If the signature does not verify with the public key
        """
        if not account.private_key:
            raise MissingKeyMaterialError("No private key to sign the message with")
        if not account.public_key:
            raise MissingKeyMaterialError("No public key to verify the signed message with")

        digest = self.backend.hash(_payload_bytes(payload))
        sig = self.backend.sign(digest, base58_decode(account.private_key))

        if len(sig) != SIGNATURE_LENGTH:
            raise InvalidSignatureLengthError(
                f"Invalid signature length. Expected {SIGNATURE_LENGTH}, got {len(sig)}"
            )

        if not self.backend.verify(sig, digest, base58_decode(account.public_key)):
            raise SignatureVerificationError(
                "Signature could not be verified with public key",
                details={"address": account.address}
            )

        logger.debug(f"Signed {len(digest)}-byte digest for {account.address}")
        return Signature(hex=sig.hex(), base58_encoded=base58_encode(sig))

    def verify(self, signature: Union[Signature, bytes, str], payload: Payload, public_key: str) -> bool:
        """
        Verify a signature over a payload.

        Args:
            signature: Signature model, raw bytes or hex string
            payload: The signed payload
            public_key: Base58 public key

        Returns:
            True if the signature is valid
        """
        if isinstance(signature, Signature):
            sig = signature.to_bytes()
        elif isinstance(signature, str):
            try:
                sig = bytes.fromhex(signature)
            except ValueError as e:
                raise DecodeError(f"Invalid signature hex: {e}", cause=e) from e
        else:
            sig = bytes(signature)

        if len(sig) != SIGNATURE_LENGTH:
            return False
        digest = self.backend.hash(_payload_bytes(payload))
        return self.backend.verify(sig, digest, base58_decode(public_key))


__all__ = [
    "SIGNATURE_LENGTH",
    "Signature",
    "SigningEngine",
]
