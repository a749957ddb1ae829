"""
Account records and their deterministic construction.

An Account bundles an address with the base58-encoded key material it is
derived from. Every construction path goes through AccountFactory so the
address is always the one derived from the public key.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field

from ..codec.keys import base58_decode, base58_encode, derive_address
from ..crypto.backend import CryptoBackend, get_default_backend
from ..runtime.errors import MismatchError, MissingKeyMaterialError

logger = logging.getLogger(__name__)

ENTROPY_BYTES = 32


class Account(BaseModel):
    """
    Key-material identity.

    Immutable once built. ``private_key`` is None for observation-only
    accounts, which can be listed but not used to sign.
    """
    address: str
    public_key: str = Field(alias="publicKey")
    private_key: Optional[str] = Field(default=None, alias="privateKey")
    random_entropy: Optional[str] = Field(default=None, alias="randomEntropy")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def can_sign(self) -> bool:
        return bool(self.private_key and self.public_key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary used by the node and the keystore."""
        return self.model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"Account(address='{self.address}', can_sign={self.can_sign})"

    __str__ = __repr__


class PartialAccount(BaseModel):
    """Caller-supplied key material, any subset of the Account fields."""
    address: Optional[str] = None
    public_key: Optional[str] = Field(default=None, alias="publicKey")
    private_key: Optional[str] = Field(default=None, alias="privateKey")
    random_entropy: Optional[str] = Field(default=None, alias="randomEntropy")

    model_config = {"populate_by_name": True, "frozen": True}


AccountLike = Union[Account, PartialAccount, Mapping[str, Any]]


def to_partial(value: AccountLike) -> PartialAccount:
    """Normalize an Account, PartialAccount or dict into a PartialAccount."""
    if isinstance(value, PartialAccount):
        return value
    if isinstance(value, Account):
        return PartialAccount.model_validate(value.model_dump())
    return PartialAccount.model_validate(dict(value))


class AccountFactory:
    """
    Builds Accounts from private keys, entropy, or partial key material.

    All entry points are pure apart from ``generate``, which draws entropy
    from the backend.
    """

    def __init__(self, backend: Optional[CryptoBackend] = None):
        """
        Initialize the factory.

        Args:
            backend: Crypto primitives; defaults to the process-wide backend
        """
        self.backend = backend or get_default_backend()

    def _public_key_and_address(self, private_key: bytes):
        public_key = self.backend.public_key(private_key)
        return base58_encode(public_key), derive_address(public_key, self.backend)

    def _private_key_from_entropy(self, entropy: str) -> str:
        return base58_encode(self.backend.hash_to_private_key(base58_decode(entropy)))

    def from_private_key(self, private_key: str) -> Account:
        """
        Build an account from a base58 private key.

        Raises:
            DecodeError: If the key is not valid base58 or not a valid scalar
        """
        public_key, address = self._public_key_and_address(base58_decode(private_key))
        return Account(
            address=address,
            public_key=public_key,
            private_key=private_key,
            random_entropy=None,
        )

    def from_entropy(self, entropy: str) -> Account:
        """Build an account from base58 entropy, keeping the entropy on the record."""
        private_key = self._private_key_from_entropy(entropy)
        public_key, address = self._public_key_and_address(base58_decode(private_key))
        return Account(
            address=address,
            public_key=public_key,
            private_key=private_key,
            random_entropy=entropy,
        )

    def generate(self) -> Account:
        """Generate a new account from fresh random entropy."""
        entropy = base58_encode(self.backend.random_bytes(ENTROPY_BYTES))
        account = self.from_entropy(entropy)
        logger.debug(f"Generated new account {account.address}")
        return account

    def reconcile(self, partial: AccountLike) -> Account:
        """
        Complete and cross-check caller-supplied key material.

        The private key comes from the entropy when entropy is given, otherwise
        from the supplied private key. Every other supplied field must equal
        the value derived from it.

        Args:
            partial: Account, PartialAccount or dict (snake_case or camelCase keys)

        Returns:
            Fully derived Account

        Raises:
            MissingKeyMaterialError: If neither entropy nor private key is present
            MismatchError: If a supplied private key, public key or address
                does not match the derived one
            DecodeError: If any supplied encoding is malformed
        """
        data = to_partial(partial)
        if not data.random_entropy and not data.private_key:
            raise MissingKeyMaterialError("Missing account entropy / private key")

        if data.random_entropy:
            private_key = self._private_key_from_entropy(data.random_entropy)
            if data.private_key and data.private_key != private_key:
                raise MismatchError("Private key does not correspond to the entropy submitted")
        else:
            private_key = data.private_key

        public_key, address = self._public_key_and_address(base58_decode(private_key))

        if data.public_key and data.public_key != public_key:
            raise MismatchError(
                "Public key does not correspond to the private key submitted",
                details={"expected": public_key, "submitted": data.public_key}
            )
        if data.address and data.address != address:
            raise MismatchError(
                "Account address does not correspond to the address submitted",
                details={"expected": address, "submitted": data.address}
            )

        return Account(
            address=address,
            public_key=public_key,
            private_key=private_key,
            random_entropy=data.random_entropy or None,
        )


def account_from_private_key(private_key: str, backend: Optional[CryptoBackend] = None) -> Account:
    """Build an account from a base58 private key."""
    return AccountFactory(backend).from_private_key(private_key)


def account_from_entropy(entropy: str, backend: Optional[CryptoBackend] = None) -> Account:
    """Build an account from base58 entropy."""
    return AccountFactory(backend).from_entropy(entropy)


def generate_account(backend: Optional[CryptoBackend] = None) -> Account:
    """Generate a fresh random account."""
    return AccountFactory(backend).generate()


__all__ = [
    "Account",
    "PartialAccount",
    "AccountLike",
    "AccountFactory",
    "to_partial",
    "account_from_private_key",
    "account_from_entropy",
    "generate_account",
]
