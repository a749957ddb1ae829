"""
Password-encrypted wallet storage.

Uses Fernet (AES-128-CBC with HMAC-SHA256) for authenticated encryption and
PBKDF2-HMAC-SHA256 for key derivation. Accounts are re-validated through
the wallet when imported, so a tampered or corrupted record cannot enter the
wallet with a mismatched address.
"""

from __future__ import annotations
import base64
import json
import logging
import os
from typing import Any, Dict, List, Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..runtime.errors import KeystoreError
from .account import Account
from .wallet import Wallet

logger = logging.getLogger(__name__)

KEYSTORE_VERSION = 1


class WalletKeystore:
    """
    Encrypts and decrypts a wallet's accounts with a password.

    Example:
        >>> store = WalletKeystore("correct horse battery staple")
        >>> data = store.export_wallet(wallet)
        >>> WalletKeystore("correct horse battery staple", salt=store.salt).import_wallet(data, Wallet())
    """

    # OWASP 2023 recommendation for PBKDF2-SHA256
    PBKDF2_ITERATIONS = 480000

    def __init__(self, password: str, salt: Optional[bytes] = None, iterations: Optional[int] = None):
        """
        Initialize keystore with password-based encryption.

        Args:
            password: Encryption password
            salt: Optional 16-byte salt, generated randomly if not provided
            iterations: PBKDF2 iteration count override
        """
        self.salt = salt if salt is not None else os.urandom(16)
        self.iterations = iterations or self.PBKDF2_ITERATIONS
        self._fernet = self._derive_fernet(password)

    def _derive_fernet(self, password: str) -> Fernet:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=self.salt,
            iterations=self.iterations,
        )
        key = base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))
        return Fernet(key)

    def export_wallet(self, wallet: Wallet) -> Dict[str, Any]:
        """
        Encrypt every account of a wallet.

        Returns:
            JSON-serializable dictionary with version, salt, iteration count,
            encrypted accounts and the base account address
        """
        accounts: List[str] = []
        for account in wallet.get_accounts():
            plaintext = json.dumps(account.to_dict(), sort_keys=True).encode("utf-8")
            accounts.append(self._fernet.encrypt(plaintext).decode("ascii"))

        base = wallet.base_account
        logger.debug(f"Exported {len(accounts)} account(s) to encrypted keystore")
        return {
            "version": KEYSTORE_VERSION,
            "salt": base64.b64encode(self.salt).decode("ascii"),
            "iterations": self.iterations,
            "accounts": accounts,
            "baseAddress": base.address if base else None,
        }

    def import_wallet(self, data: Dict[str, Any], wallet: Wallet) -> List[Account]:
        """
        Decrypt exported accounts into a wallet.

        Args:
            data: Output of export_wallet
            wallet: Destination wallet

        Returns:
            Accounts added to the wallet

        Raises:
            KeystoreError: On version mismatch, wrong password or corrupted data
        """
        version = data.get("version")
        if version != KEYSTORE_VERSION:
            raise KeystoreError(f"Incompatible keystore version: {version}")

        records = []
        for token in data.get("accounts", []):
            try:
                plaintext = self._fernet.decrypt(token.encode("ascii"))
            except InvalidToken as e:
                raise KeystoreError("Failed to decrypt keystore (wrong password or corrupted data)", cause=e) from e
            records.append(json.loads(plaintext))

        added = wallet.add_accounts(records)
        base_address = data.get("baseAddress")
        if base_address:
            base = wallet.get_account(base_address)
            if base is None:
                raise KeystoreError(f"Base account {base_address} missing from keystore accounts")
            wallet.set_base_account(base)
        return added

    @classmethod
    def from_export(cls, data: Dict[str, Any], password: str) -> WalletKeystore:
        """Rebuild the keystore that produced an export, using its salt and iteration count."""
        try:
            salt = base64.b64decode(data["salt"])
        except (KeyError, ValueError) as e:
            raise KeystoreError("Keystore export has no valid salt", cause=e) from e
        return cls(password, salt=salt, iterations=data.get("iterations"))


__all__ = [
    "KEYSTORE_VERSION",
    "WalletKeystore",
]
