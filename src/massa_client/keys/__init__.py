"""
Key management infrastructure for the Massa protocol.

Provides account derivation, the in-memory wallet and encrypted wallet storage.
"""

from .account import (
    Account,
    PartialAccount,
    AccountFactory,
    account_from_private_key,
    account_from_entropy,
    generate_account,
)
from .wallet import MAX_WALLET_ACCOUNTS, Wallet
from .keystore import WalletKeystore

__all__ = [
    "Account",
    "PartialAccount",
    "AccountFactory",
    "account_from_private_key",
    "account_from_entropy",
    "generate_account",
    "MAX_WALLET_ACCOUNTS",
    "Wallet",
    "WalletKeystore",
]
