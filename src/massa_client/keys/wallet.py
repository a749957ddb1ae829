"""
In-memory wallet for Massa accounts.

Holds an ordered, address-unique collection of accounts plus an optional
base account used as the default signer. Addresses are compared case
insensitively.
"""

from __future__ import annotations
import logging
import threading
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..crypto.backend import CryptoBackend
from ..runtime.errors import IncompleteResponseError, MassaError, ErrorCode, TooManyAccountsError, UnknownSignerError
from ..signers.engine import Payload, Signature, SigningEngine
from ..types import AddressInfo, FullAccountView
from .account import Account, AccountFactory, AccountLike

logger = logging.getLogger(__name__)

MAX_WALLET_ACCOUNTS = 256

AddressInfoFetcher = Callable[[List[str]], Awaitable[Sequence[Union[AddressInfo, Mapping[str, Any]]]]]


def normalize_address(address: str) -> str:
    return address.lower()


class Wallet:
    """
    Wallet for managing accounts and signing with them.

    Mutations (add, remove, base account, clear) are serialized under a
    single re-entrant lock so address uniqueness and base-account membership
    hold when the wallet is shared between threads or tasks.
    """

    def __init__(
        self,
        base_account: Optional[AccountLike] = None,
        *,
        backend: Optional[CryptoBackend] = None,
        address_info_fetcher: Optional[AddressInfoFetcher] = None,
    ):
        """
        Initialize wallet.

        Args:
            base_account: Optional account to add and use as default signer
            backend: Crypto primitives for derivation and signing
            address_info_fetcher: Async lookup used by wallet_info
        """
        self.factory = AccountFactory(backend)
        self.signing_engine = SigningEngine(self.factory.backend)
        self.address_info_fetcher = address_info_fetcher
        self._accounts: "OrderedDict[str, Account]" = OrderedDict()
        self._base_key: Optional[str] = None
        self._lock = threading.RLock()

        if base_account is not None:
            self.set_base_account(base_account)

    @staticmethod
    def _check_batch_size(count: int, kind: str) -> None:
        if count > MAX_WALLET_ACCOUNTS:
            raise TooManyAccountsError(
                f"Maximum number of allowed wallet accounts exceeded {MAX_WALLET_ACCOUNTS}. "
                f"Submitted {kind}: {count}"
            )

    def _insert_new(self, candidates: Iterable[Account]) -> List[Account]:
        added: List[Account] = []
        with self._lock:
            for account in candidates:
                key = normalize_address(account.address)
                if key in self._accounts:
                    continue
                self._accounts[key] = account
                added.append(account)
        if added:
            logger.debug(f"Added {len(added)} account(s) to wallet")
        return added

    def add_private_keys(self, private_keys: Sequence[str]) -> List[Account]:
        """
        Add accounts derived from base58 private keys.

        Keys whose address is already present (or repeated in the batch) are
        skipped. Either every key is derived or nothing is added.

        Args:
            private_keys: Base58 encoded private keys

        Returns:
            Accounts actually added, in input order

        Raises:
            TooManyAccountsError: If more than MAX_WALLET_ACCOUNTS keys are given
            DecodeError: If a key is malformed
        """
        self._check_batch_size(len(private_keys), "private keys")
        derived = [self.factory.from_private_key(key) for key in private_keys]
        return self._insert_new(derived)

    def add_accounts(self, accounts: Sequence[AccountLike]) -> List[Account]:
        """
        Add accounts from full or partial key material.

        Each entry needs entropy or a private key; supplied public keys and
        addresses are checked against the derived ones.

        Raises:
            TooManyAccountsError: If more than MAX_WALLET_ACCOUNTS accounts are given
            MissingKeyMaterialError: If an entry has neither entropy nor private key
            MismatchError: If an entry is internally inconsistent
        """
        self._check_batch_size(len(accounts), "accounts")
        reconciled = [self.factory.reconcile(account) for account in accounts]
        return self._insert_new(reconciled)

    def remove_addresses(self, addresses: Iterable[str]) -> None:
        """Remove accounts by address. Unknown addresses are ignored."""
        if isinstance(addresses, str):
            raise TypeError("remove_addresses expects a collection of addresses, not a single string")
        with self._lock:
            for address in addresses:
                key = normalize_address(address)
                if self._accounts.pop(key, None) is None:
                    continue
                if key == self._base_key:
                    self._base_key = None
                logger.debug(f"Removed account {address} from wallet")

    def get_account(self, address: str) -> Optional[Account]:
        """Get a wallet account by address (case insensitive)."""
        with self._lock:
            return self._accounts.get(normalize_address(address))

    def get_accounts(self) -> List[Account]:
        """List all accounts in insertion order."""
        with self._lock:
            return list(self._accounts.values())

    @property
    def accounts(self) -> List[Account]:
        return self.get_accounts()

    def clear(self) -> None:
        """Delete all accounts and the base account."""
        with self._lock:
            self._accounts.clear()
            self._base_key = None

    def set_base_account(self, account: AccountLike) -> Account:
        """
        Set the default (base) account.

        The account is added first if the wallet does not hold its address;
        otherwise the wallet's stored copy becomes the base account.

        Returns:
            The stored base account
        """
        address = account.get("address") if isinstance(account, Mapping) else account.address
        with self._lock:
            existing = self.get_account(address) if address else None
            if existing is None:
                reconciled = self.factory.reconcile(account)
                self._insert_new([reconciled])
                existing = self._accounts[normalize_address(reconciled.address)]
            self._base_key = normalize_address(existing.address)
            return existing

    @property
    def base_account(self) -> Optional[Account]:
        with self._lock:
            if self._base_key is None:
                return None
            return self._accounts.get(self._base_key)

    def sign(self, payload: Payload, signer_address: str) -> Signature:
        """
        Sign a payload with a wallet account.

        Raises:
            UnknownSignerError: If the signer is not in the wallet
        """
        signer = self.get_account(signer_address)
        if signer is None:
            raise UnknownSignerError(f"No signer account {signer_address} found in wallet")
        return self.signing_engine.sign(payload, signer)

    async def wallet_info(self) -> List[FullAccountView]:
        """
        Show wallet info: key material merged with each address's ledger data.

        Returns:
            One view per account, in wallet order

        Raises:
            IncompleteResponseError: If the node does not return one entry per address
        """
        accounts = self.get_accounts()
        if not accounts:
            return []
        if self.address_info_fetcher is None:
            raise MassaError("Wallet has no address info fetcher configured", ErrorCode.CONFIGURATION)

        addresses = [account.address for account in accounts]
        infos = await self.address_info_fetcher(addresses)

        by_address: Dict[str, Dict[str, Any]] = {}
        for info in infos:
            data = info.model_dump() if isinstance(info, AddressInfo) else dict(info)
            key = normalize_address(str(data.get("address") or ""))
            if key in by_address:
                raise IncompleteResponseError(f"Duplicate wallet entry returned for {data.get('address')}")
            by_address[key] = data

        requested = {normalize_address(address) for address in addresses}
        if set(by_address) != requested:
            missing = sorted(requested - set(by_address))
            raise IncompleteResponseError(
                f"Requested wallets not fully retrieved. Got {len(infos)}, expected: {len(accounts)}",
                details={"missing": missing},
            )

        views = []
        for account in accounts:
            data = by_address[normalize_address(account.address)]
            data.update(
                publicKey=account.public_key,
                privateKey=account.private_key,
                randomEntropy=account.random_entropy,
            )
            views.append(FullAccountView.model_validate(data))
        return views

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._accounts

    def __repr__(self) -> str:
        return f"Wallet(accounts={len(self)}, base={self._base_key is not None})"


__all__ = [
    "MAX_WALLET_ACCOUNTS",
    "AddressInfoFetcher",
    "Wallet",
    "normalize_address",
]
