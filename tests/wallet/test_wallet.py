"""
Tests for the in-memory wallet.

Covers address uniqueness, the account cap, base account handling,
signing and wallet_info enrichment.
"""

import threading
from unittest.mock import AsyncMock

import pytest

from massa_client.keys.wallet import MAX_WALLET_ACCOUNTS, Wallet
from massa_client.runtime.errors import (
    ErrorCode,
    IncompleteResponseError,
    MassaError,
    MismatchError,
    TooManyAccountsError,
    UnknownSignerError,
)
from massa_client.types import AddressInfo, FullAccountView


class TestAddAccounts:

    def test_add_private_keys_in_order(self, wallet, make_private_keys):
        keys = make_private_keys(3)
        added = wallet.add_private_keys(keys)

        assert [a.private_key for a in added] == keys
        assert wallet.get_accounts() == added
        assert len(wallet) == 3

    def test_duplicates_skipped(self, wallet, private_key, other_private_key):
        first = wallet.add_private_keys([private_key])
        added = wallet.add_private_keys([private_key, other_private_key, other_private_key])

        assert len(first) == 1
        assert [a.private_key for a in added] == [other_private_key]
        assert len(wallet) == 2

    def test_cap_is_checked_before_adding(self, wallet, make_private_keys):
        with pytest.raises(TooManyAccountsError) as exc_info:
            wallet.add_private_keys(make_private_keys(MAX_WALLET_ACCOUNTS + 1))

        assert exc_info.value.code == ErrorCode.TOO_MANY_ACCOUNTS
        assert len(wallet) == 0

    def test_cap_allows_exactly_max(self, wallet, make_private_keys):
        added = wallet.add_private_keys(make_private_keys(MAX_WALLET_ACCOUNTS))
        assert len(added) == MAX_WALLET_ACCOUNTS

    def test_add_accounts_cap(self, wallet, make_private_keys):
        accounts = [{"private_key": key} for key in make_private_keys(MAX_WALLET_ACCOUNTS + 1)]
        with pytest.raises(TooManyAccountsError):
            wallet.add_accounts(accounts)
        assert len(wallet) == 0

    def test_add_accounts_reconciles(self, wallet, account, entropy_account):
        added = wallet.add_accounts([
            {"privateKey": account.private_key},
            {"random_entropy": entropy_account.random_entropy},
        ])
        assert added == [account, entropy_account]

    def test_add_accounts_rejects_mismatch_without_partial_insert(self, wallet, account, other_account):
        with pytest.raises(MismatchError):
            wallet.add_accounts([
                {"private_key": other_account.private_key},
                {"private_key": account.private_key, "address": other_account.address},
            ])
        assert len(wallet) == 0

    def test_add_accounts_dedup_is_case_insensitive(self, wallet, account):
        wallet.add_accounts([account])
        added = wallet.add_accounts([{"private_key": account.private_key}])

        assert added == []
        assert account.address.lower() in wallet
        assert account.address.upper() in wallet

    def test_concurrent_adds_keep_addresses_unique(self, wallet, make_private_keys):
        keys = make_private_keys(50)
        threads = [threading.Thread(target=wallet.add_private_keys, args=(keys,)) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        addresses = [a.address for a in wallet.get_accounts()]
        assert len(addresses) == 50
        assert len(set(addresses)) == 50


class TestLookupAndRemoval:

    def test_get_account_case_insensitive(self, wallet, account):
        wallet.add_accounts([account])
        assert wallet.get_account(account.address.upper()) == account
        assert wallet.get_account("AUnknown") is None

    def test_remove_is_idempotent(self, wallet, account, other_account):
        wallet.add_accounts([account, other_account])

        wallet.remove_addresses([account.address.lower()])
        wallet.remove_addresses([account.address, "AUnknown"])

        assert wallet.get_accounts() == [other_account]

    def test_remove_rejects_single_string(self, wallet, account):
        wallet.add_accounts([account])

        with pytest.raises(TypeError):
            wallet.remove_addresses(account.address)
        assert account.address in wallet

    def test_removing_base_account_clears_it(self, wallet, account):
        wallet.set_base_account(account)
        wallet.remove_addresses([account.address])

        assert wallet.base_account is None
        assert len(wallet) == 0

    def test_clear(self, wallet, account):
        wallet.set_base_account(account)
        wallet.clear()

        assert wallet.accounts == []
        assert wallet.base_account is None


class TestBaseAccount:

    def test_set_base_account_adds_missing_account(self, wallet, account):
        stored = wallet.set_base_account({"private_key": account.private_key})

        assert stored == account
        assert wallet.base_account == account
        assert account.address in wallet

    def test_set_base_account_reuses_member(self, wallet, account, other_account):
        wallet.add_accounts([account, other_account])
        wallet.set_base_account(other_account)

        assert wallet.base_account == other_account
        assert len(wallet) == 2

    def test_constructor_base_account(self, backend, account):
        wallet = Wallet(account, backend=backend)
        assert wallet.base_account == account
        assert len(wallet) == 1


class TestSign:

    def test_sign_with_member(self, wallet, account):
        wallet.add_accounts([account])
        signature = wallet.sign(b"payload", account.address.lower())
        assert wallet.signing_engine.verify(signature, b"payload", account.public_key)

    def test_unknown_signer(self, wallet, account):
        with pytest.raises(UnknownSignerError):
            wallet.sign(b"payload", account.address)


class TestWalletInfo:

    @pytest.mark.asyncio
    async def test_empty_wallet_skips_lookup(self, backend):
        fetcher = AsyncMock()
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)

        assert await wallet.wallet_info() == []
        fetcher.assert_not_called()

    @pytest.mark.asyncio
    async def test_merges_in_wallet_order(self, backend, account, entropy_account):
        fetcher = AsyncMock(return_value=[
            AddressInfo(address=account.address, final_balance="10"),
            {"address": entropy_account.address, "final_balance": "20"},
        ])
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)
        wallet.add_accounts([account, entropy_account])

        views = await wallet.wallet_info()

        fetcher.assert_awaited_once_with([account.address, entropy_account.address])
        assert all(isinstance(v, FullAccountView) for v in views)
        assert views[0].public_key == account.public_key
        assert views[0].private_key == account.private_key
        assert views[0].final_balance == "10"
        assert views[1].random_entropy == entropy_account.random_entropy
        assert views[1].to_dict()["final_balance"] == "20"

    @pytest.mark.asyncio
    async def test_incomplete_response(self, backend, account, other_account):
        fetcher = AsyncMock(return_value=[{"address": account.address}])
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)
        wallet.add_accounts([account, other_account])

        with pytest.raises(IncompleteResponseError):
            await wallet.wallet_info()

    @pytest.mark.asyncio
    async def test_duplicate_entry_rejected(self, backend, account, other_account):
        fetcher = AsyncMock(return_value=[{"address": account.address}, {"address": account.address}])
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)
        wallet.add_accounts([account, other_account])

        with pytest.raises(IncompleteResponseError):
            await wallet.wallet_info()

    @pytest.mark.asyncio
    async def test_unrequested_entry_rejected(self, backend, account, other_account):
        fetcher = AsyncMock(return_value=[{"address": account.address}, {"address": "AUnknown"}])
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)
        wallet.add_accounts([account, other_account])

        with pytest.raises(IncompleteResponseError) as exc_info:
            await wallet.wallet_info()
        assert exc_info.value.details["missing"] == [other_account.address.lower()]

    @pytest.mark.asyncio
    async def test_reordered_response_matched_by_address(self, backend, account, other_account):
        fetcher = AsyncMock(return_value=[
            {"address": other_account.address, "final_balance": "2"},
            {"address": account.address.lower(), "final_balance": "1"},
        ])
        wallet = Wallet(backend=backend, address_info_fetcher=fetcher)
        wallet.add_accounts([account, other_account])

        views = await wallet.wallet_info()

        assert [v.public_key for v in views] == [account.public_key, other_account.public_key]
        assert views[0].private_key == account.private_key
        assert views[0].final_balance == "1"
        assert views[1].address == other_account.address
        assert views[1].private_key == other_account.private_key

    @pytest.mark.asyncio
    async def test_requires_fetcher(self, wallet, account):
        wallet.add_accounts([account])
        with pytest.raises(MassaError) as exc_info:
            await wallet.wallet_info()
        assert exc_info.value.code == ErrorCode.CONFIGURATION
