"""
Shared fixtures for the Massa client tests.

Key material is deterministic so derived addresses and signatures are
stable across runs.
"""

import pytest

from massa_client.codec.keys import base58_encode
from massa_client.crypto.backend import Secp256k1SchnorrBackend
from massa_client.keys.account import AccountFactory
from massa_client.keys.wallet import Wallet


@pytest.fixture
def backend():
    """Built-in BLAKE3 / Schnorr backend."""
    return Secp256k1SchnorrBackend()


@pytest.fixture
def factory(backend):
    return AccountFactory(backend)


@pytest.fixture
def private_key():
    """Base58 private key for the scalar 3."""
    return base58_encode((3).to_bytes(32, "big"))


@pytest.fixture
def other_private_key():
    return base58_encode((7).to_bytes(32, "big"))


@pytest.fixture
def entropy():
    """Base58 encoding of 32 bytes of fixed entropy."""
    return base58_encode(bytes(range(32)))


@pytest.fixture
def account(factory, private_key):
    return factory.from_private_key(private_key)


@pytest.fixture
def other_account(factory, other_private_key):
    return factory.from_private_key(other_private_key)


@pytest.fixture
def entropy_account(factory, entropy):
    return factory.from_entropy(entropy)


@pytest.fixture
def wallet(backend):
    return Wallet(backend=backend)


@pytest.fixture
def make_private_keys():
    """Factory for distinct base58 private keys of the scalars start .. start + count - 1."""
    def _make(count, start=1):
        return [base58_encode(n.to_bytes(32, "big")) for n in range(start, start + count)]
    return _make
