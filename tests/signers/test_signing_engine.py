"""Tests for the hash, sign, self-verify, encode pipeline."""

from unittest.mock import Mock

import pytest

from massa_client.codec.keys import base58_decode, hash_bytes
from massa_client.crypto.backend import Secp256k1SchnorrBackend
from massa_client.keys.account import Account
from massa_client.runtime.errors import (
    DecodeError,
    InvalidSignatureLengthError,
    MissingKeyMaterialError,
    SignatureVerificationError,
)
from massa_client.signers.engine import SIGNATURE_LENGTH, Signature, SigningEngine

# BIP-340 test vector 0: secret key 3, zero message, zero aux randomness
BIP340_SIG_0 = (
    "e907831f80848d1069a5371b402410364bdf1c5f8307b0084c55f1ce2dca8215"
    "25f66a4a85ea8b71e482a74f382d2ce5ebeee8fdb2172f477df4900d310536c0"
)


class TestBackendSchnorr:

    def test_bip340_vector(self, backend):
        sig = backend.sign(bytes(32), (3).to_bytes(32, "big"))
        assert sig.hex() == BIP340_SIG_0

    def test_verify_rejects_other_key(self, backend):
        digest = hash_bytes(b"payload", backend)
        sig = backend.sign(digest, (3).to_bytes(32, "big"))
        other = backend.public_key((7).to_bytes(32, "big"))
        assert not backend.verify(sig, digest, other)

    @pytest.mark.parametrize("public_key", [b"\x00" * 5, bytes(32)])
    def test_verify_rejects_malformed_public_key(self, backend, public_key):
        assert not backend.verify(bytes(64), bytes(32), public_key)


class TestSigningEngine:

    def test_sign_and_verify(self, backend, account):
        engine = SigningEngine(backend)
        signature = engine.sign(b"hello massa", account)

        raw = signature.to_bytes()
        assert len(raw) == SIGNATURE_LENGTH
        assert base58_decode(signature.base58_encoded) == raw
        assert engine.verify(signature, b"hello massa", account.public_key)

    def test_signature_is_over_payload_hash(self, backend, account):
        engine = SigningEngine(backend)
        signature = engine.sign(b"data", account)

        digest = hash_bytes(b"data", backend)
        assert backend.verify(signature.to_bytes(), digest, base58_decode(account.public_key))

    def test_deterministic(self, backend, account):
        engine = SigningEngine(backend)
        assert engine.sign(b"same", account) == engine.sign(b"same", account)

    def test_str_payload_is_utf8(self, backend, account):
        engine = SigningEngine(backend)
        assert engine.sign("héllo", account) == engine.sign("héllo".encode("utf-8"), account)

    def test_verify_accepts_hex_and_bytes(self, backend, account):
        engine = SigningEngine(backend)
        signature = engine.sign(b"msg", account)

        assert engine.verify(signature.hex, b"msg", account.public_key)
        assert engine.verify(signature.to_bytes(), b"msg", account.public_key)
        assert not engine.verify(signature, b"other", account.public_key)

    def test_verify_rejects_bad_hex(self, backend, account):
        with pytest.raises(DecodeError):
            SigningEngine(backend).verify("zz", b"msg", account.public_key)

    def test_verify_rejects_short_signature(self, backend, account):
        assert not SigningEngine(backend).verify(b"\x01" * 63, b"msg", account.public_key)

    def test_missing_private_key(self, backend, account):
        watch_only = Account(address=account.address, public_key=account.public_key)
        with pytest.raises(MissingKeyMaterialError):
            SigningEngine(backend).sign(b"msg", watch_only)

    def test_invalid_signature_length(self, account):
        backend = Secp256k1SchnorrBackend()
        backend.sign = Mock(return_value=b"\x01" * 63)

        with pytest.raises(InvalidSignatureLengthError):
            SigningEngine(backend).sign(b"msg", account)

    def test_self_verification_failure(self, account, other_account):
        mismatched = Account(
            address=account.address,
            public_key=other_account.public_key,
            private_key=account.private_key,
        )
        with pytest.raises(SignatureVerificationError) as exc_info:
            SigningEngine(Secp256k1SchnorrBackend()).sign(b"msg", mismatched)
        assert exc_info.value.details["address"] == account.address


class TestSignatureModel:

    def test_camel_case_alias(self):
        sig = Signature.model_validate({"hex": "00" * 64, "base58Encoded": "abc"})
        assert sig.base58_encoded == "abc"
        assert sig.model_dump(by_alias=True)["base58Encoded"] == "abc"
