"""Tests for base58 check encoding, varints, hashing and address derivation."""

import pytest

from massa_client.codec.keys import (
    ADDRESS_PREFIX,
    VERSION_NUMBER,
    address_payload,
    base58_decode,
    base58_encode,
    derive_address,
    hash_bytes,
    varint_encode,
)
from massa_client.codec.writer import BinaryWriter
from massa_client.runtime.errors import DecodeError, ErrorCode

BLAKE3_EMPTY = "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"


class TestBase58:
    """Base58 with checksum."""

    def test_decode_reverses_encode(self):
        data = bytes(range(40))
        assert base58_decode(base58_encode(data)) == data

    def test_leading_zero_bytes_preserved(self):
        data = b"\x00\x00\x01\x02"
        encoded = base58_encode(data)
        assert encoded.startswith("11")
        assert base58_decode(encoded) == data

    def test_bad_checksum_rejected(self):
        encoded = base58_encode(b"massa")
        tampered = encoded[:-1] + ("2" if encoded[-1] != "2" else "3")
        with pytest.raises(DecodeError) as exc_info:
            base58_decode(tampered)
        assert exc_info.value.code == ErrorCode.INVALID_BASE58

    def test_invalid_alphabet_rejected(self):
        # 0, O, I and l are not part of the alphabet
        with pytest.raises(DecodeError):
            base58_decode("0OIl")

    @pytest.mark.parametrize("value", ["", None, b"abc"])
    def test_non_string_or_empty_rejected(self, value):
        with pytest.raises(DecodeError):
            base58_decode(value)


class TestVarint:
    """Unsigned LEB128."""

    @pytest.mark.parametrize("value,expected", [
        (0, b"\x00"),
        (1, b"\x01"),
        (127, b"\x7f"),
        (128, b"\x80\x01"),
        (300, b"\xac\x02"),
        (16384, b"\x80\x80\x01"),
    ])
    def test_known_encodings(self, value, expected):
        assert varint_encode(value) == expected

    def test_max_u64(self):
        encoded = varint_encode(2 ** 64 - 1)
        assert len(encoded) == 10
        assert encoded[-1] == 0x01

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            varint_encode(-1)

    def test_overflow_rejected(self):
        with pytest.raises(ValueError):
            varint_encode(2 ** 64)

    def test_writer_concatenates_in_order(self):
        writer = BinaryWriter()
        writer.uvarint(300)
        writer.bytes(b"\xde\xad")
        writer.u8(0x1FF)
        assert writer.to_bytes() == b"\xac\x02\xde\xad\xff"


class TestHashAndAddress:
    """Address derivation from public keys."""

    def test_hash_is_blake3(self, backend):
        assert hash_bytes(b"", backend).hex() == BLAKE3_EMPTY
        assert len(hash_bytes(b"massa", backend)) == 32

    def test_address_layout(self, backend):
        public_key = bytes(range(32))
        address = derive_address(public_key, backend)

        assert address.startswith(ADDRESS_PREFIX)
        payload = address_payload(address)
        assert payload == varint_encode(VERSION_NUMBER) + hash_bytes(public_key, backend)
        assert payload[0] == 0

    def test_address_is_deterministic(self, backend):
        public_key = b"\x02" * 32
        assert derive_address(public_key, backend) == derive_address(public_key, backend)
        assert derive_address(public_key, backend) != derive_address(b"\x03" * 32, backend)

    def test_address_payload_requires_prefix(self, backend):
        address = derive_address(b"\x01" * 32, backend)
        with pytest.raises(DecodeError):
            address_payload(address[1:])
