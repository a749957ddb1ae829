"""
Binary Writer

Builds the byte layout of signable operation payloads: unsigned
LEB128 varints and raw byte strings, in write order.
"""

from typing import List

MAX_UVARINT = 0xFFFFFFFFFFFFFFFF


class BinaryWriter:
    """
    Append-only byte buffer with varint support.

    Example:
        >>> w = BinaryWriter()
        >>> w.uvarint(300)
        >>> w.to_bytes()
        b'\\xac\\x02'
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """Write a single unsigned byte."""
        self._bb.append(v & 0xFF)

    def bytes(self, v: bytes) -> None:
        """Write raw bytes without length prefix."""
        self._bb.extend(v)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Args:
            v: Integer in [0, 2**64 - 1]

        Raises:
            ValueError: If v is negative or does not fit in 64 bits
        """
        if v < 0:
            raise ValueError(f"uvarint requires a non-negative integer, got {v}")
        if v > MAX_UVARINT:
            raise ValueError(f"uvarint value does not fit in 64 bits: {v}")
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def to_bytes(self) -> bytes:
        """Return accumulated bytes as immutable bytes object."""
        return bytes(self._bb)
