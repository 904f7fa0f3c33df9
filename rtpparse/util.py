"""Bit-level reading and writing, plus quick packet classification helpers."""

from __future__ import annotations

# Demultiplexing ranges for the first byte of a packet (RFC 7983, section 7),
# and the RTCP packet type range used to tell RTP and RTCP apart.
_DTLS_RANGE = range(20, 64)
_RTP_RTCP_RANGE = range(128, 192)
_RTCP_PACKET_TYPE_RANGE = range(192, 224)

_RTP_HEADER_SIZE_BYTES = 12
_RTCP_HEADER_SIZE_BYTES = 4


class ParseError(ValueError):
    """Raised when data cannot be parsed or does not fit its wire format."""


class BitReader:
    """Reads big-endian bit fields from a byte string, tracking position."""

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._pos = 0
        self._end = len(self._data) * 8

    def __repr__(self) -> str:
        return f"BitReader(pos={self._pos}, remaining_bits={self.remaining_bits()})"

    def remaining_bits(self) -> int:
        """Number of bits not yet read."""
        return self._end - self._pos

    def remaining_bytes(self) -> int:
        """Number of whole bytes not yet read."""
        return self.remaining_bits() // 8

    def peek_bits(self, count: int) -> int:
        """Return the next ``count`` bits as an unsigned integer without consuming them."""
        if count < 0:
            raise ValueError("bit count must not be negative")
        remaining = self.remaining_bits()
        if count > remaining:
            raise ParseError(f"needed {count} bits but only {remaining} remain")
        if count == 0:
            return 0
        start = self._pos
        end = start + count
        first = start // 8
        last = (end + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        return (chunk >> (last * 8 - end)) & ((1 << count) - 1)

    def read_bits(self, count: int) -> int:
        """Consume ``count`` bits and return them as an unsigned integer."""
        value = self.peek_bits(count)
        self._pos += count
        return value

    def read_bool(self) -> bool:
        return self.read_bits(1) == 1

    def read_u8(self) -> int:
        return self.read_bits(8)

    def read_u16(self) -> int:
        return self.read_bits(16)

    def read_u24(self) -> int:
        return self.read_bits(24)

    def read_u32(self) -> int:
        return self.read_bits(32)

    def read_bytes(self, count: int) -> bytes:
        """Consume ``count`` bytes and return them."""
        if count < 0:
            raise ValueError("byte count must not be negative")
        if self._pos % 8 == 0:
            if count * 8 > self.remaining_bits():
                raise ParseError(
                    f"needed {count} bytes but only {self.remaining_bytes()} remain"
                )
            start = self._pos // 8
            self._pos += count * 8
            return self._data[start : start + count]
        return self.read_bits(count * 8).to_bytes(count, "big")

    def take_bytes(self, count: int) -> BitReader:
        """Consume ``count`` bytes and return a new reader limited to them."""
        return BitReader(self.read_bytes(count))


class BitWriter:
    """Accumulates big-endian bit fields into a byte string."""

    def __init__(self) -> None:
        self._value = 0
        self._bits = 0

    def __repr__(self) -> str:
        return f"BitWriter(bit_length={self._bits})"

    def bit_length(self) -> int:
        """Number of bits written so far."""
        return self._bits

    def write_bits(self, value: int, count: int) -> None:
        """Append ``value`` as an unsigned field of ``count`` bits."""
        if count < 0:
            raise ValueError("bit count must not be negative")
        if not 0 <= value < (1 << count):
            raise ValueError(f"value {value} does not fit in {count} bits")
        self._value = (self._value << count) | value
        self._bits += count

    def write_bool(self, value: bool) -> None:
        self.write_bits(1 if value else 0, 1)

    def write_u8(self, value: int) -> None:
        self.write_bits(value, 8)

    def write_u16(self, value: int) -> None:
        self.write_bits(value, 16)

    def write_u24(self, value: int) -> None:
        self.write_bits(value, 24)

    def write_u32(self, value: int) -> None:
        self.write_bits(value, 32)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        data = bytes(data)
        if data:
            self.write_bits(int.from_bytes(data, "big"), len(data) * 8)

    def to_bytes(self) -> bytes:
        """Return the written bits, zero-padded up to a whole byte."""
        pad = -self._bits % 8
        length = (self._bits + pad) // 8
        return (self._value << pad).to_bytes(length, "big")


def consume_padding(reader: BitReader) -> None:
    """Skip zero bytes, stopping just before the first non-zero byte."""
    while reader.remaining_bytes() > 0 and reader.peek_bits(8) == 0:
        reader.read_u8()


def looks_like_rtp(buf: bytes) -> bool:
    """True if ``buf`` appears to be an RTP packet."""
    if len(buf) < _RTP_HEADER_SIZE_BYTES:
        return False
    return buf[0] in _RTP_RTCP_RANGE and buf[1] not in _RTCP_PACKET_TYPE_RANGE


def looks_like_rtcp(buf: bytes) -> bool:
    """True if ``buf`` appears to be an RTCP packet."""
    if len(buf) < _RTCP_HEADER_SIZE_BYTES:
        return False
    return buf[0] in _RTP_RTCP_RANGE and buf[1] in _RTCP_PACKET_TYPE_RANGE


def looks_like_dtls(buf: bytes) -> bool:
    """True if ``buf`` appears to be a DTLS record."""
    if not buf:
        return False
    return buf[0] in _DTLS_RANGE