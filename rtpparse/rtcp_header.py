"""The fixed header shared by all RTCP packets (RFC 3550, section 6.1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from rtpparse.util import BitReader, BitWriter, ParseError

_RTCP_VERSION = 2
_MAX_REPORT_COUNT = 0x1F
_MAX_U16 = 0xFFFF


@dataclass
class RtcpHeader:
    """Version, padding flag, report count, packet type and length field.

    ``length_field`` is the packet length in 32-bit words minus one, so it
    counts the words that follow this 4-byte header.
    """

    version: int = _RTCP_VERSION
    has_padding: bool = False
    report_count: int = 0
    packet_type: int = 0
    length_field: int = 0

    SIZE_BYTES: ClassVar[int] = 4

    @classmethod
    def read(cls, reader: BitReader) -> RtcpHeader:
        version = reader.read_bits(2)
        if version != _RTCP_VERSION:
            raise ParseError(f"Invalid RTCP version {version}, expected {_RTCP_VERSION}")
        has_padding = reader.read_bool()
        report_count = reader.read_bits(5)
        packet_type = reader.read_u8()
        length_field = reader.read_u16()
        return cls(version, has_padding, report_count, packet_type, length_field)

    def write(self, writer: BitWriter) -> None:
        writer.write_bits(self.version, 2)
        writer.write_bool(self.has_padding)
        writer.write_bits(self.report_count, 5)
        writer.write_u8(self.packet_type)
        writer.write_u16(self.length_field)

    def payload_length_bytes(self) -> int:
        """Length in bytes of the packet's payload, i.e. everything after this header."""
        length = self.length_field * 4
        if length > _MAX_U16:
            raise ParseError("Invalid length field")
        return length

    def sync(self, payload_length_bytes: int, report_count: int) -> None:
        """Update the report count and length field to describe a payload."""
        if not 0 <= report_count <= _MAX_REPORT_COUNT:
            raise ValueError(f"report count {report_count} does not fit in 5 bits")
        length_field = payload_length_bytes // 4
        if not 0 <= length_field <= _MAX_U16:
            raise ValueError(f"payload length {payload_length_bytes} does not fit the length field")
        self.report_count = report_count
        self.length_field = length_field


def get_sender_ssrc(buf: bytes) -> int:
    """Sender SSRC of an unparsed RTCP packet (the word right after the header)."""
    if len(buf) < 8:
        raise ParseError(f"buffer of {len(buf)} bytes is too short to hold a sender SSRC")
    return int.from_bytes(buf[4:8], "big")