"""RTCP BYE packets (RFC 3550, section 6.6)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter, ParseError

_BYE_PT = 203
_ALIGNMENT = 4
_MAX_REASON_BYTES = 0xFF


def _reason_bytes(reason: str) -> bytes:
    data = reason.encode("utf-8")
    if len(data) > _MAX_REASON_BYTES:
        raise ValueError(
            f"BYE reason must be at most {_MAX_REASON_BYTES} bytes, got {len(data)}"
        )
    return data


@dataclass
class RtcpByePacket:
    """A BYE packet: the leaving sources and an optional reason for leaving."""

    header: RtcpHeader = field(default_factory=lambda: RtcpHeader(packet_type=_BYE_PT))
    ssrcs: list[int] = field(default_factory=list)
    reason: str | None = None

    PT: ClassVar[int] = _BYE_PT

    @classmethod
    def read(cls, reader: BitReader, header: RtcpHeader) -> RtcpByePacket:
        """Read the payload that follows an already-read ``header``."""
        start = reader.remaining_bytes()
        ssrcs = [reader.read_u32() for _ in range(header.report_count)]
        reason = None
        if reader.remaining_bytes() > 0:
            length = reader.read_u8()
            data = reader.read_bytes(length)
            try:
                reason = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError(f"BYE reason is not valid UTF-8: {exc}") from exc
        while (start - reader.remaining_bytes()) % _ALIGNMENT:
            reader.read_u8()
        return cls(header, ssrcs, reason)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        written = 0
        for ssrc in self.ssrcs:
            writer.write_u32(ssrc)
            written += 4
        if self.reason is not None:
            data = _reason_bytes(self.reason)
            writer.write_u8(len(data))
            writer.write_bytes(data)
            written += 1 + len(data)
        writer.write_bytes(b"\x00" * (-written % _ALIGNMENT))

    def payload_length_bytes(self) -> int:
        """Payload size in bytes: SSRCs, the optional reason, and padding to a word."""
        length = len(self.ssrcs) * 4
        if self.reason is not None:
            length += len(_reason_bytes(self.reason)) + 1
        return length + (-length % _ALIGNMENT)

    def sync(self) -> None:
        """Bring the header's source count and length in line with the contents."""
        self.header.sync(self.payload_length_bytes(), len(self.ssrcs))

    def add_ssrc(self, ssrc: int) -> RtcpByePacket:
        self.ssrcs.append(ssrc)
        return self

    def with_reason(self, reason: str) -> RtcpByePacket:
        self.reason = reason
        return self