"""RTCP receiver report packets (RFC 3550, section 6.4.2)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rtpparse.rtcp_header import RtcpHeader
from rtpparse.rtcp_report_block import RtcpReportBlock
from rtpparse.util import BitReader, BitWriter

_RR_PT = 201


@dataclass
class RtcpRrPacket:
    """A receiver report: sender SSRC followed by report blocks."""

    header: RtcpHeader = field(default_factory=lambda: RtcpHeader(packet_type=_RR_PT))
    sender_ssrc: int = 0
    report_blocks: list[RtcpReportBlock] = field(default_factory=list)

    PT: ClassVar[int] = _RR_PT

    @classmethod
    def read(cls, reader: BitReader, header: RtcpHeader) -> RtcpRrPacket:
        """Read the payload that follows an already-read ``header``."""
        sender_ssrc = reader.read_u32()
        report_blocks = [RtcpReportBlock.read(reader) for _ in range(header.report_count)]
        return cls(header, sender_ssrc, report_blocks)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        writer.write_u32(self.sender_ssrc)
        for block in self.report_blocks:
            block.write(writer)

    def payload_length_bytes(self) -> int:
        return len(self.report_blocks) * RtcpReportBlock.SIZE_BYTES

    def sync(self) -> None:
        """Bring the header's report count and length in line with the contents."""
        self.header.sync(self.payload_length_bytes(), len(self.report_blocks))