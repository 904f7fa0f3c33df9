"""RTCP sender report packets (RFC 3550, section 6.4.1)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rtpparse.rtcp_header import RtcpHeader
from rtpparse.rtcp_report_block import RtcpReportBlock, RtcpSenderInfo
from rtpparse.util import BitReader, BitWriter

_SR_PT = 200


@dataclass
class RtcpSrPacket:
    """A sender report: sender SSRC, sender info and report blocks."""

    header: RtcpHeader = field(default_factory=lambda: RtcpHeader(packet_type=_SR_PT))
    sender_ssrc: int = 0
    sender_info: RtcpSenderInfo = field(default_factory=RtcpSenderInfo)
    report_blocks: list[RtcpReportBlock] = field(default_factory=list)

    PT: ClassVar[int] = _SR_PT

    @classmethod
    def read(cls, reader: BitReader, header: RtcpHeader) -> RtcpSrPacket:
        """Read the payload that follows an already-read ``header``."""
        sender_ssrc = reader.read_u32()
        sender_info = RtcpSenderInfo.read(reader)
        report_blocks = [RtcpReportBlock.read(reader) for _ in range(header.report_count)]
        return cls(header, sender_ssrc, sender_info, report_blocks)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        writer.write_u32(self.sender_ssrc)
        self.sender_info.write(writer)
        for block in self.report_blocks:
            block.write(writer)

    def payload_length_bytes(self) -> int:
        return RtcpSenderInfo.SIZE_BYTES + len(self.report_blocks) * RtcpReportBlock.SIZE_BYTES

    def sync(self) -> None:
        """Bring the header's report count and length in line with the contents."""
        self.header.sync(self.payload_length_bytes(), len(self.report_blocks))