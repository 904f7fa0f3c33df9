"""Full Intra Request payload-specific feedback messages (RFC 5104, section 4.3.1)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rtpparse.rtcp_fb_header import RTCP_FB_PS_PT, RtcpFbHeader
from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter, ParseError

_FIR_FMT = 4


@dataclass
class RtcpFbFirFci:
    """One FIR entry: the target media sender's SSRC and a command sequence number."""

    ssrc: int = 0
    seq_num: int = 0

    SIZE_BYTES: ClassVar[int] = 8

    @classmethod
    def read(cls, reader: BitReader) -> RtcpFbFirFci:
        ssrc = reader.read_u32()
        seq_num = reader.read_u8()
        reader.read_u24()  # reserved
        return cls(ssrc, seq_num)

    def write(self, writer: BitWriter) -> None:
        writer.write_u32(self.ssrc)
        writer.write_u8(self.seq_num)
        writer.write_u24(0)


@dataclass
class RtcpFbFirPacket:
    """A FIR message: one FCI entry per media sender asked for a decoder refresh.

    The media source SSRC of the feedback header is unused and must be 0.
    """

    header: RtcpHeader = field(
        default_factory=lambda: RtcpHeader(packet_type=RTCP_FB_PS_PT, report_count=_FIR_FMT)
    )
    fb_header: RtcpFbHeader = field(default_factory=lambda: RtcpFbHeader(media_source_ssrc=0))
    fcis: list[RtcpFbFirFci] = field(default_factory=list)

    FMT: ClassVar[int] = _FIR_FMT

    @classmethod
    def read(
        cls, reader: BitReader, header: RtcpHeader, fb_header: RtcpFbHeader
    ) -> RtcpFbFirPacket:
        """Read FCI entries following already-read headers until the reader is empty."""
        if header.report_count != _FIR_FMT:
            raise ParseError(
                f"FIR packet must have format {_FIR_FMT}, got {header.report_count}"
            )
        if fb_header.media_source_ssrc != 0:
            raise ParseError(
                f"FIR packet media source SSRC must be 0, got {fb_header.media_source_ssrc}"
            )
        fcis = []
        while reader.remaining_bytes() > 0:
            fcis.append(RtcpFbFirFci.read(reader))
        return cls(header, fb_header, fcis)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        self.fb_header.write(writer)
        for fci in self.fcis:
            fci.write(writer)

    def payload_length_bytes(self) -> int:
        """Size in bytes of the FCI entries (the feedback header is not included)."""
        return len(self.fcis) * RtcpFbFirFci.SIZE_BYTES

    def sync(self) -> None:
        """Bring the header's format and length in line with the contents."""
        self.header.sync(self.payload_length_bytes() + RtcpFbHeader.SIZE_BYTES, _FIR_FMT)

    def add_fci(self, fci: RtcpFbFirFci) -> RtcpFbFirPacket:
        self.fcis.append(fci)
        return self