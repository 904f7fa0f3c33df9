"""The RTP fixed header with CSRCs and header extensions (RFC 3550, section 5.1)."""

from __future__ import annotations

from dataclasses import dataclass, field

from rtpparse.header_extensions import HeaderExtensions
from rtpparse.util import BitReader, BitWriter


@dataclass
class RtpHeader:
    """An RTP header, including contributing sources and extensions."""

    version: int = 2
    has_padding: bool = False
    has_extensions: bool = False
    csrc_count: int = 0
    marked: bool = False
    payload_type: int = 0
    seq_num: int = 0
    timestamp: int = 0
    ssrc: int = 0
    csrcs: list[int] = field(default_factory=list)
    extensions: HeaderExtensions = field(default_factory=HeaderExtensions)

    @classmethod
    def read(cls, reader: BitReader) -> RtpHeader:
        version = reader.read_bits(2)
        has_padding = reader.read_bool()
        has_extensions = reader.read_bool()
        csrc_count = reader.read_bits(4)
        marked = reader.read_bool()
        payload_type = reader.read_bits(7)
        seq_num = reader.read_u16()
        timestamp = reader.read_u32()
        ssrc = reader.read_u32()
        csrcs = [reader.read_u32() for _ in range(csrc_count)]
        extensions = HeaderExtensions.read(reader) if has_extensions else HeaderExtensions()
        return cls(
            version=version,
            has_padding=has_padding,
            has_extensions=has_extensions,
            csrc_count=csrc_count,
            marked=marked,
            payload_type=payload_type,
            seq_num=seq_num,
            timestamp=timestamp,
            ssrc=ssrc,
            csrcs=csrcs,
            extensions=extensions,
        )

    def write(self, writer: BitWriter) -> None:
        writer.write_bits(self.version, 2)
        writer.write_bool(self.has_padding)
        writer.write_bool(self.has_extensions)
        writer.write_bits(self.csrc_count, 4)
        writer.write_bool(self.marked)
        writer.write_bits(self.payload_type, 7)
        writer.write_u16(self.seq_num)
        writer.write_u32(self.timestamp)
        writer.write_u32(self.ssrc)
        for csrc in self.csrcs:
            writer.write_u32(csrc)
        self.extensions.write(writer)