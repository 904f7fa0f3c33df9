"""The common header of RTCP feedback messages (RFC 4585, section 6.1)."""

from __future__ import annotations

from dataclasses import dataclass

from rtpparse.util import BitReader, BitWriter

RTCP_FB_TL_PT = 205
"""Packet type of transport-layer feedback messages."""

RTCP_FB_PS_PT = 206
"""Packet type of payload-specific feedback messages."""


@dataclass
class RtcpFbHeader:
    """Sender SSRC and media source SSRC of a feedback message."""

    sender_ssrc: int = 0
    media_source_ssrc: int = 0

    SIZE_BYTES = 8

    @classmethod
    def read(cls, reader: BitReader) -> RtcpFbHeader:
        sender_ssrc = reader.read_u32()
        media_source_ssrc = reader.read_u32()
        return cls(sender_ssrc, media_source_ssrc)

    def write(self, writer: BitWriter) -> None:
        writer.write_u32(self.sender_ssrc)
        writer.write_u32(self.media_source_ssrc)