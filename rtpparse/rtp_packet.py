"""RTP packets: a parsed header followed by an opaque payload."""

from __future__ import annotations

from dataclasses import dataclass, field

from rtpparse.header_extensions import HeaderExtension
from rtpparse.rtp_header import RtpHeader
from rtpparse.util import BitReader


@dataclass
class RtpPacket:
    """An RTP packet (RFC 3550, section 5.1)."""

    header: RtpHeader = field(default_factory=RtpHeader)
    payload: bytes = b""

    @classmethod
    def read(cls, reader: BitReader) -> RtpPacket:
        """Read the header, then take everything remaining as the payload."""
        header = RtpHeader.read(reader)
        payload = reader.read_bytes(reader.remaining_bytes())
        return cls(header, payload)

    def payload_type(self) -> int:
        return self.header.payload_type

    def ssrc(self) -> int:
        return self.header.ssrc

    def get_extension_by_id(self, ext_id: int) -> HeaderExtension | None:
        return self.header.extensions.get_by_id(ext_id)

    def __str__(self) -> str:
        return "[" + ", ".join(f"{b:x}" for b in self.payload) + "]"