"""Report blocks and sender info carried by RTCP SR and RR packets (RFC 3550, 6.4)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from rtpparse.util import BitReader, BitWriter


@dataclass
class RtcpReportBlock:
    """Reception statistics about one source."""

    ssrc: int = 0
    fraction_lost: int = 0
    cumulative_lost: int = 0
    extended_highest_seq_num: int = 0
    interarrival_jitter: int = 0
    last_sr_timestamp: int = 0
    delay_since_last_sr: int = 0

    SIZE_BYTES: ClassVar[int] = 24

    @classmethod
    def read(cls, reader: BitReader) -> RtcpReportBlock:
        return cls(
            ssrc=reader.read_u32(),
            fraction_lost=reader.read_u8(),
            cumulative_lost=reader.read_u24(),
            extended_highest_seq_num=reader.read_u32(),
            interarrival_jitter=reader.read_u32(),
            last_sr_timestamp=reader.read_u32(),
            delay_since_last_sr=reader.read_u32(),
        )

    def write(self, writer: BitWriter) -> None:
        writer.write_u32(self.ssrc)
        writer.write_u8(self.fraction_lost)
        writer.write_u24(self.cumulative_lost)
        writer.write_u32(self.extended_highest_seq_num)
        writer.write_u32(self.interarrival_jitter)
        writer.write_u32(self.last_sr_timestamp)
        writer.write_u32(self.delay_since_last_sr)


@dataclass
class RtcpSenderInfo:
    """NTP and RTP timestamps and transmission counters of a sender report."""

    ntp_timestamp_msw: int = 0
    ntp_timestamp_lsw: int = 0
    rtp_timestamp: int = 0
    sender_packet_count: int = 0
    sender_octet_count: int = 0

    SIZE_BYTES: ClassVar[int] = 20

    @classmethod
    def read(cls, reader: BitReader) -> RtcpSenderInfo:
        return cls(
            ntp_timestamp_msw=reader.read_u32(),
            ntp_timestamp_lsw=reader.read_u32(),
            rtp_timestamp=reader.read_u32(),
            sender_packet_count=reader.read_u32(),
            sender_octet_count=reader.read_u32(),
        )

    def write(self, writer: BitWriter) -> None:
        writer.write_u32(self.ntp_timestamp_msw)
        writer.write_u32(self.ntp_timestamp_lsw)
        writer.write_u32(self.rtp_timestamp)
        writer.write_u32(self.sender_packet_count)
        writer.write_u32(self.sender_octet_count)