"""Generic NACK transport-layer feedback messages (RFC 4585, section 6.2.1)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from rtpparse.rtcp_fb_header import RTCP_FB_TL_PT, RtcpFbHeader
from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter, ParseError

_NACK_FMT = 1
_BLP_BITS = 16
_SEQ_NUM_MOD = 1 << 16


def chunk_by_max_difference(values: Iterable[int], max_diff: int) -> list[set[int]]:
    """Group sorted ``values`` so no group spans more than ``max_diff`` from its first value."""
    chunks: list[set[int]] = []
    current: set[int] = set()
    first = 0
    for value in sorted(set(values)):
        if current and value - first > max_diff:
            chunks.append(current)
            current = set()
        if not current:
            first = value
        current.add(value)
    if current:
        chunks.append(current)
    return chunks


@dataclass
class NackBlock:
    """One PID/BLP pair describing up to 17 missing sequence numbers."""

    missing_seq_nums: set[int] = field(default_factory=set)

    SIZE_BYTES: ClassVar[int] = 4

    def add_missing_seq_num(self, missing_seq_num: int) -> None:
        self.missing_seq_nums.add(missing_seq_num)

    @classmethod
    def read(cls, reader: BitReader) -> NackBlock:
        packet_id = reader.read_u16()
        blp = reader.read_u16()
        missing = {packet_id}
        missing.update(
            (packet_id + shift + 1) % _SEQ_NUM_MOD
            for shift in range(_BLP_BITS)
            if (blp >> shift) & 1
        )
        return cls(missing)

    def write(self, writer: BitWriter) -> None:
        if not self.missing_seq_nums:
            raise ValueError("NackBlock must contain at least one sequence number")
        packet_id, *rest = sorted(self.missing_seq_nums)
        blp = 0
        for seq_num in rest:
            delta = seq_num - packet_id
            if delta > _BLP_BITS:
                raise ValueError("NACK cannot contain sequence number spread larger than 16")
            blp |= 1 << (delta - 1)
        writer.write_u16(packet_id)
        writer.write_u16(blp)


@dataclass
class RtcpFbNackPacket:
    """A NACK feedback message listing missing RTP sequence numbers."""

    header: RtcpHeader = field(
        default_factory=lambda: RtcpHeader(packet_type=RTCP_FB_TL_PT, report_count=_NACK_FMT)
    )
    fb_header: RtcpFbHeader = field(default_factory=RtcpFbHeader)
    missing_seq_nums: set[int] = field(default_factory=set)

    FMT: ClassVar[int] = _NACK_FMT

    def add_missing_seq_num(self, missing_seq_num: int) -> None:
        self.missing_seq_nums.add(missing_seq_num)

    def _blocks(self) -> list[NackBlock]:
        return [NackBlock(chunk) for chunk in chunk_by_max_difference(self.missing_seq_nums, _BLP_BITS)]

    def payload_length_bytes(self) -> int:
        """Size in bytes of the NACK blocks (the feedback header is not included)."""
        return len(self._blocks()) * NackBlock.SIZE_BYTES

    def sync(self) -> None:
        """Bring the header's format and length in line with the contents."""
        self.header.sync(self.payload_length_bytes() + RtcpFbHeader.SIZE_BYTES, _NACK_FMT)

    @classmethod
    def read(
        cls, reader: BitReader, header: RtcpHeader, fb_header: RtcpFbHeader
    ) -> RtcpFbNackPacket:
        """Read NACK blocks following already-read headers until fewer than 4 bytes remain."""
        missing: set[int] = set()
        block_num = 1
        while reader.remaining_bytes() >= NackBlock.SIZE_BYTES:
            try:
                block = NackBlock.read(reader)
            except ParseError as exc:
                raise ParseError(f"Nack block {block_num}: {exc}") from exc
            missing |= block.missing_seq_nums
            block_num += 1
        return cls(header, fb_header, missing)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        self.fb_header.write(writer)
        for block in self._blocks():
            block.write(writer)