"""RTCP source description (SDES) packets (RFC 3550, section 6.5)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter, ParseError

_SDES_PT = 202
_CNAME_TYPE = 1
_EMPTY_TYPE = 0
_MAX_ITEM_DATA = 0xFF
_ALIGNMENT = 4


def _check_item_length(data: bytes) -> bytes:
    if len(data) > _MAX_ITEM_DATA:
        raise ValueError(f"SDES item data must be at most {_MAX_ITEM_DATA} bytes, got {len(data)}")
    return data


@dataclass
class SdesEmpty:
    """The null item that ends the item list of a chunk."""

    def length_bytes(self) -> int:
        return 1

    def write(self, writer: BitWriter) -> None:
        writer.write_u8(_EMPTY_TYPE)


@dataclass
class SdesCname:
    """A canonical name (CNAME) item."""

    value: str

    def _encoded(self) -> bytes:
        return _check_item_length(self.value.encode("utf-8"))

    def length_bytes(self) -> int:
        return 2 + len(self._encoded())

    def write(self, writer: BitWriter) -> None:
        data = self._encoded()
        writer.write_u8(_CNAME_TYPE)
        writer.write_u8(len(data))
        writer.write_bytes(data)


@dataclass
class SdesUnknown:
    """An item of a type this package does not interpret; its data is kept as is."""

    item_type: int
    data: bytes

    def length_bytes(self) -> int:
        return 2 + len(self.data)

    def write(self, writer: BitWriter) -> None:
        data = _check_item_length(bytes(self.data))
        writer.write_u8(self.item_type)
        writer.write_u8(len(data))
        writer.write_bytes(data)


SdesItem = Union[SdesEmpty, SdesCname, SdesUnknown]


def read_sdes_item(reader: BitReader) -> SdesItem:
    """Read one SDES item: an id byte, then (unless it is 0) a length and the value."""
    item_type = reader.read_u8()
    if item_type == _EMPTY_TYPE:
        return SdesEmpty()
    length = reader.read_u8()
    value = reader.read_bytes(length)
    if item_type == _CNAME_TYPE:
        try:
            return SdesCname(value.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ParseError(f"CNAME is not valid UTF-8: {exc}") from exc
    return SdesUnknown(item_type, value)


@dataclass
class SdesChunk:
    """An SSRC/CSRC with its SDES items.

    The terminating empty item is not kept in ``sdes_items``; it is added on write.
    """

    ssrc: int = 0
    sdes_items: list[SdesItem] = field(default_factory=list)

    def add_item(self, item: SdesItem) -> SdesChunk:
        self.sdes_items.append(item)
        return self

    def length_bytes(self) -> int:
        """Size on the wire: SSRC, items, the terminating null item and padding to a word."""
        length = 4 + sum(item.length_bytes() for item in self.sdes_items) + 1
        return length + (-length % _ALIGNMENT)

    @classmethod
    def read(cls, reader: BitReader) -> SdesChunk:
        start = reader.remaining_bytes()
        ssrc = reader.read_u32()
        items: list[SdesItem] = []
        while True:
            try:
                item = read_sdes_item(reader)
            except ParseError as exc:
                raise ParseError(f"item {len(items) + 1}: {exc}") from exc
            if isinstance(item, SdesEmpty):
                break
            items.append(item)
        while (start - reader.remaining_bytes()) % _ALIGNMENT:
            reader.read_u8()
        return cls(ssrc, items)

    def write(self, writer: BitWriter) -> None:
        writer.write_u32(self.ssrc)
        written = 4
        for item in self.sdes_items:
            item.write(writer)
            written += item.length_bytes()
        SdesEmpty().write(writer)
        written += 1
        writer.write_bytes(b"\x00" * (-written % _ALIGNMENT))


@dataclass
class RtcpSdesPacket:
    """An SDES packet: one chunk per described source."""

    header: RtcpHeader = field(default_factory=lambda: RtcpHeader(packet_type=_SDES_PT))
    chunks: list[SdesChunk] = field(default_factory=list)

    PT: ClassVar[int] = _SDES_PT

    @classmethod
    def read(cls, reader: BitReader, header: RtcpHeader) -> RtcpSdesPacket:
        """Read the chunks that follow an already-read ``header``."""
        if header.packet_type != _SDES_PT:
            raise ParseError(
                f"SDES packet must have packet type {_SDES_PT}, got {header.packet_type}"
            )
        chunks = []
        for num in range(1, header.report_count + 1):
            try:
                chunks.append(SdesChunk.read(reader))
            except ParseError as exc:
                raise ParseError(f"chunk {num}: {exc}") from exc
        return cls(header, chunks)

    def write(self, writer: BitWriter) -> None:
        self.header.write(writer)
        for chunk in self.chunks:
            chunk.write(writer)

    def payload_length_bytes(self) -> int:
        return sum(chunk.length_bytes() for chunk in self.chunks)

    def sync(self) -> None:
        """Bring the header's source count and length in line with the contents."""
        self.header.sync(self.payload_length_bytes(), len(self.chunks))

    def add_chunk(self, chunk: SdesChunk) -> RtcpSdesPacket:
        self.chunks.append(chunk)
        return self