"""RTP header extensions in the one-byte and two-byte forms (RFC 8285)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from rtpparse.util import BitReader, BitWriter, ParseError


@dataclass
class OneByteHeaderExtension:
    """An element of a one-byte header extension block (4-bit id, 1 to 16 data bytes)."""

    id: int
    data: bytes

    TYPE = 0xBEDE

    @staticmethod
    def type_matches(ext_type: int) -> bool:
        return ext_type == OneByteHeaderExtension.TYPE

    @classmethod
    def read(cls, reader: BitReader) -> OneByteHeaderExtension:
        ext_id = reader.read_bits(4)
        if ext_id == 0:
            # An id of 0 is padding: its length nibble is ignored and no data follows.
            reader.read_bits(4)
            data_length = 0
        else:
            data_length = reader.read_bits(4) + 1
        if reader.remaining_bytes() < data_length:
            raise ParseError(
                f"Header extension length was {data_length} but buffer only has "
                f"{reader.remaining_bytes()} bytes remaining"
            )
        return cls(ext_id, reader.read_bytes(data_length))

    def write(self, writer: BitWriter) -> None:
        if not 1 <= len(self.data) <= 16:
            raise ValueError(
                f"one-byte header extension data must be 1 to 16 bytes, got {len(self.data)}"
            )
        writer.write_bits(self.id, 4)
        writer.write_bits(len(self.data) - 1, 4)
        writer.write_bytes(self.data)


@dataclass
class TwoByteHeaderExtension:
    """An element of a two-byte header extension block (8-bit id, 0 to 255 data bytes)."""

    id: int
    data: bytes

    TYPE = 0x1000
    TYPE_MASK = 0xFFF0

    @staticmethod
    def type_matches(ext_type: int) -> bool:
        return (ext_type & TwoByteHeaderExtension.TYPE_MASK) == TwoByteHeaderExtension.TYPE

    @classmethod
    def read(cls, reader: BitReader) -> TwoByteHeaderExtension:
        ext_id = reader.read_u8()
        data_length = 0 if ext_id == 0 else reader.read_u8()
        if reader.remaining_bytes() < data_length:
            raise ParseError(
                f"Header extension length was {data_length} but buffer only has "
                f"{reader.remaining_bytes()} bytes remaining"
            )
        return cls(ext_id, reader.read_bytes(data_length))

    def write(self, writer: BitWriter) -> None:
        if len(self.data) > 0xFF:
            raise ValueError(
                f"two-byte header extension data must be at most 255 bytes, got {len(self.data)}"
            )
        writer.write_u8(self.id)
        writer.write_u8(len(self.data))
        writer.write_bytes(self.data)


HeaderExtension = Union[OneByteHeaderExtension, TwoByteHeaderExtension]

# In a one-byte block, this id nibble marks a two-byte element mixed in.
_MIXED_TWO_BYTE_MARKER = 0xF


class HeaderExtensions:
    """The set of header extensions of an RTP packet, keyed by id."""

    def __init__(self, extensions: list[HeaderExtension] | None = None) -> None:
        self._extensions: dict[int, HeaderExtension] = {}
        for ext in extensions or ():
            self.add_extension(ext)

    def __len__(self) -> int:
        return len(self._extensions)

    def __iter__(self) -> Iterator[tuple[int, HeaderExtension]]:
        """Iterate over ``(id, extension)`` pairs."""
        return iter(self._extensions.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderExtensions):
            return NotImplemented
        return self._extensions == other._extensions

    def __repr__(self) -> str:
        return f"HeaderExtensions({list(self._extensions.values())!r})"

    def has_one_byte(self) -> bool:
        return any(isinstance(e, OneByteHeaderExtension) for e in self._extensions.values())

    def has_two_byte(self) -> bool:
        return any(isinstance(e, TwoByteHeaderExtension) for e in self._extensions.values())

    def add_extension(self, ext: HeaderExtension) -> HeaderExtension | None:
        """Add ``ext``; return the extension it replaced, if any."""
        previous = self._extensions.get(ext.id)
        self._extensions[ext.id] = ext
        return previous

    def remove_extension_by_id(self, ext_id: int) -> HeaderExtension | None:
        """Remove and return the extension with ``ext_id``, if present."""
        return self._extensions.pop(ext_id, None)

    def get_by_id(self, ext_id: int) -> HeaderExtension | None:
        return self._extensions.get(ext_id)

    @classmethod
    def read(cls, reader: BitReader) -> HeaderExtensions:
        """Read a whole extension block, starting at its profile field."""
        ext_type = reader.read_u16()
        ext_length_words = reader.read_u16()
        block = reader.take_bytes(ext_length_words * 4)

        result = cls()
        while block.remaining_bytes() > 0:
            ext: HeaderExtension
            if OneByteHeaderExtension.type_matches(ext_type):
                if block.peek_bits(4) == _MIXED_TWO_BYTE_MARKER:
                    block.read_u8()
                    ext = TwoByteHeaderExtension.read(block)
                else:
                    ext = OneByteHeaderExtension.read(block)
            elif TwoByteHeaderExtension.type_matches(ext_type):
                ext = TwoByteHeaderExtension.read(block)
            else:
                raise ParseError(f"Encountered invalid header extension block type: {ext_type:x}")
            if ext.id != 0:
                result._extensions[ext.id] = ext
        return result

    def write(self, writer: BitWriter) -> None:
        """Write the block (profile, length, elements, zero padding); nothing if empty."""
        if not self._extensions:
            return
        mixed = self.has_one_byte()
        body = BitWriter()
        for ext_id in sorted(self._extensions):
            ext = self._extensions[ext_id]
            if mixed and isinstance(ext, TwoByteHeaderExtension):
                body.write_bits(_MIXED_TWO_BYTE_MARKER, 4)
                body.write_bits(0, 4)
            ext.write(body)
        data = body.to_bytes()
        data += b"\x00" * (-len(data) % 4)
        writer.write_u16(OneByteHeaderExtension.TYPE if mixed else TwoByteHeaderExtension.TYPE)
        writer.write_u16(len(data) // 4)
        writer.write_bytes(data)