"""Packet status chunks of transport-wide congestion control feedback."""

from __future__ import annotations

import enum
import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from rtpparse.util import BitReader, BitWriter, ParseError

_ONE_BIT_SYMBOL_COUNT = 14
_TWO_BIT_SYMBOL_COUNT = 7
_RUN_LENGTH_BITS = 13


class PacketStatusSymbol(enum.IntEnum):
    """Reception status of one packet, as carried in a status chunk."""

    NOT_RECEIVED = 0
    RECEIVED_SMALL_DELTA = 1
    RECEIVED_LARGE_OR_NEGATIVE_DELTA = 2

    def delta_size_bytes(self) -> int:
        """Size in bytes of the receive delta that accompanies this status."""
        return int(self)

    @classmethod
    def _from_two_bits(cls, value: int) -> PacketStatusSymbol:
        try:
            return cls(value)
        except ValueError:
            raise ParseError(f"Invalid 2 bit packet status symbol: {value}") from None


@dataclass
class StatusVectorChunk:
    """A chunk listing 14 one-bit or 7 two-bit status symbols."""

    symbols: list[PacketStatusSymbol] = field(default_factory=list)

    def has_two_bit_symbols(self) -> bool:
        return PacketStatusSymbol.RECEIVED_LARGE_OR_NEGATIVE_DELTA in self.symbols

    def num_symbols(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[PacketStatusSymbol]:
        return iter(self.symbols)

    @classmethod
    def read(cls, reader: BitReader, max_symbol_count: int) -> StatusVectorChunk:
        """Read a chunk whose type bit was already consumed; keep at most ``max_symbol_count``."""
        if reader.read_bits(1) == 0:
            symbols = [
                PacketStatusSymbol(reader.read_bits(1)) for _ in range(_ONE_BIT_SYMBOL_COUNT)
            ]
        else:
            symbols = [
                PacketStatusSymbol._from_two_bits(reader.read_bits(2))
                for _ in range(_TWO_BIT_SYMBOL_COUNT)
            ]
        return cls(symbols[:max_symbol_count])

    def write(self, writer: BitWriter) -> None:
        writer.write_bits(1, 1)
        if self.has_two_bit_symbols():
            writer.write_bits(1, 1)
            for symbol in self.symbols:
                writer.write_bits(int(symbol), 2)
        else:
            writer.write_bits(0, 1)
            for symbol in self.symbols:
                writer.write_bits(int(symbol), 1)


@dataclass
class RunLengthEncodingChunk:
    """A chunk repeating one status symbol ``run_length`` times."""

    symbol: PacketStatusSymbol = PacketStatusSymbol.NOT_RECEIVED
    run_length: int = 0

    def num_symbols(self) -> int:
        return self.run_length

    def __iter__(self) -> Iterator[PacketStatusSymbol]:
        return itertools.repeat(self.symbol, self.run_length)

    @classmethod
    def read(cls, reader: BitReader) -> RunLengthEncodingChunk:
        """Read a chunk whose type bit was already consumed."""
        symbol = PacketStatusSymbol._from_two_bits(reader.read_bits(2))
        run_length = reader.read_bits(_RUN_LENGTH_BITS)
        return cls(symbol, run_length)

    def write(self, writer: BitWriter) -> None:
        writer.write_bits(0, 1)
        writer.write_bits(int(self.symbol), 2)
        writer.write_bits(self.run_length, _RUN_LENGTH_BITS)


PacketStatusChunk = Union[StatusVectorChunk, RunLengthEncodingChunk]


def read_packet_status_chunk(reader: BitReader, max_symbol_count: int) -> PacketStatusChunk:
    """Read a chunk of either kind, dispatching on its leading type bit."""
    if reader.read_bits(1) == 0:
        return RunLengthEncodingChunk.read(reader)
    return StatusVectorChunk.read(reader, max_symbol_count)