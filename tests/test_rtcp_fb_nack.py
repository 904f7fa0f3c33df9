import pytest

from rtpparse.rtcp_fb_header import RTCP_FB_TL_PT, RtcpFbHeader
from rtpparse.rtcp_fb_nack import NackBlock, RtcpFbNackPacket, chunk_by_max_difference
from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter


def test_read_nack_block():
    block = NackBlock.read(BitReader(bytes([0x00, 0x0A, 0xA8, 0xA1])))
    assert block.missing_seq_nums == {10, 11, 16, 18, 22, 24, 26}


def test_put_nack_block():
    block = NackBlock()
    for n in (10, 11, 16, 18, 22, 24, 26):
        block.add_missing_seq_num(n)
    writer = BitWriter()
    block.write(writer)
    assert writer.to_bytes() == bytes([0x00, 0x0A, 0xA8, 0xA1])
    assert NackBlock.read(BitReader(writer.to_bytes())) == block


def test_write_empty_nack_block_fails():
    with pytest.raises(ValueError):
        NackBlock().write(BitWriter())


def test_write_nack_block_spread_too_large():
    with pytest.raises(ValueError):
        NackBlock({10, 30}).write(BitWriter())


def test_read_nack_packet():
    header = RtcpHeader(report_count=RtcpFbNackPacket.FMT, packet_type=RTCP_FB_TL_PT, length_field=3)
    fb_header = RtcpFbHeader(sender_ssrc=24, media_source_ssrc=42)
    payload = bytes([0x00, 0x0A, 0xA8, 0xA1, 0x00, 0x28, 0x24, 0x82])
    packet = RtcpFbNackPacket.read(BitReader(payload), header, fb_header)
    assert packet.missing_seq_nums == {10, 11, 16, 18, 22, 24, 26, 40, 42, 48, 51, 54}
    assert packet.fb_header.media_source_ssrc == 42
    assert packet.fb_header.sender_ssrc == 24


def test_default():
    nack = RtcpFbNackPacket()
    assert nack.header.packet_type == RTCP_FB_TL_PT
    assert nack.header.report_count == RtcpFbNackPacket.FMT
    assert nack.header.length_field == 0


def _build(*seq_nums: int) -> RtcpFbNackPacket:
    nack = RtcpFbNackPacket()
    for n in seq_nums:
        nack.add_missing_seq_num(n)
    return nack


def test_sync():
    nack = _build(10, 12, 13, 17, 21, 23)
    nack.sync()
    assert nack.header.length_field == 3


def test_sync_multiple_blocks():
    nack = _build(10, 12, 13, 17, 21, 23, 44)
    nack.sync()
    assert nack.header.length_field == 4


def test_put_rtcp_fb_nack():
    nack = _build(10, 12, 13, 17, 21, 23, 44)
    nack.sync()
    writer = BitWriter()
    nack.write(writer)
    reader = BitReader(writer.to_bytes())
    header = RtcpHeader.read(reader)
    fb_header = RtcpFbHeader.read(reader)
    read_nack = RtcpFbNackPacket.read(reader, header, fb_header)
    assert read_nack == nack
    assert reader.remaining_bytes() == 0


def test_chunk_by_max_difference_empty():
    assert chunk_by_max_difference([], 16) == []


def test_chunk_by_max_difference_splits():
    chunks = chunk_by_max_difference({10, 12, 13, 17, 21, 23, 44}, 16)
    assert chunks == [{10, 12, 13, 17, 21, 23}, {44}]


def test_chunk_by_max_difference_boundary_inclusive():
    assert chunk_by_max_difference([10, 26, 27], 16) == [{10, 26}, {27}]