import pytest

from rtpparse.rtcp_header import RtcpHeader, get_sender_ssrc
from rtpparse.util import BitReader, BitWriter, ParseError


def test_read_rtcp_header():
    reader = BitReader(bytes([0b10_0_00001, 202, 0, 42]))
    header = RtcpHeader.read(reader)
    assert header.version == 2
    assert header.has_padding is False
    assert header.report_count == 1
    assert header.packet_type == 202
    assert header.length_field == 42


def test_write_rtcp_header():
    header = RtcpHeader(version=2, has_padding=False, report_count=1, packet_type=1, length_field=2)
    writer = BitWriter()
    header.write(writer)
    read_header = RtcpHeader.read(BitReader(writer.to_bytes()))
    assert read_header == header


def test_write_produces_four_bytes():
    writer = BitWriter()
    RtcpHeader(report_count=1, packet_type=202, length_field=42).write(writer)
    assert writer.to_bytes() == bytes([0b10_0_00001, 202, 0, 42])


def test_read_bad_version():
    with pytest.raises(ParseError):
        RtcpHeader.read(BitReader(bytes([0b01_0_00001, 202, 0, 42])))


def test_read_too_short():
    with pytest.raises(ParseError):
        RtcpHeader.read(BitReader(bytes([0x80, 202])))


def test_default_version():
    assert RtcpHeader().version == 2


def test_payload_length_bytes():
    header = RtcpHeader(length_field=2)
    assert header.payload_length_bytes() == 8


def test_payload_length_bytes_overflow():
    header = RtcpHeader(length_field=0xFFFF)
    with pytest.raises(ParseError):
        header.payload_length_bytes()


def test_sync():
    header = RtcpHeader(packet_type=203)
    header.sync(8, 2)
    assert header.report_count == 2
    assert header.length_field == 2
    assert header.payload_length_bytes() == 8


def test_sync_report_count_too_large():
    with pytest.raises(ValueError):
        RtcpHeader().sync(4, 32)


def test_get_sender_ssrc():
    buf = bytes([0x80, 201, 0, 1, 0x00, 0x00, 0x00, 0x2A])
    assert get_sender_ssrc(buf) == 42


def test_get_sender_ssrc_too_short():
    with pytest.raises(ParseError):
        get_sender_ssrc(bytes([0x80, 201, 0, 1]))