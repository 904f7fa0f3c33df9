import pytest

from rtpparse.rtcp_header import RtcpHeader
from rtpparse.rtcp_report_block import RtcpReportBlock, RtcpSenderInfo
from rtpparse.rtcp_sr import RtcpSrPacket
from rtpparse.util import BitReader, BitWriter, ParseError


def _packet(num_blocks=1):
    return RtcpSrPacket(
        sender_ssrc=42,
        sender_info=RtcpSenderInfo(
            ntp_timestamp_msw=10,
            ntp_timestamp_lsw=20,
            rtp_timestamp=30,
            sender_packet_count=40,
            sender_octet_count=50,
        ),
        report_blocks=[RtcpReportBlock(ssrc=100 + i, fraction_lost=i) for i in range(num_blocks)],
    )


def test_default_packet_type():
    assert RtcpSrPacket().header.packet_type == RtcpSrPacket.PT == 200


def test_payload_length_bytes():
    packet = _packet(2)
    expected = RtcpSenderInfo.SIZE_BYTES + 2 * RtcpReportBlock.SIZE_BYTES
    assert packet.payload_length_bytes() == expected


def test_sync():
    packet = _packet(3)
    packet.sync()
    assert packet.header.report_count == 3
    assert packet.header.length_field == packet.payload_length_bytes() // 4


def test_write_read_round_trip():
    packet = _packet(2)
    packet.sync()
    writer = BitWriter()
    packet.write(writer)
    reader = BitReader(writer.to_bytes())
    header = RtcpHeader.read(reader)
    read_packet = RtcpSrPacket.read(reader, header)
    assert read_packet == packet
    assert reader.remaining_bytes() == 0


def test_round_trip_without_blocks():
    packet = _packet(0)
    packet.sync()
    writer = BitWriter()
    packet.write(writer)
    data = writer.to_bytes()
    assert len(data) == RtcpHeader.SIZE_BYTES + 4 + RtcpSenderInfo.SIZE_BYTES
    reader = BitReader(data)
    header = RtcpHeader.read(reader)
    assert header.report_count == 0
    assert RtcpSrPacket.read(reader, header) == packet


def test_read_truncated_sender_info():
    header = RtcpHeader(packet_type=RtcpSrPacket.PT)
    with pytest.raises(ParseError):
        RtcpSrPacket.read(BitReader(bytes(8)), header)