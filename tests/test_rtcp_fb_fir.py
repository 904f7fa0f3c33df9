import pytest

from rtpparse.rtcp_fb_fir import RtcpFbFirFci, RtcpFbFirPacket
from rtpparse.rtcp_fb_header import RTCP_FB_PS_PT, RtcpFbHeader
from rtpparse.rtcp_header import RtcpHeader
from rtpparse.util import BitReader, BitWriter, ParseError

ONE_FCI = bytes([0x00, 0x00, 0x00, 0x2A, 0x01, 0x00, 0x00, 0x00])
TWO_FCIS = ONE_FCI + bytes([0x00, 0x00, 0x00, 0x2B, 0x02, 0x00, 0x00, 0x00])


def _fir_header(length_field):
    return RtcpHeader(
        report_count=RtcpFbFirPacket.FMT, packet_type=RTCP_FB_PS_PT, length_field=length_field
    )


def test_read_fci():
    fci = RtcpFbFirFci.read(BitReader(ONE_FCI))
    assert fci.ssrc == 42
    assert fci.seq_num == 1


def test_write_fci():
    fci = RtcpFbFirFci(42, 1)
    writer = BitWriter()
    fci.write(writer)
    data = writer.to_bytes()
    assert data == ONE_FCI
    assert RtcpFbFirFci.read(BitReader(data)) == fci


def test_read_rtcp_fb_fir_packet():
    reader = BitReader(ONE_FCI)
    packet = RtcpFbFirPacket.read(reader, _fir_header(4), RtcpFbHeader(42, 0))
    assert reader.remaining_bytes() == 0
    assert len(packet.fcis) == 1
    assert packet.fcis[0].ssrc == 42
    assert packet.fcis[0].seq_num == 1


def test_read_rtcp_fb_fir_packet_multiple_fcis():
    reader = BitReader(TWO_FCIS)
    packet = RtcpFbFirPacket.read(reader, _fir_header(6), RtcpFbHeader(42, 0))
    assert reader.remaining_bytes() == 0
    assert [(f.ssrc, f.seq_num) for f in packet.fcis] == [(42, 1), (43, 2)]


def test_read_rejects_wrong_format():
    header = RtcpHeader(report_count=1, packet_type=RTCP_FB_PS_PT, length_field=4)
    with pytest.raises(ParseError):
        RtcpFbFirPacket.read(BitReader(ONE_FCI), header, RtcpFbHeader(42, 0))


def test_read_rejects_nonzero_media_source():
    with pytest.raises(ParseError):
        RtcpFbFirPacket.read(BitReader(ONE_FCI), _fir_header(4), RtcpFbHeader(42, 7))


def test_read_truncated_fci_fails():
    with pytest.raises(ParseError):
        RtcpFbFirPacket.read(BitReader(ONE_FCI[:5]), _fir_header(4), RtcpFbHeader(42, 0))


def test_default():
    packet = RtcpFbFirPacket()
    assert packet.header.packet_type == RTCP_FB_PS_PT
    assert packet.header.report_count == RtcpFbFirPacket.FMT
    assert packet.fb_header.media_source_ssrc == 0


def test_sync():
    packet = RtcpFbFirPacket().add_fci(RtcpFbFirFci(42, 1)).add_fci(RtcpFbFirFci(43, 2))
    packet.sync()
    assert packet.header.packet_type == RTCP_FB_PS_PT
    assert packet.header.report_count == RtcpFbFirPacket.FMT
    assert packet.fb_header.media_source_ssrc == 0
    assert packet.payload_length_bytes() == 16


def test_write():
    packet = RtcpFbFirPacket().add_fci(RtcpFbFirFci(42, 1)).add_fci(RtcpFbFirFci(43, 2))
    packet.sync()
    writer = BitWriter()
    packet.write(writer)
    reader = BitReader(writer.to_bytes())
    header = RtcpHeader.read(reader)
    fb_header = RtcpFbHeader.read(reader)
    assert header.payload_length_bytes() == reader.remaining_bytes() + RtcpFbHeader.SIZE_BYTES
    read_packet = RtcpFbFirPacket.read(reader, header, fb_header)
    assert read_packet == packet