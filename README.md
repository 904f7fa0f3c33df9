# rtpparse

A pure-Python library for reading and writing RTP and RTCP packets.

It covers:

- RTP headers with CSRCs and header extensions. Extensions may use the
  one-byte form, the two-byte form, or both mixed together
  (`rtpparse.rtp_header`, `rtpparse.rtp_packet`, `rtpparse.header_extensions`).
- The RTCP common header (`rtpparse.rtcp_header`).
- RTCP sender reports (`rtpparse.rtcp_sr`) and receiver reports
  (`rtpparse.rtcp_rr`), with their report blocks and sender info
  (`rtpparse.rtcp_report_block`).
- RTCP SDES (`rtpparse.rtcp_sdes`) and BYE (`rtpparse.rtcp_bye`) packets.
- The feedback header (`rtpparse.rtcp_fb_header`), and the NACK
  (`rtpparse.rtcp_fb_nack`) and FIR (`rtpparse.rtcp_fb_fir`) feedback
  messages.
- The packet status chunks used in transport-wide congestion control
  feedback (`rtpparse.tcc_chunks`).
- Quick checks that tell RTP, RTCP and DTLS datagrams apart
  (`rtpparse.util`).

All reading goes through `rtpparse.util.BitReader`. All writing goes through
`rtpparse.util.BitWriter`. Malformed input raises `rtpparse.util.ParseError`,
which is a subclass of `ValueError`.

## Installation

```
pip install rtpparse
```

## Usage

### Demultiplexing

```python
from rtpparse.util import looks_like_rtp, looks_like_rtcp, looks_like_dtls

if looks_like_rtcp(datagram):
    ...
elif looks_like_rtp(datagram):
    ...
elif looks_like_dtls(datagram):
    ...
```

### Reading an RTP packet

```python
from rtpparse.util import BitReader
from rtpparse.rtp_packet import RtpPacket

packet = RtpPacket.read(BitReader(datagram))
print(packet.payload_type(), packet.ssrc())
ext = packet.get_extension_by_id(1)
if ext is not None:
    print(ext.id, ext.data)
print(packet.payload)
```

### Reading an RTCP packet

Read the common header first. Then pass a reader limited to the payload, along
with the header, to the class for that packet type:

```python
from rtpparse.util import BitReader
from rtpparse.rtcp_header import RtcpHeader
from rtpparse.rtcp_sr import RtcpSrPacket
from rtpparse.rtcp_rr import RtcpRrPacket

reader = BitReader(datagram)
header = RtcpHeader.read(reader)
payload = reader.take_bytes(header.payload_length_bytes())
if header.packet_type == RtcpSrPacket.PT:
    packet = RtcpSrPacket.read(payload, header)
elif header.packet_type == RtcpRrPacket.PT:
    packet = RtcpRrPacket.read(payload, header)
```

A feedback message also has a feedback header, which comes before its body:

```python
from rtpparse.rtcp_fb_header import RtcpFbHeader, RTCP_FB_TL_PT
from rtpparse.rtcp_fb_nack import RtcpFbNackPacket

if header.packet_type == RTCP_FB_TL_PT and header.report_count == RtcpFbNackPacket.FMT:
    fb_header = RtcpFbHeader.read(payload)
    nack = RtcpFbNackPacket.read(payload, header, fb_header)
    print(sorted(nack.missing_seq_nums))
```

### Building RTCP

Packets that carry a header have a `sync()` method. It sets the header's
length and count fields from the packet's contents. Call it before `write()`:

```python
from rtpparse.util import BitWriter
from rtpparse.rtcp_bye import RtcpByePacket

bye = RtcpByePacket().add_ssrc(42).with_reason("goodbye")
bye.sync()
writer = BitWriter()
bye.write(writer)
datagram = writer.to_bytes()
```

The NACK packet works the same way:

```python
from rtpparse.rtcp_fb_nack import RtcpFbNackPacket

nack = RtcpFbNackPacket()
for seq in (10, 12, 13, 44):
    nack.add_missing_seq_num(seq)
nack.sync()
```

## What it does not do

- It does not read a whole RTCP datagram in one call. There is no function
  that walks a compound packet and picks the class for each part. Read the
  headers yourself, as shown above.
- It does not read or write complete transport-wide congestion control
  feedback packets. `rtpparse.tcc_chunks` handles only the individual status
  chunks.
- PLI feedback messages are not modelled.
- `RtpPacket` can be read but not written. `RtpHeader` can be written.

## Running the tests

```
pip install -e .[test]
pytest
```