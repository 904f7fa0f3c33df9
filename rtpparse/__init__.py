"""Reading and writing RTP headers and packets, RTCP reports, SDES, BYE, NACK and FIR packets."""

__version__ = "0.2.0"