"""L2CAP echo ping for Bluetooth devices.

Layout follows the protocol layers:
- address/packet: device address and echo frame codecs
- net: the raw L2CAP socket
- pinger: the send / wait / match / timeout loop
- stats + signals: per-packet output, the final summary and the interrupt path
"""

__all__ = []
