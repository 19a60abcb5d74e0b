from __future__ import annotations

CMD_HEADER_FORMAT = "BBBB"  # code, ident, len (low byte), reserved
CMD_HEADER_SIZE = 4

COMMAND_REJECT = 0x01
ECHO_REQUEST = 0x08
ECHO_RESPONSE = 0x09

IDENT_BASE = 200
IDENT_MAX = 254

FILLER_PERIOD = 40

L2CAP_PSM = 1
BDADDR_LEN = 6

UNBOUNDED = -1

DEFAULT_SIZE = 44
DEFAULT_COUNT = UNBOUNDED
DEFAULT_TIMEOUT_S = 10
DEFAULT_DELAY_S = 1
