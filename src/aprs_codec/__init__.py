"""
APRS Codec - Automatic Packet Reporting System packet parser and encoder

Decodes APRS packets in TNC2 text form into immutable value objects and
encodes them back to the exact wire bytes.

Supported Reports:
    - Position reports, uncompressed (degrees/minutes) and compressed (base-91),
      with or without timestamp and messaging capability
    - Status reports, with or without timestamp

Field Codecs:
    - Timestamps (HHMMSSh, DDHHMMz, DDHHMM/)
    - Callsigns with SSID
    - Compressed course/speed, radio range and altitude
    - Data extensions (CSE/SPD, PHG, RNG, DFS) and /A= altitude

Every report accepted by the parser re-encodes to the same bytes:

    >>> packet = b"N0CALL>APRS:/092345z4903.50N/07201.75W-Test"
    >>> parse(packet).to_bytes() == packet
    True
"""

__version__ = "0.1.0"
__author__ = "APRS Codec Team"

from typing import Union

from .core.errors import (
    AprsError,
    InvalidCallsign,
    InvalidCourse,
    InvalidDataExtension,
    InvalidMessage,
    InvalidPosition,
    InvalidStatus,
    InvalidSymbolTable,
    InvalidTimestamp,
)
from .protocols import (
    Callsign,
    Message,
    PositionReport,
    StatusReport,
    UnknownBody,
    parse_to_json,
)


def parse(data: Union[bytes, str]) -> Message:
    """
    Parse a packet in TNC2 text form.

    Args:
        data: Packet bytes or text

    Returns:
        Parsed message

    Raises:
        AprsError: The packet is malformed
    """
    return Message.parse(data)


__all__ = [
    # Entry points
    "parse",
    "parse_to_json",
    # Models
    "Message",
    "Callsign",
    "PositionReport",
    "StatusReport",
    "UnknownBody",
    # Errors
    "AprsError",
    "InvalidMessage",
    "InvalidCallsign",
    "InvalidPosition",
    "InvalidStatus",
    "InvalidTimestamp",
    "InvalidSymbolTable",
    "InvalidCourse",
    "InvalidDataExtension",
    # Version
    "__version__",
]
