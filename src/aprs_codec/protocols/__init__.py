"""
APRS report codecs - envelope, position, status and their field codecs.
"""

from .callsign import Callsign
from .compression import (
    CompressedAltitude,
    CompressedCourseSpeed,
    CompressedCst,
    CompressedRadioRange,
    CompressionType,
    CstAbsent,
    GpsFix,
    NmeaSource,
    Origin,
    parse_cst,
)
from .coordinates import Latitude, Longitude, decode_base91, encode_base91
from .data_extension import (
    CourseSpeed,
    DataExtension,
    RadioRange,
    SignalStrength,
    StationPower,
    extract_altitude,
)
from .message import Message, UnknownBody
from .position import PositionEncoding, PositionReport
from .serialization import message_to_dict, parse_to_json
from .status import StatusReport
from .timestamp import DayHourMin, HourMinSec, Timestamp

__all__ = [
    # Envelope
    "Message",
    "UnknownBody",
    "Callsign",
    # Reports
    "PositionReport",
    "PositionEncoding",
    "StatusReport",
    # Timestamps
    "Timestamp",
    "HourMinSec",
    "DayHourMin",
    # Coordinates
    "Latitude",
    "Longitude",
    "decode_base91",
    "encode_base91",
    # Compressed extras
    "CompressionType",
    "GpsFix",
    "NmeaSource",
    "Origin",
    "CompressedCst",
    "CstAbsent",
    "CompressedCourseSpeed",
    "CompressedRadioRange",
    "CompressedAltitude",
    "parse_cst",
    # Data extensions
    "DataExtension",
    "CourseSpeed",
    "StationPower",
    "RadioRange",
    "SignalStrength",
    "extract_altitude",
    # Serialization
    "message_to_dict",
    "parse_to_json",
]
