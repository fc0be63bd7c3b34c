"""
Conversion of parsed packets to plain dictionaries and JSON.
"""

import json
from typing import Any, Dict, Optional, Union

from ..core.errors import AprsError
from ..utils.conversions import feet_to_meters, knots_to_kmh, miles_to_km
from .callsign import Callsign
from .compression import (
    CompressedAltitude,
    CompressedCourseSpeed,
    CompressedCst,
    CompressedRadioRange,
    CstAbsent,
)
from .data_extension import (
    CourseSpeed,
    DataExtension,
    RadioRange,
    SignalStrength,
    StationPower,
)
from .message import Message, UnknownBody
from .position import PositionReport
from .status import StatusReport
from .timestamp import DayHourMin, HourMinSec, Timestamp


def timestamp_to_dict(timestamp: Optional[Timestamp]) -> Optional[Dict[str, Any]]:
    if timestamp is None:
        return None
    if isinstance(timestamp, HourMinSec):
        return {
            "format": "hms",
            "hour": timestamp.hour,
            "minute": timestamp.minute,
            "second": timestamp.second,
        }
    if isinstance(timestamp, DayHourMin):
        return {
            "format": "dhm",
            "day": timestamp.day,
            "hour": timestamp.hour,
            "minute": timestamp.minute,
            "utc": timestamp.utc,
        }
    raise TypeError(f"Unsupported timestamp type: {type(timestamp).__name__}")


def callsign_to_dict(callsign: Callsign) -> Dict[str, Any]:
    return {"call": callsign.base, "ssid": callsign.ssid}


def extension_to_dict(
    extension: Union[DataExtension, CompressedCst, CstAbsent, None],
) -> Optional[Dict[str, Any]]:
    """Convert an uncompressed data extension or compressed cs field."""
    if extension is None or isinstance(extension, CstAbsent):
        return None

    if isinstance(extension, CompressedCst):
        cs = extension.cs
        result: Dict[str, Any] = {
            "gps_fix": extension.compression_type.gps_fix.name.lower(),
            "nmea_source": extension.compression_type.nmea_source.name.lower(),
            "origin": extension.compression_type.origin.name.lower(),
        }
        if isinstance(cs, CompressedCourseSpeed):
            result.update(
                type="course_speed",
                course=cs.course,
                speed_knots=cs.speed,
                speed_kmh=knots_to_kmh(cs.speed),
            )
        elif isinstance(cs, CompressedRadioRange):
            result.update(
                type="radio_range",
                range_miles=cs.range,
                range_km=miles_to_km(cs.range),
            )
        elif isinstance(cs, CompressedAltitude):
            result.update(
                type="altitude",
                altitude_feet=cs.altitude,
                altitude_m=feet_to_meters(cs.altitude),
            )
        return result

    if isinstance(extension, CourseSpeed):
        return {
            "type": "course_speed",
            "course": extension.course,
            "speed_knots": extension.speed,
            "speed_kmh": knots_to_kmh(extension.speed),
        }
    if isinstance(extension, StationPower):
        return {
            "type": "station_power",
            "power_watts": extension.power_watts,
            "height_feet": extension.height_feet,
            "gain_db": extension.gain_db,
            "directivity_degrees": extension.directivity_degrees,
        }
    if isinstance(extension, RadioRange):
        return {
            "type": "radio_range",
            "range_miles": extension.range,
            "range_km": miles_to_km(extension.range),
        }
    if isinstance(extension, SignalStrength):
        return {
            "type": "signal_strength",
            "strength": extension.strength,
            "height_feet": extension.height_feet,
            "gain_db": extension.gain_db,
            "directivity_degrees": extension.directivity_degrees,
        }
    raise TypeError(f"Unsupported extension type: {type(extension).__name__}")


def position_to_dict(position: PositionReport) -> Dict[str, Any]:
    return {
        "type": "position",
        "encoding": position.encoding.value,
        "timestamp": timestamp_to_dict(position.timestamp),
        "messaging_supported": position.messaging_supported,
        "latitude": float(position.latitude),
        "longitude": float(position.longitude),
        "symbol_table": position.symbol_table,
        "symbol_code": position.symbol_code,
        "extension": extension_to_dict(position.extension),
        "altitude_feet": position.altitude,
        "comment": position.comment.decode("latin-1"),
    }


def status_to_dict(status: StatusReport) -> Dict[str, Any]:
    return {
        "type": "status",
        "timestamp": timestamp_to_dict(status.timestamp),
        "comment": status.comment,
    }


def message_to_dict(message: Message) -> Dict[str, Any]:
    """
    Convert a parsed message to a JSON-compatible dictionary.

    Args:
        message: Parsed message

    Returns:
        Dictionary with "from", "to", "via" and "data" keys
    """
    body = message.body
    if isinstance(body, PositionReport):
        data = position_to_dict(body)
    elif isinstance(body, StatusReport):
        data = status_to_dict(body)
    elif isinstance(body, UnknownBody):
        data = {"type": "unknown"}
    else:
        raise TypeError(f"Unsupported body type: {type(body).__name__}")

    return {
        "from": callsign_to_dict(message.source),
        "to": callsign_to_dict(message.destination),
        "via": [callsign_to_dict(hop) for hop in message.via],
        "data": data,
    }


def parse_to_json(
    data: Union[bytes, str],
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> str:
    """
    Parse a packet and render it as JSON.

    Args:
        data: Packet text
        indent: JSON indentation, None for a single line
        sort_keys: Sort object keys

    Returns:
        JSON document, or the error text when the packet is invalid
    """
    try:
        message = Message.parse(data)
    except AprsError as e:
        return str(e)
    return json.dumps(message_to_dict(message), indent=indent, sort_keys=sort_keys)
