"""Tests for dictionary and JSON rendering of parsed packets."""

import json

import pytest

from aprs_codec.protocols.message import Message
from aprs_codec.protocols.serialization import (
    extension_to_dict,
    message_to_dict,
    parse_to_json,
    timestamp_to_dict,
)
from aprs_codec.protocols.compression import CstAbsent, parse_cst
from aprs_codec.protocols.data_extension import StationPower
from aprs_codec.protocols.timestamp import DayHourMin, HourMinSec

POSITION = "ICA3D17F2>APRS,qAS,dl4mea:/074849h4821.61N\\01224.49E^322/103/A=003054 id213D17F2"


class TestTimestampToDict:
    """Test timestamp rendering."""

    def test_none(self):
        """Test missing timestamp."""
        assert timestamp_to_dict(None) is None

    def test_hms(self):
        """Test HMS timestamp."""
        assert timestamp_to_dict(HourMinSec(7, 48, 49)) == {
            "format": "hms",
            "hour": 7,
            "minute": 48,
            "second": 49,
        }

    def test_dhm(self):
        """Test DHM timestamp."""
        result = timestamp_to_dict(DayHourMin(9, 23, 45, utc=False))
        assert result["format"] == "dhm"
        assert result["day"] == 9
        assert result["utc"] is False


class TestExtensionToDict:
    """Test extension rendering."""

    def test_absent(self):
        """Test absent extensions."""
        assert extension_to_dict(None) is None
        assert extension_to_dict(CstAbsent()) is None

    def test_compressed_course_speed(self):
        """Test compressed course/speed."""
        result = extension_to_dict(parse_cst(b"X>D"))
        assert result["type"] == "course_speed"
        assert result["course"] == 220
        assert result["speed_knots"] == pytest.approx(8.317274897290226)
        assert result["gps_fix"] == "current"
        assert result["nmea_source"] == "other"
        assert result["origin"] == "tbd"

    def test_compressed_altitude(self):
        """Test compressed altitude."""
        result = extension_to_dict(parse_cst(b"S]1"))
        assert result["type"] == "altitude"
        assert result["altitude_feet"] == pytest.approx(10004.520050700292)
        assert result["nmea_source"] == "gga"

    def test_station_power(self):
        """Test PHG values are expanded."""
        result = extension_to_dict(StationPower(5, 1, 3, 2))
        assert result == {
            "type": "station_power",
            "power_watts": 25,
            "height_feet": 20,
            "gain_db": 3,
            "directivity_degrees": 90,
        }


class TestMessageToDict:
    """Test full packet rendering."""

    def test_position(self):
        """Test position packet document."""
        result = message_to_dict(Message.parse(POSITION))
        assert result["from"] == {"call": "ICA3D17F2", "ssid": None}
        assert result["to"] == {"call": "APRS", "ssid": None}
        assert [hop["call"] for hop in result["via"]] == ["qAS", "dl4mea"]

        data = result["data"]
        assert data["type"] == "position"
        assert data["encoding"] == "uncompressed"
        assert data["latitude"] == pytest.approx(48.36016666666667)
        assert data["extension"]["type"] == "course_speed"
        assert data["extension"]["course"] == 322
        assert data["extension"]["speed_kmh"] == pytest.approx(190.756)
        assert data["altitude_feet"] == 3054
        assert data["comment"] == " id213D17F2"

    def test_status(self):
        """Test status packet document."""
        result = message_to_dict(Message.parse("N0CALL-9>APRS:>235959hOn air"))
        assert result["from"] == {"call": "N0CALL", "ssid": 9}
        assert result["data"]["type"] == "status"
        assert result["data"]["timestamp"]["hour"] == 23
        assert result["data"]["comment"] == "On air"

    def test_unknown(self):
        """Test unsupported body document."""
        result = message_to_dict(Message.parse("N0CALL>APRS:T#005,199,000"))
        assert result["data"] == {"type": "unknown"}


class TestParseToJson:
    """Test the JSON helper."""

    def test_valid(self):
        """Test JSON document for a valid packet."""
        document = json.loads(parse_to_json(POSITION))
        assert document["from"]["call"] == "ICA3D17F2"
        assert document["data"]["timestamp"]["second"] == 49

    def test_indent(self):
        """Test indentation option."""
        assert "\n" in parse_to_json(POSITION, indent=2)
        assert "\n" not in parse_to_json(POSITION)

    def test_invalid(self):
        """Test error text for an invalid packet."""
        assert parse_to_json("garbage") == "InvalidMessage: 'garbage'"
