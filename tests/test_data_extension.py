"""Tests for uncompressed position data extensions and altitude tokens."""

import io

import pytest

from aprs_codec.core.errors import InvalidCourse, InvalidDataExtension
from aprs_codec.protocols.data_extension import (
    CourseSpeed,
    DataExtension,
    RadioRange,
    SignalStrength,
    StationPower,
    extract_altitude,
    insert_altitude,
)


class TestDataExtensionParse:
    """Test parsing of seven byte extension tokens."""

    def test_course_speed(self):
        """Test CSE/SPD."""
        assert DataExtension.parse(b"012/345") == CourseSpeed(12, 345)

    def test_course_limit(self):
        """Test course 360 is the largest accepted."""
        assert DataExtension.parse(b"360/000") == CourseSpeed(360, 0)

    def test_station_power(self):
        """Test PHG."""
        assert DataExtension.parse(b"PHG0123") == StationPower(0, 1, 2, 3)

    def test_radio_range(self):
        """Test RNG."""
        assert DataExtension.parse(b"RNG0050") == RadioRange(50)

    def test_signal_strength(self):
        """Test DFS."""
        assert DataExtension.parse(b"DFS4567") == SignalStrength(4, 5, 6, 7)

    def test_str_input(self):
        """Test text tokens are accepted."""
        assert DataExtension.parse("PHG5132") == StationPower(5, 1, 3, 2)

    def test_invalid_course(self):
        """Test course above 360."""
        with pytest.raises(InvalidCourse) as exc_info:
            DataExtension.parse(b"361/010")
        assert exc_info.value.data == b"361/010"

    @pytest.mark.parametrize("data", [b"yoyobaa", b"PHG01a3", b"RNG", b"XYZ0123", b"12/3456"])
    def test_invalid(self, data):
        """Test tokens with no known layout."""
        with pytest.raises(InvalidDataExtension):
            DataExtension.parse(data)


class TestDataExtensionMatch:
    """Test the non-raising matcher used for comments."""

    def test_no_match(self):
        """Test plain comment text."""
        assert DataExtension.match(b"Hello w") is None
        assert DataExtension.match(b"") is None
        assert DataExtension.match(b"PHG") is None

    def test_invalid_course_still_raises(self):
        """Test an out of range course is an error, not a comment."""
        with pytest.raises(InvalidCourse):
            DataExtension.match(b"999/999")

    def test_str_outside_latin1(self):
        """Test text that has no byte form is rejected."""
        with pytest.raises(InvalidDataExtension):
            DataExtension.match("PHG\u20ac123")
        with pytest.raises(InvalidDataExtension):
            DataExtension.parse("RNG\u20ac050")

    def test_abstract_base(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            DataExtension()


class TestDataExtensionValues:
    """Test derived values."""

    def test_station_power(self):
        """Test PHG5132."""
        phg = StationPower(5, 1, 3, 2)
        assert phg.power_watts == 25
        assert phg.height_feet == 20
        assert phg.gain_db == 3
        assert phg.directivity_degrees == 90

    def test_omni(self):
        """Test directivity 0 is omni-directional."""
        assert StationPower(1, 1, 1, 0).directivity_degrees is None

    def test_signal_strength(self):
        """Test DFS2360."""
        dfs = SignalStrength(2, 3, 6, 0)
        assert dfs.height_feet == 80
        assert dfs.gain_db == 6
        assert dfs.directivity_degrees is None


class TestDataExtensionEncode:
    """Test seven byte encoding."""

    @pytest.mark.parametrize(
        "data", [b"012/345", b"000/000", b"PHG0123", b"RNG0050", b"DFS4567", b"RNG9999"]
    )
    def test_roundtrip(self, data):
        """Test parse then encode reproduces the token."""
        assert DataExtension.parse(data).to_bytes() == data

    def test_encode_to_sink(self):
        """Test writing into a binary buffer."""
        buf = io.BytesIO()
        CourseSpeed(5, 7).encode(buf)
        assert buf.getvalue() == b"005/007"


class TestAltitude:
    """Test /A=aaaaaa altitude tokens."""

    def test_at_start(self):
        """Test token at the start of a comment."""
        assert extract_altitude(b"/A=003054 rest") == (3054, b" rest", 0)

    def test_after_text(self):
        """Test token after comment text."""
        assert extract_altitude(b"Hello/A=001000") == (1000, b"Hello", 5)

    def test_absent(self):
        """Test comment without a token."""
        assert extract_altitude(b"no altitude") == (None, b"no altitude", None)

    def test_malformed(self):
        """Test token without six digits is left in place."""
        assert extract_altitude(b"/A=12ab56") == (None, b"/A=12ab56", None)
        assert extract_altitude(b"/A=123") == (None, b"/A=123", None)

    def test_first_only(self):
        """Test only the first token is extracted."""
        altitude, remaining, offset = extract_altitude(b"/A=000100/A=000200")
        assert altitude == 100
        assert remaining == b"/A=000200"
        assert offset == 0

    def test_insert(self):
        """Test re-inserting a token."""
        assert insert_altitude(b"Hello", 1000, 5) == b"Hello/A=001000"
        assert insert_altitude(b" rest", 3054) == b"/A=003054 rest"

    def test_insert_clamps_offset(self):
        """Test offsets past the end append the token."""
        assert insert_altitude(b"ab", 1, 10) == b"ab/A=000001"

    @pytest.mark.parametrize(
        "comment", [b"/A=003054 rest", b"Hello/A=001000", b"x/A=000000y", b"/A=999999"]
    )
    def test_roundtrip(self, comment):
        """Test extract then insert reproduces the comment."""
        altitude, remaining, offset = extract_altitude(comment)
        assert insert_altitude(remaining, altitude, offset) == comment
