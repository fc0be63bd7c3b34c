"""
Fixed-width data extensions following an uncompressed position.

Supported seven byte layouts:

- ``CSE/SPD``  course (degrees) and speed (knots)
- ``PHGphgd``  station power, antenna height/gain/directivity
- ``RNGrrrr``  pre-calculated radio range (miles)
- ``DFSshgd``  DF signal strength, antenna height/gain/directivity

An altitude token ``/A=aaaaaa`` (feet) may appear anywhere in the
comment that follows.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from ..core.errors import InvalidCourse, InvalidDataExtension
from ..utils.conversions import (
    directivity_to_degrees,
    phg_height_to_feet,
    phg_power_to_watts,
)

logger = logging.getLogger(__name__)

DATA_EXTENSION_LENGTH = 7

ALTITUDE_PREFIX = b"/A="
ALTITUDE_DIGITS = 6
ALTITUDE_TOKEN_LENGTH = len(ALTITUDE_PREFIX) + ALTITUDE_DIGITS

MAX_COURSE = 360


class DataExtension(ABC):
    """Base class for the data extension variants."""

    @classmethod
    def match(cls, data: Union[bytes, str]) -> Optional["DataExtension"]:
        """
        Match a seven byte token against the known layouts.

        Args:
            data: Candidate token

        Returns:
            The decoded extension, or None when the token has no extension layout

        Raises:
            InvalidCourse: Token is a course/speed pair with course above 360
            InvalidDataExtension: Token is text outside Latin-1
        """
        if isinstance(data, str):
            try:
                data = data.encode("latin-1")
            except UnicodeEncodeError:
                raise InvalidDataExtension(data) from None
        data = bytes(data)
        if len(data) != DATA_EXTENSION_LENGTH:
            return None

        if data[:3].isdigit() and data[3:4] == b"/" and data[4:7].isdigit():
            course = int(data[:3])
            if course > MAX_COURSE:
                raise InvalidCourse(data)
            return CourseSpeed(course, int(data[4:7]))

        prefix, digits = data[:3], data[3:7]
        if not digits.isdigit():
            return None

        if prefix == b"PHG":
            return StationPower(*(int(chr(d)) for d in digits))
        if prefix == b"RNG":
            return RadioRange(int(digits))
        if prefix == b"DFS":
            return SignalStrength(*(int(chr(d)) for d in digits))

        return None

    @classmethod
    def parse(cls, data: Union[bytes, str]) -> "DataExtension":
        """
        Parse a seven byte data extension token.

        Raises:
            InvalidCourse: Course above 360
            InvalidDataExtension: Token matches none of the layouts
        """
        extension = cls.match(data)
        if extension is None:
            raise InvalidDataExtension(data)
        return extension

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Get the seven byte wire form."""
        pass

    def encode(self, buf: BinaryIO) -> None:
        buf.write(self.to_bytes())


@dataclass(frozen=True)
class CourseSpeed(DataExtension):
    """Course in degrees (1-360, 0 unknown) and speed in knots."""

    course: int
    speed: int

    def to_bytes(self) -> bytes:
        return b"%03d/%03d" % (self.course, self.speed)


@dataclass(frozen=True)
class StationPower(DataExtension):
    """PHG codes: power, effective antenna height, gain and directivity."""

    power: int
    height: int
    gain: int
    directivity: int

    @property
    def power_watts(self) -> int:
        return phg_power_to_watts(self.power)

    @property
    def height_feet(self) -> int:
        return phg_height_to_feet(self.height)

    @property
    def gain_db(self) -> int:
        return self.gain

    @property
    def directivity_degrees(self) -> Optional[int]:
        return directivity_to_degrees(self.directivity)

    def to_bytes(self) -> bytes:
        return b"PHG%d%d%d%d" % (self.power, self.height, self.gain, self.directivity)


@dataclass(frozen=True)
class RadioRange(DataExtension):
    """Pre-calculated omni-directional radio range in miles."""

    range: int

    def to_bytes(self) -> bytes:
        return b"RNG%04d" % self.range


@dataclass(frozen=True)
class SignalStrength(DataExtension):
    """DFS codes: signal strength (S-points), antenna height, gain and directivity."""

    strength: int
    height: int
    gain: int
    directivity: int

    @property
    def height_feet(self) -> int:
        return phg_height_to_feet(self.height)

    @property
    def gain_db(self) -> int:
        return self.gain

    @property
    def directivity_degrees(self) -> Optional[int]:
        return directivity_to_degrees(self.directivity)

    def to_bytes(self) -> bytes:
        return b"DFS%d%d%d%d" % (
            self.strength,
            self.height,
            self.gain,
            self.directivity,
        )


def extract_altitude(comment: bytes) -> Tuple[Optional[int], bytes, Optional[int]]:
    """
    Remove the first ``/A=aaaaaa`` altitude token from a comment.

    Only the first occurrence is considered. When its six bytes are not
    all digits the comment is returned untouched.

    Args:
        comment: Comment bytes

    Returns:
        Tuple of (altitude in feet or None, remaining comment, token offset or None)
    """
    offset = comment.find(ALTITUDE_PREFIX)
    if offset < 0:
        return None, comment, None

    start = offset + len(ALTITUDE_PREFIX)
    digits = comment[start : start + ALTITUDE_DIGITS]
    if len(digits) != ALTITUDE_DIGITS or not digits.isdigit():
        logger.debug(f"Altitude token left in comment: {comment[offset:start + ALTITUDE_DIGITS]!r}")
        return None, comment, None

    remaining = comment[:offset] + comment[offset + ALTITUDE_TOKEN_LENGTH :]
    return int(digits), remaining, offset


def insert_altitude(comment: bytes, altitude: int, offset: int = 0) -> bytes:
    """Re-insert an altitude token at ``offset`` within a comment."""
    offset = max(0, min(offset, len(comment)))
    token = ALTITUDE_PREFIX + b"%06d" % altitude
    return comment[:offset] + token + comment[offset:]
