"""
Compressed position extras: the ``cs`` field and the compression type byte.

A compressed position carries three trailing bytes ``c``, ``s`` and ``T``.
``T - 33`` is a bitfield:

    bit 5       GPS fix (0 = old/last, 1 = current)
    bits 4-3    NMEA source (0 = other, 1 = GLL, 2 = GGA, 3 = RMC)
    bits 2-0    compression origin

The ``cs`` pair is interpreted as:

- ``c == ' '``       no course/speed/range/altitude data
- ``c == '{'``       pre-calculated radio range, 2 * 1.08 ** (s - 33) miles
- NMEA source GGA    altitude, 1.002 ** ((c - 33) * 91 + (s - 33)) feet
- otherwise          course (c - 33) * 4 degrees, speed 1.08 ** (s - 33) - 1 knots
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Union

from ..core.errors import InvalidPosition
from .coordinates import BASE91_OFFSET, BASE91_RADIX, decode_base91, encode_base91

logger = logging.getLogger(__name__)

NO_DATA_MARKER = ord(" ")
RADIO_RANGE_MARKER = ord("{")

SPEED_BASE = 1.08
ALTITUDE_BASE = 1.002
COURSE_STEP = 4  # Degrees per base-91 unit

_GPS_FIX_SHIFT = 5
_NMEA_SOURCE_SHIFT = 3
_NMEA_SOURCE_MASK = 0x03
_ORIGIN_MASK = 0x07
_TYPE_MAX = 0x3F  # Bits 7-6 are unused and must be zero
_DIGIT_MAX = BASE91_RADIX - 1


class GpsFix(Enum):
    """GPS fix currency."""

    OLD = 0
    CURRENT = 1


class NmeaSource(Enum):
    """NMEA sentence the position was derived from."""

    OTHER = 0
    GLL = 1
    GGA = 2
    RMC = 3


class Origin(Enum):
    """Compression origin."""

    COMPRESSED = 0
    TNC_BTEXT = 1
    SOFTWARE = 2
    TBD = 3
    KPC3 = 4
    PICO = 5
    OTHER_TRACKER = 6
    DIGIPEATER_CONVERSION = 7


@dataclass(frozen=True)
class CompressionType:
    """Decoded compression type byte."""

    gps_fix: GpsFix
    nmea_source: NmeaSource
    origin: Origin

    @classmethod
    def from_byte(cls, value: int) -> "CompressionType":
        """
        Decode the raw ``T`` byte.

        Raises:
            InvalidPosition: Byte outside '!' .. '`' (unused high bits set)
        """
        bits = value - BASE91_OFFSET
        if not (0 <= bits <= _TYPE_MAX):
            raise InvalidPosition(bytes([value]))

        return cls(
            gps_fix=GpsFix(bits >> _GPS_FIX_SHIFT),
            nmea_source=NmeaSource((bits >> _NMEA_SOURCE_SHIFT) & _NMEA_SOURCE_MASK),
            origin=Origin(bits & _ORIGIN_MASK),
        )

    def to_byte(self) -> int:
        bits = (
            (self.gps_fix.value << _GPS_FIX_SHIFT)
            | (self.nmea_source.value << _NMEA_SOURCE_SHIFT)
            | self.origin.value
        )
        return bits + BASE91_OFFSET


@dataclass(frozen=True)
class CompressedCourseSpeed:
    """Course in degrees and speed in knots."""

    course: int
    speed: float

    def to_bytes(self) -> bytes:
        c = (self.course % 360) // COURSE_STEP
        s = _inverse_power(self.speed + 1.0, SPEED_BASE, _DIGIT_MAX)
        return bytes([c + BASE91_OFFSET, s + BASE91_OFFSET])


@dataclass(frozen=True)
class CompressedRadioRange:
    """Pre-calculated radio range in miles."""

    range: float

    def to_bytes(self) -> bytes:
        s = _inverse_power(self.range / 2.0, SPEED_BASE, _DIGIT_MAX)
        return bytes([RADIO_RANGE_MARKER, s + BASE91_OFFSET])


@dataclass(frozen=True)
class CompressedAltitude:
    """Altitude in feet."""

    altitude: float

    def to_bytes(self) -> bytes:
        return encode_base91(
            _inverse_power(self.altitude, ALTITUDE_BASE, BASE91_RADIX**2 - 1), 2
        )


CompressedCs = Union[CompressedCourseSpeed, CompressedRadioRange, CompressedAltitude]


@dataclass(frozen=True)
class CompressedCst:
    """A present ``cs`` value together with its compression type."""

    cs: CompressedCs
    compression_type: CompressionType

    def to_bytes(self) -> bytes:
        return self.cs.to_bytes() + bytes([self.compression_type.to_byte()])

    def encode(self, buf: BinaryIO) -> None:
        buf.write(self.to_bytes())


@dataclass(frozen=True)
class CstAbsent:
    """
    No course/speed/range/altitude data.

    ``filler`` keeps the two bytes following the space marker, which carry
    no meaning but are re-emitted verbatim.
    """

    filler: bytes = b"sT"

    def to_bytes(self) -> bytes:
        return bytes([NO_DATA_MARKER]) + self.filler

    def encode(self, buf: BinaryIO) -> None:
        buf.write(self.to_bytes())


Cst = Union[CompressedCst, CstAbsent]


def parse_cst(data: bytes) -> Cst:
    """
    Parse the three byte ``csT`` field of a compressed position.

    Args:
        data: ``c``, ``s`` and compression type bytes

    Returns:
        CstAbsent when ``c`` is a space, otherwise CompressedCst

    Raises:
        InvalidPosition: Wrong length or undecodable byte
    """
    data = bytes(data)
    if len(data) != 3:
        raise InvalidPosition(data)

    c, s, t = data
    if c == NO_DATA_MARKER:
        return CstAbsent(data[1:])

    compression_type = CompressionType.from_byte(t)
    if not _is_base91(s):
        raise InvalidPosition(data)

    if c == RADIO_RANGE_MARKER:
        cs = CompressedRadioRange(2.0 * SPEED_BASE ** (s - BASE91_OFFSET))
    elif compression_type.nmea_source == NmeaSource.GGA:
        try:
            cs = CompressedAltitude(ALTITUDE_BASE ** decode_base91(data[:2]))
        except ValueError:
            raise InvalidPosition(data)
    else:
        if not _is_base91(c):
            raise InvalidPosition(data)
        cs = CompressedCourseSpeed(
            course=(c - BASE91_OFFSET) * COURSE_STEP,
            speed=SPEED_BASE ** (s - BASE91_OFFSET) - 1.0,
        )

    logger.debug(f"Decoded cs field {data!r} as {cs}")
    return CompressedCst(cs, compression_type)


def _is_base91(value: int) -> bool:
    return BASE91_OFFSET <= value < BASE91_OFFSET + BASE91_RADIX


def _inverse_power(value: float, base: float, limit: int) -> int:
    """Round ``log_base(value)`` to the nearest integer in ``[0, limit]``."""
    if value <= 0:
        return 0
    exponent = int(round(math.log(value) / math.log(base)))
    return min(limit, max(0, exponent))
