"""
Latitude/longitude codec.

Supports both APRS coordinate encodings:

- Uncompressed: ``DDMM.mmN`` / ``DDDMM.mmW`` (degrees and decimal minutes)
- Compressed: four printable base-91 characters per axis

Both encodings normalize to decimal degrees, so downstream code does
not need to know which one produced a value.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..core.errors import InvalidPosition

# Printable base-91 alphabet: '!' (33) .. '{' (123)
BASE91_OFFSET = 33
BASE91_RADIX = 91

# Compressed coordinate scale factors (base-91 units per degree)
LATITUDE_SCALE = 380926
LONGITUDE_SCALE = 190463

# Hundredths of a minute per degree, the uncompressed resolution
_HUNDREDTHS_PER_DEGREE = 6000


def decode_base91(data: bytes) -> int:
    """
    Decode big-endian base-91 digits.

    Args:
        data: Characters in the range '!' .. '{'

    Returns:
        Decoded integer

    Raises:
        ValueError: Empty input or character outside the alphabet
    """
    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    if raw.size == 0:
        raise ValueError("base-91 field is empty")

    digits = raw.astype(np.int64) - BASE91_OFFSET
    if digits.min() < 0 or digits.max() >= BASE91_RADIX:
        raise ValueError(f"invalid base-91 field: {bytes(data)!r}")

    weights = BASE91_RADIX ** np.arange(digits.size - 1, -1, -1, dtype=np.int64)
    return int(np.dot(digits, weights))


def encode_base91(value: int, width: int) -> bytes:
    """
    Encode an integer as fixed-width big-endian base-91 digits.

    Args:
        value: Non-negative integer below 91**width
        width: Number of output characters

    Returns:
        Encoded characters
    """
    if not (0 <= value < BASE91_RADIX**width):
        raise ValueError(f"{value} does not fit in {width} base-91 digits")

    digits = np.zeros(width, dtype=np.uint8)
    for i in range(width - 1, -1, -1):
        value, digits[i] = divmod(value, BASE91_RADIX)
    return (digits + BASE91_OFFSET).tobytes()


def _parse_degrees_minutes(data: bytes, degree_digits: int) -> Tuple[int, int]:
    """
    Split an uncompressed field into degrees and hundredths of a minute.

    Layout is ``D..DMM.mm`` followed by one hemisphere byte.
    """
    expected = degree_digits + 6
    if len(data) != expected:
        raise InvalidPosition(data)

    whole = data[: degree_digits + 2]
    fraction = data[degree_digits + 3 : degree_digits + 5]
    if (
        data[degree_digits + 2 : degree_digits + 3] != b"."
        or not whole.isdigit()
        or not fraction.isdigit()
    ):
        raise InvalidPosition(data)

    degrees = int(whole[:degree_digits])
    minutes = int(whole[degree_digits:])
    if minutes >= 60:
        raise InvalidPosition(data)

    return degrees, minutes * 100 + int(fraction)


def _format_degrees_minutes(value: float, degree_digits: int) -> bytes:
    """Render ``abs(value)`` as ``D..DMM.mm`` rounded to hundredths of a minute."""
    total = int(round(abs(value) * _HUNDREDTHS_PER_DEGREE))
    degrees, hundredths = divmod(total, _HUNDREDTHS_PER_DEGREE)
    minutes, fraction = divmod(hundredths, 100)
    return b"%0*d%02d.%02d" % (degree_digits, degrees, minutes, fraction)


def _is_negative(value: float) -> bool:
    return float(np.copysign(1.0, value)) < 0


@dataclass(frozen=True)
class Latitude:
    """Latitude in decimal degrees, north positive."""

    value: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.value <= 90.0):
            raise InvalidPosition(f"latitude {self.value} out of range")

    def __float__(self) -> float:
        return float(self.value)

    @classmethod
    def parse_uncompressed(cls, data: bytes) -> "Latitude":
        """
        Parse ``DDMM.mmH`` where H is N or S.

        Raises:
            InvalidPosition: Malformed field or value out of range
        """
        data = bytes(data)
        degrees, hundredths = _parse_degrees_minutes(data, 2)

        hemisphere = data[-1:]
        if hemisphere not in (b"N", b"S"):
            raise InvalidPosition(data)

        value = degrees + hundredths / _HUNDREDTHS_PER_DEGREE
        if value > 90.0:
            raise InvalidPosition(data)

        return cls(-value if hemisphere == b"S" else value)

    @classmethod
    def parse_compressed(cls, data: bytes) -> "Latitude":
        """
        Parse four base-91 characters.

        Raises:
            InvalidPosition: Wrong length, invalid character or value out of range
        """
        data = bytes(data)
        if len(data) != 4:
            raise InvalidPosition(data)
        try:
            value = 90.0 - decode_base91(data) / LATITUDE_SCALE
        except ValueError:
            raise InvalidPosition(data)

        if value < -90.0:
            raise InvalidPosition(data)
        return cls(value)

    def encode_uncompressed(self) -> bytes:
        hemisphere = b"S" if _is_negative(self.value) else b"N"
        return _format_degrees_minutes(self.value, 2) + hemisphere

    def encode_compressed(self) -> bytes:
        return encode_base91(int(round((90.0 - self.value) * LATITUDE_SCALE)), 4)


@dataclass(frozen=True)
class Longitude:
    """Longitude in decimal degrees, east positive."""

    value: float

    def __post_init__(self) -> None:
        if not (-180.0 <= self.value <= 180.0):
            raise InvalidPosition(f"longitude {self.value} out of range")

    def __float__(self) -> float:
        return float(self.value)

    @classmethod
    def parse_uncompressed(cls, data: bytes) -> "Longitude":
        """
        Parse ``DDDMM.mmH`` where H is E or W.

        Raises:
            InvalidPosition: Malformed field or value out of range
        """
        data = bytes(data)
        degrees, hundredths = _parse_degrees_minutes(data, 3)

        hemisphere = data[-1:]
        if hemisphere not in (b"E", b"W"):
            raise InvalidPosition(data)

        value = degrees + hundredths / _HUNDREDTHS_PER_DEGREE
        if value > 180.0:
            raise InvalidPosition(data)

        return cls(-value if hemisphere == b"W" else value)

    @classmethod
    def parse_compressed(cls, data: bytes) -> "Longitude":
        """
        Parse four base-91 characters.

        Raises:
            InvalidPosition: Wrong length, invalid character or value out of range
        """
        data = bytes(data)
        if len(data) != 4:
            raise InvalidPosition(data)
        try:
            value = -180.0 + decode_base91(data) / LONGITUDE_SCALE
        except ValueError:
            raise InvalidPosition(data)

        if value > 180.0:
            raise InvalidPosition(data)
        return cls(value)

    def encode_uncompressed(self) -> bytes:
        hemisphere = b"W" if _is_negative(self.value) else b"E"
        return _format_degrees_minutes(self.value, 3) + hemisphere

    def encode_compressed(self) -> bytes:
        return encode_base91(int(round((self.value + 180.0) * LONGITUDE_SCALE)), 4)
