"""
APRS timestamp codec.

Two fixed-width, seven byte formats are used by position and status reports:

- ``HHMMSSh``  hour/minute/second (UTC)
- ``DDHHMMz``  day/hour/minute, UTC
- ``DDHHMM/``  day/hour/minute, local time
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple

from ..core.errors import InvalidTimestamp

logger = logging.getLogger(__name__)

TIMESTAMP_LENGTH = 7

TAG_HMS = ord("h")
TAG_DHM_UTC = ord("z")
TAG_DHM_LOCAL = ord("/")


class Timestamp(ABC):
    """Base class for the two timestamp formats."""

    @classmethod
    def parse(cls, data: bytes) -> "Timestamp":
        """
        Parse a seven byte timestamp field.

        Args:
            data: Exactly seven bytes, the last one being the format tag

        Returns:
            HourMinSec or DayHourMin

        Raises:
            InvalidTimestamp: Wrong length, unknown tag, non-digit or out of range field
        """
        data = bytes(data)
        if len(data) != TIMESTAMP_LENGTH:
            raise InvalidTimestamp(data)

        tag = data[6]
        first, second, third = _split_fields(data)

        if tag == TAG_HMS:
            if first > 23 or second > 59 or third > 59:
                raise InvalidTimestamp(data)
            return HourMinSec(first, second, third)

        if tag in (TAG_DHM_UTC, TAG_DHM_LOCAL):
            if not (1 <= first <= 31) or second > 23 or third > 59:
                raise InvalidTimestamp(data)
            return DayHourMin(first, second, third, utc=(tag == TAG_DHM_UTC))

        raise InvalidTimestamp(data)

    @classmethod
    def try_parse(cls, data: bytes) -> Optional["Timestamp"]:
        """Parse a timestamp, returning None when the field is not one."""
        if len(data) != TIMESTAMP_LENGTH or data[6] not in (
            TAG_HMS,
            TAG_DHM_UTC,
            TAG_DHM_LOCAL,
        ):
            return None
        if not bytes(data[:6]).isdigit():
            return None
        try:
            return cls.parse(data)
        except InvalidTimestamp:
            logger.debug(f"Out of range timestamp treated as absent: {bytes(data)!r}")
            return None

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Get the seven byte wire form."""
        pass

    def encode(self, buf: BinaryIO) -> None:
        """Write the wire form into a binary sink."""
        buf.write(self.to_bytes())

    def __str__(self) -> str:
        return self.to_bytes().decode("ascii")


@dataclass(frozen=True)
class HourMinSec(Timestamp):
    """Hour/minute/second timestamp (``HHMMSSh``)."""

    hour: int
    minute: int
    second: int

    def to_bytes(self) -> bytes:
        return b"%02d%02d%02dh" % (self.hour, self.minute, self.second)


@dataclass(frozen=True)
class DayHourMin(Timestamp):
    """Day/hour/minute timestamp (``DDHHMMz`` or ``DDHHMM/``)."""

    day: int
    hour: int
    minute: int
    utc: bool = True

    def to_bytes(self) -> bytes:
        tag = b"z" if self.utc else b"/"
        return b"%02d%02d%02d" % (self.day, self.hour, self.minute) + tag


def _split_fields(data: bytes) -> Tuple[int, int, int]:
    """Split the six leading digits into three two-digit integers."""
    digits = data[:6]
    if not digits.isdigit():
        raise InvalidTimestamp(data)
    return int(digits[0:2]), int(digits[2:4]), int(digits[4:6])
