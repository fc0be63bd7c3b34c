"""
APRS position report codec.

A position report starts with one of four data type identifiers:

    '!'  no timestamp, no messaging
    '='  no timestamp, messaging supported
    '/'  timestamp, no messaging
    '@'  timestamp, messaging supported

followed by an optional seven byte timestamp and the position itself in
one of two encodings, chosen by its first byte:

- Uncompressed (first byte is a digit), 19 bytes::

      DDMM.mmN T DDDMM.mmW C [extension] comment

  where T is the symbol table and C the symbol code. A seven byte data
  extension may follow the symbol code, and an altitude token
  ``/A=aaaaaa`` may appear in the comment.

- Compressed, 13 bytes::

      T YYYY XXXX C c s t comment

  with base-91 latitude/longitude and a compressed course/speed,
  radio range or altitude field.

Parsing is lossless: ``PositionReport.parse(data).to_bytes() == data`` for
every accepted input.
"""

import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional, Union

from ..core.errors import InvalidPosition, InvalidSymbolTable
from .compression import CompressedCst, Cst, CstAbsent, parse_cst
from .coordinates import Latitude, Longitude
from .data_extension import (
    DATA_EXTENSION_LENGTH,
    DataExtension,
    extract_altitude,
    insert_altitude,
)
from .timestamp import TIMESTAMP_LENGTH, Timestamp

logger = logging.getLogger(__name__)

UNCOMPRESSED_LENGTH = 19
COMPRESSED_LENGTH = 13

PRIMARY_SYMBOL_TABLES = ("/", "\\")
UNCOMPRESSED_OVERLAYS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
COMPRESSED_OVERLAYS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghij"

# (has_timestamp, messaging_supported) per data type identifier
POSITION_IDENTIFIERS = {
    ord("!"): (False, False),
    ord("="): (False, True),
    ord("/"): (True, False),
    ord("@"): (True, True),
}


class PositionEncoding(Enum):
    """Coordinate encoding family."""

    UNCOMPRESSED = "uncompressed"
    COMPRESSED = "compressed"


Extension = Union[DataExtension, CompressedCst, CstAbsent]


@dataclass(frozen=True)
class PositionReport:
    """
    Decoded APRS position report.

    For the uncompressed encoding ``extension`` is a DataExtension or None,
    for the compressed encoding it is a CompressedCst or CstAbsent.
    ``altitude`` holds the ``/A=`` token value (feet) extracted from an
    uncompressed comment; ``comment`` excludes it.
    """

    timestamp: Optional[Timestamp]
    messaging_supported: bool
    latitude: Latitude
    longitude: Longitude
    symbol_table: str
    symbol_code: str
    comment: bytes = b""
    encoding: PositionEncoding = PositionEncoding.UNCOMPRESSED
    extension: Optional[Extension] = None
    altitude: Optional[int] = None
    # Where the altitude token sat in the original comment
    altitude_offset: int = field(default=0, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.encoding == PositionEncoding.COMPRESSED:
            if not isinstance(self.extension, (CompressedCst, CstAbsent)):
                raise InvalidPosition(
                    f"compressed position requires a cs field, got {self.extension!r}"
                )
            if self.altitude is not None:
                raise InvalidPosition("altitude token only applies to uncompressed positions")
        elif self.extension is not None and not isinstance(self.extension, DataExtension):
            raise InvalidPosition(
                f"uncompressed position cannot carry {self.extension!r}"
            )

    @property
    def is_compressed(self) -> bool:
        return self.encoding == PositionEncoding.COMPRESSED

    @property
    def data_type_identifier(self) -> str:
        """Get the leading identifier character for this report."""
        if self.timestamp is not None:
            return "@" if self.messaging_supported else "/"
        return "=" if self.messaging_supported else "!"

    @classmethod
    def parse(cls, data: Union[bytes, str]) -> "PositionReport":
        """
        Parse a position report including its data type identifier.

        Args:
            data: Report body, e.g. b"!4903.50N/07201.75W-Test"

        Returns:
            PositionReport

        Raises:
            InvalidPosition: Unknown identifier, short or malformed position, non-Latin-1 text
            InvalidTimestamp: Malformed timestamp
            InvalidSymbolTable: Unknown symbol table
            InvalidCourse: Course/speed extension with course above 360
        """
        if isinstance(data, str):
            try:
                data = data.encode("latin-1")
            except UnicodeEncodeError:
                raise InvalidPosition(data) from None
        data = bytes(data)

        if not data or data[0] not in POSITION_IDENTIFIERS:
            raise InvalidPosition(data)
        has_timestamp, messaging_supported = POSITION_IDENTIFIERS[data[0]]

        timestamp = None
        body = data[1:]
        if has_timestamp:
            if len(body) < TIMESTAMP_LENGTH:
                raise InvalidPosition(data)
            timestamp = Timestamp.parse(body[:TIMESTAMP_LENGTH])
            body = body[TIMESTAMP_LENGTH:]

        if body[:1].isdigit():
            return cls._parse_uncompressed(body, timestamp, messaging_supported)
        return cls._parse_compressed(body, timestamp, messaging_supported)

    @classmethod
    def _parse_uncompressed(
        cls,
        body: bytes,
        timestamp: Optional[Timestamp],
        messaging_supported: bool,
    ) -> "PositionReport":
        if len(body) < UNCOMPRESSED_LENGTH:
            raise InvalidPosition(body)

        latitude = Latitude.parse_uncompressed(body[0:8])
        symbol_table = chr(body[8])
        longitude = Longitude.parse_uncompressed(body[9:18])
        symbol_code = chr(body[18])

        if symbol_table not in PRIMARY_SYMBOL_TABLES and symbol_table not in UNCOMPRESSED_OVERLAYS:
            raise InvalidSymbolTable(body[8:9])

        comment = body[UNCOMPRESSED_LENGTH:]
        extension = DataExtension.match(comment[:DATA_EXTENSION_LENGTH])
        if extension is not None:
            comment = comment[DATA_EXTENSION_LENGTH:]

        altitude, comment, offset = extract_altitude(comment)

        return cls(
            timestamp=timestamp,
            messaging_supported=messaging_supported,
            latitude=latitude,
            longitude=longitude,
            symbol_table=symbol_table,
            symbol_code=symbol_code,
            comment=comment,
            encoding=PositionEncoding.UNCOMPRESSED,
            extension=extension,
            altitude=altitude,
            altitude_offset=offset or 0,
        )

    @classmethod
    def _parse_compressed(
        cls,
        body: bytes,
        timestamp: Optional[Timestamp],
        messaging_supported: bool,
    ) -> "PositionReport":
        if len(body) < COMPRESSED_LENGTH:
            raise InvalidPosition(body)

        symbol_table = chr(body[0])
        if symbol_table not in PRIMARY_SYMBOL_TABLES and symbol_table not in COMPRESSED_OVERLAYS:
            raise InvalidSymbolTable(body[0:1])

        latitude = Latitude.parse_compressed(body[1:5])
        longitude = Longitude.parse_compressed(body[5:9])
        symbol_code = chr(body[9])
        cst: Cst = parse_cst(body[10:13])

        return cls(
            timestamp=timestamp,
            messaging_supported=messaging_supported,
            latitude=latitude,
            longitude=longitude,
            symbol_table=symbol_table,
            symbol_code=symbol_code,
            comment=body[COMPRESSED_LENGTH:],
            encoding=PositionEncoding.COMPRESSED,
            extension=cst,
        )

    def encode(self, buf: BinaryIO) -> None:
        """
        Write the wire form into a binary sink.

        Args:
            buf: Any object with a ``write(bytes)`` method
        """
        buf.write(self.data_type_identifier.encode("latin-1"))

        if self.timestamp is not None:
            self.timestamp.encode(buf)

        if self.encoding == PositionEncoding.COMPRESSED:
            self._encode_compressed(buf)
        else:
            self._encode_uncompressed(buf)

    def _encode_uncompressed(self, buf: BinaryIO) -> None:
        buf.write(self.latitude.encode_uncompressed())
        buf.write(self.symbol_table.encode("latin-1"))
        buf.write(self.longitude.encode_uncompressed())
        buf.write(self.symbol_code.encode("latin-1"))

        if self.extension is not None:
            self.extension.encode(buf)

        comment = self.comment
        if self.altitude is not None:
            comment = insert_altitude(comment, self.altitude, self.altitude_offset)
        buf.write(comment)

    def _encode_compressed(self, buf: BinaryIO) -> None:
        buf.write(self.symbol_table.encode("latin-1"))
        buf.write(self.latitude.encode_compressed())
        buf.write(self.longitude.encode_compressed())
        buf.write(self.symbol_code.encode("latin-1"))
        self.extension.encode(buf)
        buf.write(self.comment)

    def to_bytes(self) -> bytes:
        """Get the complete wire form."""
        buf = io.BytesIO()
        self.encode(buf)
        return buf.getvalue()
