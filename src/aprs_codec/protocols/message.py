"""
APRS packet envelope.

A packet in TNC2 text form is ``SOURCE>DEST,VIA1,VIA2:body``. The first
byte of the body selects the report type: '/' is a position report, '>'
a status report, and any other body is kept verbatim as UnknownBody.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, List, Union

from ..core.errors import InvalidMessage
from .callsign import Callsign
from .position import PositionReport
from .status import STATUS_IDENTIFIER, StatusReport

logger = logging.getLogger(__name__)

HEADER_SEPARATOR = b":"
SOURCE_SEPARATOR = b">"
PATH_SEPARATOR = b","
POSITION_IDENTIFIER = b"/"


@dataclass(frozen=True)
class UnknownBody:
    """Body of a report type this codec does not decode; kept verbatim."""

    data: bytes

    @property
    def data_type_identifier(self) -> str:
        return self.data[:1].decode("latin-1")

    def encode(self, buf: BinaryIO) -> None:
        buf.write(self.data)


Body = Union[PositionReport, StatusReport, UnknownBody]


@dataclass(frozen=True)
class Message:
    """A complete APRS packet."""

    source: Callsign
    destination: Callsign
    via: List[Callsign] = field(default_factory=list)
    body: Body = field(default_factory=lambda: UnknownBody(b""))

    @classmethod
    def parse(cls, data: Union[bytes, str]) -> "Message":
        """
        Parse a packet.

        Args:
            data: Packet text; str input is mapped to bytes with Latin-1

        Returns:
            Message

        Raises:
            InvalidMessage: Missing separators, empty destination or empty body
            InvalidCallsign: Empty source or via callsign
            AprsError: Any error raised by the body codec
        """
        if isinstance(data, str):
            try:
                data = data.encode("latin-1")
            except UnicodeEncodeError:
                raise InvalidMessage(data) from None
        data = bytes(data)

        header, sep, body = data.partition(HEADER_SEPARATOR)
        if not sep:
            raise InvalidMessage(data)

        source, sep, route = header.partition(SOURCE_SEPARATOR)
        if not sep:
            raise InvalidMessage(data)

        destination, *path = route.split(PATH_SEPARATOR)
        if not destination:
            raise InvalidMessage(data)

        if not body:
            raise InvalidMessage(data)

        return cls(
            source=Callsign.parse(source),
            destination=Callsign.parse(destination),
            via=[Callsign.parse(hop) for hop in path],
            body=cls._parse_body(body),
        )

    @staticmethod
    def _parse_body(body: bytes) -> Body:
        identifier = body[0]
        if identifier == POSITION_IDENTIFIER[0]:
            return PositionReport.parse(body)
        if identifier == STATUS_IDENTIFIER[0]:
            return StatusReport.parse(body[1:])

        logger.debug(f"Unsupported data type identifier {chr(identifier)!r}")
        return UnknownBody(body)

    @property
    def is_position(self) -> bool:
        return isinstance(self.body, PositionReport)

    @property
    def is_status(self) -> bool:
        return isinstance(self.body, StatusReport)

    def encode(self, buf: BinaryIO) -> None:
        """Write ``SOURCE>DEST,VIA:body`` into a binary sink."""
        buf.write(self.source.to_bytes())
        buf.write(SOURCE_SEPARATOR)
        buf.write(self.destination.to_bytes())
        for hop in self.via:
            buf.write(PATH_SEPARATOR)
            buf.write(hop.to_bytes())
        buf.write(HEADER_SEPARATOR)
        self.body.encode(buf)

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.encode(buf)
        return buf.getvalue()

    def __str__(self) -> str:
        return self.to_bytes().decode("latin-1")
