"""
APRS status report codec.

A status report announces the station's current mission or any other
single line status. It starts with the '>' data type identifier and may
begin with a timestamp:

- ``>12.6V 0.2A 22degC``            (no timestamp)
- ``>120503hFatal error``           (HMS timestamp)
- ``>281205zSystem will shutdown``  (DHM timestamp)
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from ..core.errors import InvalidStatus
from .timestamp import TIMESTAMP_LENGTH, Timestamp

logger = logging.getLogger(__name__)

STATUS_IDENTIFIER = b">"


@dataclass(frozen=True)
class StatusReport:
    """Decoded APRS status report."""

    timestamp: Optional[Timestamp]
    comment: str

    @classmethod
    def parse(cls, data: Union[bytes, str]) -> "StatusReport":
        """
        Parse a status report body (the text after the '>' identifier).

        The first seven bytes are used as timestamp only when they form a
        valid one; otherwise the whole body is the comment.

        Raises:
            InvalidStatus: Body contains a line terminator or non-Latin-1 text
        """
        if isinstance(data, str):
            try:
                data = data.encode("latin-1")
            except UnicodeEncodeError:
                raise InvalidStatus(data) from None
        data = bytes(data)

        if b"\r" in data or b"\n" in data:
            raise InvalidStatus(data)

        timestamp = Timestamp.try_parse(data[:TIMESTAMP_LENGTH])
        if timestamp is None:
            logger.debug("Status report without timestamp")
            comment = data
        else:
            comment = data[TIMESTAMP_LENGTH:]

        return cls(timestamp=timestamp, comment=comment.decode("latin-1"))

    def encode(self, buf: BinaryIO) -> None:
        """Write the wire form, including the '>' identifier, into a binary sink."""
        buf.write(STATUS_IDENTIFIER)
        if self.timestamp is not None:
            self.timestamp.encode(buf)
        buf.write(self.comment.encode("latin-1"))

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.encode(buf)
        return buf.getvalue()

    def __str__(self) -> str:
        return self.to_bytes().decode("latin-1")
