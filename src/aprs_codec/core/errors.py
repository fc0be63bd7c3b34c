"""
Error taxonomy for APRS parsing.

Every parse failure raises exactly one of the classes below. Each carries
the offending input slice so callers can report what was rejected.
"""

from typing import Union

Data = Union[bytes, str]


class AprsError(ValueError):
    """Base class for all APRS parse errors."""

    def __init__(self, data: Data = b""):
        self.data = data
        super().__init__(f"{self.__class__.__name__}: {self._render(data)}")

    @staticmethod
    def _render(data: Data) -> str:
        if isinstance(data, (bytes, bytearray)):
            return repr(bytes(data).decode("latin-1"))
        return repr(data)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.data == other.data

    def __hash__(self) -> int:
        return hash((type(self), self.data))


class InvalidMessage(AprsError):
    """Packet header or body framing is malformed."""


class InvalidCallsign(AprsError):
    """Callsign token is empty."""


class InvalidPosition(AprsError):
    """Position report or coordinate field is malformed."""


class InvalidStatus(AprsError):
    """Status report is malformed."""


class InvalidTimestamp(AprsError):
    """Timestamp field is malformed or out of range."""


class InvalidSymbolTable(AprsError):
    """Symbol table identifier is not a primary table or overlay."""


class InvalidCourse(AprsError):
    """Course value exceeds 360 degrees."""


class InvalidDataExtension(AprsError):
    """Data extension token matches none of the known layouts."""
