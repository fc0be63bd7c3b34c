"""
Callsign parsing for APRS packet headers.

A callsign token is a base call with an optional numeric SSID suffix,
e.g. ``N0CALL-9``. Routing markers such as the trailing ``*`` of a
digipeated hop stay part of the base text.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ..core.errors import InvalidCallsign

SSID_SEPARATOR = "-"


@dataclass(frozen=True)
class Callsign:
    """
    Station callsign with optional SSID.

    ``ssid_text`` keeps the suffix digits as received (e.g. "09") so the
    token is re-emitted unchanged; it does not take part in equality.
    """

    base: str
    ssid: Optional[int] = None
    ssid_text: Optional[str] = field(default=None, compare=False, repr=False)

    @classmethod
    def parse(cls, token: Union[str, bytes]) -> "Callsign":
        """
        Parse a callsign token.

        Args:
            token: Callsign text, e.g. "N0CALL-9" or "TCPIP*"

        Returns:
            Callsign

        Raises:
            InvalidCallsign: Token is empty
        """
        if isinstance(token, (bytes, bytearray)):
            token = bytes(token).decode("latin-1")
        if not token:
            raise InvalidCallsign(token)

        base, sep, suffix = token.rpartition(SSID_SEPARATOR)
        if sep and suffix and suffix.isascii() and suffix.isdigit():
            return cls(base, int(suffix), ssid_text=suffix)

        return cls(token)

    def to_bytes(self) -> bytes:
        return str(self).encode("latin-1")

    def __str__(self) -> str:
        if self.ssid is None:
            return self.base
        # Values built by hand may disagree with the stored text
        if self.ssid_text is not None and int(self.ssid_text) == self.ssid:
            return f"{self.base}{SSID_SEPARATOR}{self.ssid_text}"
        return f"{self.base}{SSID_SEPARATOR}{self.ssid}"
