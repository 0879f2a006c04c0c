"""Code channels and driver identifiers shared by commands and the machine model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_UINT64_MASK = (1 << 64) - 1


class CodeChannel(str, Enum):
    """Input channels that G/M/T-codes can be sent to."""

    HTTP = "HTTP"
    TELNET = "Telnet"
    FILE = "File"
    USB = "USB"
    AUX = "Aux"
    TRIGGER = "Trigger"
    QUEUE = "Queue"
    LCD = "LCD"
    SBC = "SBC"
    DAEMON = "Daemon"
    AUX2 = "Aux2"
    AUTO_PAUSE = "AutoPause"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


DEFAULT_CHANNEL = CodeChannel.SBC


def _parse_uint(text: str, message: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ValueError(message)
    number = int(text)
    if number > _UINT64_MASK:
        raise ValueError(message)
    return number


@dataclass(frozen=True)
class DriverId:
    """Identifies a stepper driver by board and port."""

    board: int = 0
    port: int = 0

    @classmethod
    def from_uint64(cls, value: int) -> DriverId:
        """Build a driver id from a value holding the board in bits 16-31 and the port in bits 0-15."""
        return cls(board=(value >> 16) & 0xFFFF, port=value & 0xFFFF)

    @classmethod
    def parse(cls, value: str) -> DriverId:
        """Parse a driver id of the form "port" or "board.port"."""
        if not value.strip():
            return cls()
        parts = value.split(".")
        if len(parts) == 1:
            return cls(port=_parse_uint(parts[0], "Failed to parse driver number"))
        if len(parts) == 2:
            board = _parse_uint(parts[0], "Failed to parse board number")
            port = _parse_uint(parts[1], "Failed to parse driver number")
            return cls(board=board, port=port)
        raise ValueError("Driver value is invalid")

    def as_uint64(self) -> int:
        """Pack this driver id into a single unsigned 64-bit value."""
        return ((self.board << 16) | self.port) & _UINT64_MASK

    def __str__(self) -> str:
        return f"{self.board}.{self.port}"