"""Generic messages produced by the firmware and the control server."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any

_FRACTION = re.compile(r"\.(\d+)")
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting up to nanosecond precision."""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    return datetime.fromisoformat(text)


def _format_time(value: datetime) -> str:
    """Format a timestamp as RFC 3339, using "Z" for UTC."""
    text = value.isoformat()
    if value.utcoffset() == timedelta(0) and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


class MessageType(IntEnum):
    """Severity of a message."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2


@dataclass
class Message:
    """A message with its time, type and content."""

    time: datetime = field(default=_ZERO_TIME)
    type: MessageType = MessageType.SUCCESS
    content: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        """Build a message from its JSON representation."""
        raw_time = data.get("time")
        return cls(
            time=_ZERO_TIME if raw_time is None else _parse_time(raw_time),
            type=MessageType(data.get("type", MessageType.SUCCESS)),
            content=data.get("content") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this message."""
        return {
            "time": _format_time(self.time),
            "type": int(self.type),
            "content": self.content,
        }

    def __str__(self) -> str:
        if self.type is MessageType.ERROR:
            return f"Error: {self.content}"
        if self.type is MessageType.WARNING:
            return f"Warning: {self.content}"
        return self.content