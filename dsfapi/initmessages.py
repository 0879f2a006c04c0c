"""Init messages exchanged when a connection to the control server is set up."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PROTOCOL_VERSION = 6


class ConnectionMode(str, Enum):
    """Connection types a client can request."""

    UNKNOWN = "Unknown"
    COMMAND = "Command"
    INTERCEPT = "Intercept"
    SUBSCRIBE = "Subscribe"

    def __str__(self) -> str:
        return self.value


class InterceptionMode(str, Enum):
    """When codes are intercepted."""

    PRE = "Pre"
    POST = "Post"
    EXECUTED = "Executed"

    def __str__(self) -> str:
        return self.value


class SubscriptionMode(str, Enum):
    """Whether subscriptions receive full models or patches."""

    FULL = "Full"
    PATCH = "Patch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClientInitMessage:
    """Sent by the client in reply to the server's init message to select a connection mode."""

    mode: ConnectionMode
    version: int = field(default=PROTOCOL_VERSION, kw_only=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this message."""
        return {"Mode": self.mode.value, "Version": self.version}


@dataclass(frozen=True)
class InterceptInitMessage(ClientInitMessage):
    """Enters interception mode."""

    mode: ConnectionMode = field(default=ConnectionMode.INTERCEPT, init=False)
    interception_mode: InterceptionMode = InterceptionMode.PRE

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "InterceptionMode": self.interception_mode.value}


@dataclass(frozen=True)
class SubscribeInitMessage(ClientInitMessage):
    """Enters subscription mode, optionally filtered by path expressions."""

    mode: ConnectionMode = field(default=ConnectionMode.SUBSCRIBE, init=False)
    subscription_mode: SubscriptionMode = SubscriptionMode.FULL
    filter: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "SubscriptionMode": self.subscription_mode.value,
            "Filter": self.filter,
        }


@dataclass(frozen=True)
class ServerInitMessage:
    """Sent by the server once a connection has been established."""

    version: int = 0
    id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerInitMessage:
        """Build the message from JSON; key names are matched case-insensitively."""
        fields = {key.lower(): value for key, value in data.items()}
        return cls(version=int(fields.get("version", 0)), id=int(fields.get("id", 0)))

    def is_compatible(self) -> bool:
        """Return True if the server speaks at least this client's protocol version."""
        return self.version >= PROTOCOL_VERSION


_COMMAND_INIT_MESSAGE = ClientInitMessage(ConnectionMode.COMMAND)


def command_init_message() -> ClientInitMessage:
    """Return the init message that enters command mode."""
    return _COMMAND_INIT_MESSAGE