"""Commands for custom HTTP endpoints and user sessions, and the HTTP request and response records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dsfapi.command import Command
from dsfapi.records import AccessLevel, HttpEndpointType, SessionType

_UINT16_MAX = 0xFFFF


@dataclass
class HttpEndpointCommand(Command):
    """Creates or removes a custom HTTP endpoint."""

    endpoint_type: HttpEndpointType
    namespace: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "EndpointType": self.endpoint_type.value,
            "Namespace": self.namespace,
            "Path": self.path,
        }


def add_http_endpoint(
    endpoint_type: HttpEndpointType, namespace: str, path: str
) -> HttpEndpointCommand:
    """Return a command that registers an endpoint under /machine/{namespace}/{path}."""
    return HttpEndpointCommand("AddHttpEndpoint", endpoint_type, namespace, path)


def remove_http_endpoint(
    endpoint_type: HttpEndpointType, namespace: str, path: str
) -> HttpEndpointCommand:
    """Return a command that removes an existing endpoint."""
    return HttpEndpointCommand("RemoveHttpEndpoint", endpoint_type, namespace, path)


@dataclass
class ReceivedHttpRequest:
    """A request received by a custom HTTP endpoint, as forwarded by the web server."""

    session_id: int = 0
    queries: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content_type: str = ""
    body: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReceivedHttpRequest:
        """Build a request from JSON; key names are matched case-insensitively."""
        fields = {key.lower(): value for key, value in data.items()}
        return cls(
            session_id=int(fields.get("sessionid") or 0),
            queries=dict(fields.get("queries") or {}),
            headers=dict(fields.get("headers") or {}),
            content_type=fields.get("contenttype") or "",
            body=fields.get("body") or "",
        )


class HttpResponseType(str, Enum):
    """Kinds of content a custom endpoint can respond with."""

    STATUS_CODE = "statuscode"
    PLAIN_TEXT = "plaintext"
    JSON = "json"
    FILE = "file"

    def __str__(self) -> str:
        return self.value


@dataclass
class SendHttpResponse:
    """The response to a received HTTP request."""

    status_code: int
    response: str
    response_type: HttpResponseType

    def __post_init__(self) -> None:
        if not 0 <= self.status_code <= _UINT16_MAX:
            raise ValueError(f"Status code {self.status_code} is out of range")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this response."""
        return {
            "StatusCode": self.status_code,
            "Response": self.response,
            "ResponseType": self.response_type.value,
        }


@dataclass
class AddUserSession(Command):
    """Registers a new user session."""

    command: str = field(default="AddUserSession", init=False)
    access_level: AccessLevel
    session_type: SessionType
    origin: str
    origin_port: int

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "AccessLevel": self.access_level.value,
            "SessionType": self.session_type.value,
            "Origin": self.origin,
            "OriginPort": self.origin_port,
        }


@dataclass
class RemoveUserSession(Command):
    """Removes an existing user session."""

    command: str = field(default="RemoveUserSession", init=False)
    id: int

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "Id": self.id}