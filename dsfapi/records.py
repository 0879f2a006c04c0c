"""Records of the machine model: HTTP endpoints, user sessions and parsed file info."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from dsfapi.messages import _format_time, _parse_time


class HttpEndpointType(str, Enum):
    """Supported HTTP request types of custom endpoints."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    TRACE = "TRACE"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    WEB_SOCKET = "WebSocket"

    def __str__(self) -> str:
        return self.value


@dataclass
class HttpEndpoint:
    """A registered third-party HTTP endpoint."""

    endpoint_type: HttpEndpointType = HttpEndpointType.GET
    namespace: str = ""
    path: str = ""
    unix_socket: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HttpEndpoint:
        """Build an endpoint from its JSON representation."""
        return cls(
            endpoint_type=HttpEndpointType(data.get("endpointType", HttpEndpointType.GET)),
            namespace=data.get("namespace") or "",
            path=data.get("path") or "",
            unix_socket=data.get("unixSocket") or "",
        )


class AccessLevel(str, Enum):
    """What a user session is allowed to do."""

    READ_ONLY = "readOnly"
    READ_WRITE = "readWrite"

    def __str__(self) -> str:
        return self.value


class SessionType(str, Enum):
    """Kind of user session."""

    LOCAL = "local"
    HTTP = "http"
    TELNET = "telnet"

    def __str__(self) -> str:
        return self.value


@dataclass
class UserSession:
    """A user session known to the control server."""

    id: int = 0
    access_level: AccessLevel = AccessLevel.READ_ONLY
    session_type: SessionType = SessionType.LOCAL
    origin: str = ""
    origin_id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserSession:
        """Build a session from its JSON representation."""
        return cls(
            id=int(data.get("id", 0)),
            access_level=AccessLevel(data.get("accessLevel", AccessLevel.READ_ONLY)),
            session_type=SessionType(data.get("sessionType", SessionType.LOCAL)),
            origin=data.get("origin") or "",
            origin_id=int(data.get("originId", 0)),
        )


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass
class ParsedFileInfo:
    """Information extracted from a G-code file."""

    filament: list[float] = field(default_factory=list)
    file_name: str = ""
    first_layer_height: float = 0.0
    generated_by: str = ""
    height: float = 0.0
    last_modified: Optional[datetime] = None
    layer_height: float = 0.0
    num_layers: int = 0
    print_time: Optional[int] = None
    simulated_time: Optional[int] = None
    size: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedFileInfo:
        """Build file info from its JSON representation."""
        modified = data.get("lastModified")
        return cls(
            filament=[float(f) for f in data.get("filament") or []],
            file_name=data.get("fileName") or "",
            first_layer_height=float(data.get("firstLayerHeight", 0.0)),
            generated_by=data.get("generatedBy") or "",
            height=float(data.get("height", 0.0)),
            last_modified=None if modified is None else _parse_time(modified),
            layer_height=float(data.get("layerHeight", 0.0)),
            num_layers=int(data.get("numLayers", 0)),
            print_time=_optional_int(data.get("printTime")),
            simulated_time=_optional_int(data.get("simulatedTime")),
            size=int(data.get("size", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this file info."""
        return {
            "filament": list(self.filament),
            "fileName": self.file_name,
            "firstLayerHeight": self.first_layer_height,
            "generatedBy": self.generated_by,
            "height": self.height,
            "lastModified": None if self.last_modified is None else _format_time(self.last_modified),
            "layerHeight": self.layer_height,
            "numLayers": self.num_layers,
            "printTime": self.print_time,
            "simulatedTime": self.simulated_time,
            "size": self.size,
        }