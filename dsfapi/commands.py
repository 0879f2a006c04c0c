"""Simple commands that can be sent to the control server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dsfapi.command import Command
from dsfapi.messages import MessageType
from dsfapi.types import CodeChannel


@dataclass
class EvaluateExpression(Command):
    """Evaluate an arbitrary expression on a code channel in the firmware."""

    command: str = field(default="EvaluateExpression", init=False)
    channel: CodeChannel
    expression: str

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "Channel": self.channel.value,
            "Expression": self.expression,
        }


@dataclass
class Flush(Command):
    """Wait for all pending codes on a channel to finish."""

    command: str = field(default="Flush", init=False)
    channel: CodeChannel

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "Channel": self.channel.value}


@dataclass
class GetFileInfo(Command):
    """Analyse a G-code file and return its parsed file info."""

    command: str = field(default="GetFileInfo", init=False)
    file_name: str

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "FileName": self.file_name}


@dataclass
class Resolve(Command):
    """Resolve an intercepted code with the given message."""

    command: str = field(default="Resolve", init=False)
    type: MessageType
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "Type": int(self.type), "Content": self.content}


@dataclass
class ResolvePath(Command):
    """Resolve a firmware-style path to a real file system path."""

    command: str = field(default="ResolvePath", init=False)
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "Path": self.path}


@dataclass
class SetMachineModel(Command):
    """Set an atomic property of the machine model; lock the model first."""

    command: str = field(default="SetMachineModel", init=False)
    property_path: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "PropertyPath": self.property_path,
            "Value": self.value,
        }


@dataclass
class SimpleCode(Command):
    """Execute a G/M/T-code given as text and return its result as text."""

    command: str = field(default="SimpleCode", init=False)
    code: str
    channel: CodeChannel

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "Code": self.code, "Channel": self.channel.value}


@dataclass
class WriteMessage(Command):
    """Write an arbitrary message to the console, the object model or the log."""

    command: str = field(default="WriteMessage", init=False)
    type: MessageType
    content: str
    output_message: bool = False
    log_message: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "Type": int(self.type),
            "Content": self.content,
            "OutputMessage": self.output_message,
            "LogMessage": self.log_message,
        }