"""Parsed representation of G/M/T-codes and their results."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Any, Optional

from dsfapi.codeparameter import CodeParameter
from dsfapi.command import Command
from dsfapi.messages import Message
from dsfapi.types import DEFAULT_CHANNEL, CodeChannel


class CodeFlags(IntFlag):
    """Bit masks that classify G/M/T-codes."""

    NONE = 0
    ASYNCHRONOUS = 1 << 0
    IS_PRE_PROCESSED = 1 << 1
    IS_POST_PROCESSED = 1 << 2
    IS_FROM_MACRO = 1 << 3
    IS_NESTED_MACRO = 1 << 4
    IS_FROM_CONFIG = 1 << 5
    IS_FROM_CONFIG_OVERRIDE = 1 << 6
    ENFORCE_ABSOLUTE_POSITION = 1 << 7
    IS_PRIORITIZED = 1 << 8
    UNBUFFERED = 1 << 9
    IS_FROM_FIRMWARE = 1 << 10


class CodeType(str, Enum):
    """Generic type of a code, or a whole-line comment."""

    COMMENT = "Q"
    GCODE = "G"
    MCODE = "M"
    TCODE = "T"

    def __str__(self) -> str:
        return self.value


class KeywordType(IntEnum):
    """Type of a conditional G-code keyword."""

    NONE = 0
    IF = 1
    ELSE_IF = 2
    ELSE = 3
    WHILE = 4
    BREAK = 5
    RETURN = 6
    ABORT = 7
    VAR = 8
    SET = 9
    ECHO = 10
    CONTINUE = 11

    def __str__(self) -> str:
        return _KEYWORD_NAMES.get(self, "")


_KEYWORD_NAMES = {
    KeywordType.ABORT: "abort",
    KeywordType.BREAK: "break",
    KeywordType.ECHO: "echo",
    KeywordType.ELSE: "else",
    KeywordType.ELSE_IF: "elif",
    KeywordType.IF: "if",
    KeywordType.RETURN: "return",
    KeywordType.SET: "set",
    KeywordType.VAR: "var",
    KeywordType.WHILE: "while",
}


class CodeResult(list[Message]):
    """The messages a code produced while it was executed."""

    def __str__(self) -> str:
        return "".join(f"{message}\n" for message in self if message.content)


@dataclass
class Code(Command):
    """A parsed G/M/T-code or comment."""

    command: str = "Code"
    source_connection: int = 0
    result: Optional[CodeResult] = None
    type: CodeType = CodeType.COMMENT
    channel: CodeChannel = DEFAULT_CHANNEL
    line_number: Optional[int] = None
    indent: int = 0
    keyword: KeywordType = KeywordType.NONE
    keyword_argument: str = ""
    major_number: Optional[int] = None
    minor_number: Optional[int] = None
    flags: CodeFlags = CodeFlags.NONE
    comment: str = ""
    file_position: Optional[int] = None
    length: Optional[int] = None
    parameters: list[CodeParameter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Code:
        """Build a code from JSON; key names are matched case-insensitively."""
        fields = {key.lower(): value for key, value in data.items()}

        def get(name: str, default: Any = None) -> Any:
            value = fields.get(name.lower())
            return default if value is None else value

        raw_result = get("Result")
        return cls(
            command=get("Command", "Code"),
            source_connection=int(get("SourceConnection", 0)),
            result=None
            if raw_result is None
            else CodeResult(Message.from_dict(m) for m in raw_result),
            type=CodeType(get("Type", CodeType.COMMENT)),
            channel=CodeChannel(get("Channel", DEFAULT_CHANNEL)),
            line_number=get("LineNumber"),
            indent=int(get("Indent", 0)),
            keyword=KeywordType(get("Keyword", KeywordType.NONE)),
            keyword_argument=get("KeywordArgument", ""),
            major_number=get("MajorNumber"),
            minor_number=get("MinorNumber"),
            flags=CodeFlags(get("Flags", 0)),
            comment=get("Comment", ""),
            file_position=get("FilePosition"),
            length=get("Length"),
            parameters=[CodeParameter.from_dict(p) for p in get("Parameters", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this code."""
        return {
            **super().to_dict(),
            "SourceConnection": self.source_connection,
            "Result": None
            if self.result is None
            else [message.to_dict() for message in self.result],
            "Type": self.type.value,
            "Channel": self.channel.value,
            "LineNumber": self.line_number,
            "Indent": self.indent,
            "Keyword": int(self.keyword),
            "KeywordArgument": self.keyword_argument,
            "MajorNumber": self.major_number,
            "MinorNumber": self.minor_number,
            "Flags": int(self.flags),
            "Comment": self.comment,
            "FilePosition": self.file_position,
            "Length": self.length,
            "Parameters": [p.to_dict() for p in self.parameters],
        }

    def clone(self) -> Code:
        """Return a copy of this code with copies of its parameters."""
        return dataclasses.replace(self, parameters=[p.clone() for p in self.parameters])

    def is_major_number(self, n: int) -> bool:
        """Return True if the major number is present and equal to n."""
        return self.major_number is not None and self.major_number == n

    def has_flag(self, flag: CodeFlags) -> bool:
        """Return True if any bit of flag is set on this code."""
        return (self.flags & flag) != 0

    def has_parameter(self, letter: str) -> bool:
        """Return True if a parameter with this letter exists (case-insensitive)."""
        return self.parameter(letter) is not None

    def parameter(self, letter: str) -> Optional[CodeParameter]:
        """Return the first parameter with this letter (case-insensitive), or None."""
        wanted = letter.upper()
        return next((p for p in self.parameters if p.letter.upper() == wanted), None)

    def parameter_or_default(self, letter: str, value: Any) -> CodeParameter:
        """Return the parameter with this letter, or a new one holding value."""
        found = self.parameter(letter)
        return found if found is not None else CodeParameter.simple(letter, value)

    def replace_parameter(self, letter: str, parameter: CodeParameter) -> bool:
        """Replace the first parameter with exactly this letter; return True if one was replaced."""
        for index, existing in enumerate(self.parameters):
            if existing.letter == letter:
                self.parameters[index] = parameter
                return True
        return False

    def remove_parameter(self, letter: str) -> Optional[CodeParameter]:
        """Remove all parameters with exactly this letter and return the one found, or None."""
        found = self.parameter(letter)
        if found is not None:
            self.parameters = [p for p in self.parameters if p.letter != letter]
        return found

    def unprecedented_string(self, quote: bool = False) -> str:
        """Rebuild a string from the parameter list, quoting string values if asked."""
        text = ""
        for p in self.parameters:
            if text:
                text += " "
            mark = '"' if quote and p.is_string else ""
            text += f"{p.letter}{mark}{p.as_string()}{mark}"
        return text

    def short_string(self) -> str:
        """Return only the command portion of the code, e.g. G28."""
        if self.keyword is not KeywordType.NONE:
            return str(self.keyword)
        if self.type is CodeType.COMMENT:
            return "(comment)"
        prefix = "G53 " if self.has_flag(CodeFlags.ENFORCE_ABSOLUTE_POSITION) else ""
        if self.major_number is not None:
            if self.minor_number is not None:
                return f"{prefix}{self.type.value}{self.major_number}.{self.minor_number}"
            return f"{prefix}{self.type.value}{self.major_number}"
        return f"{prefix}{self.type.value}"

    def __str__(self) -> str:
        if self.keyword is not KeywordType.NONE:
            if self.keyword_argument:
                return f"{self.keyword} {self.keyword_argument}"
            return str(self.keyword)
        if self.type is CodeType.COMMENT:
            return ";" + self.comment
        text = self.short_string()
        for p in self.parameters:
            text += f" {p}"
        if self.comment:
            if text:
                text += " "
            text += ";" + self.comment
        if self.result:
            text += " => " + str(self.result).rstrip(" ")
        return text