"""Parsed parameters of G/M/T-codes."""

from __future__ import annotations

import copy
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from dsfapi.types import DriverId

LETTER_FOR_UNPRECEDENTED_STRING = "@"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_int64(text: str) -> Optional[int]:
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    return number if _INT64_MIN <= number <= _INT64_MAX else None


def _parse_uint64(text: str) -> Optional[int]:
    if not _UINT_RE.fullmatch(text):
        return None
    number = int(text)
    return number if number <= _UINT64_MAX else None


def _parse_float(text: str) -> Optional[float]:
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if _DEC_FLOAT_RE.fullmatch(text):
        number = float(text)
        return number if math.isfinite(number) else None
    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError:
            return None
    return None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int64(value: Any) -> bool:
    return _is_int(value) and _INT64_MIN <= value <= _INT64_MAX


def _is_uint64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= _UINT64_MAX


def _is_uint64_only(value: Any) -> bool:
    """True for integers that only fit an unsigned 64-bit value."""
    return _is_int(value) and _INT64_MAX < value <= _UINT64_MAX


def _is_float_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, float) for v in value)


def _is_int64_list(value: Any) -> bool:
    return isinstance(value, list) and all(_is_int64(v) for v in value)


def _is_uint64_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and all(_is_uint64(v) for v in value)
        and not _is_int64_list(value)
    )


def _is_driver_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, DriverId) for v in value)


def _truncate(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"Cannot convert {value} to an integer")
    return int(value)


def _wrap_int64(value: int) -> int:
    value &= _UINT64_MAX
    return value - (1 << 64) if value > _INT64_MAX else value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    raw = "".join(str(d) for d in digit_tuple)
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    point = len(digits) + exponent
    magnitude = point - 1
    prefix = "-" if sign else ""
    if magnitude < -4 or magnitude >= 21:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "+" if magnitude >= 0 else "-"
        return f"{prefix}{mantissa}e{exp_sign}{abs(magnitude):02d}"
    if exponent >= 0:
        return prefix + digits + "0" * exponent
    if point > 0:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    return f"{prefix}0.{'0' * -point}{digits}"


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(v) for v in value) + "]"
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return False


@dataclass
class CodeParameter:
    """A parameter of a G/M/T-code with its text and its parsed value."""

    letter: str
    string_value: str = ""
    is_string: bool = False
    is_driver_id: bool = False
    is_expression: bool = False
    parsed_value: Any = None

    @classmethod
    def parse(
        cls, letter: str, value: str, is_string: bool = False, is_driver_id: bool = False
    ) -> CodeParameter:
        """Create a parameter and parse its text into a native value where possible."""
        parameter = cls(
            letter=letter,
            string_value=value,
            is_string=is_string,
            is_driver_id=is_driver_id,
        )
        parameter._parse()
        return parameter

    @classmethod
    def simple(cls, letter: str, value: Any) -> CodeParameter:
        """Create a parameter holding an already native value."""
        is_string = isinstance(value, str)
        text = value if is_string else _format_value(value)
        return cls(
            letter=letter,
            string_value=text,
            is_string=is_string,
            is_expression=is_string and text.startswith("{") and text.endswith("}"),
            parsed_value=value,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CodeParameter:
        """Build a parameter from its JSON representation and parse its value."""
        letter = data.get("letter", "")
        value = data.get("value", "")
        if not isinstance(letter, str) or not isinstance(value, str):
            raise TypeError("Parameter letter and value must be strings")
        return cls.parse(
            letter,
            value,
            _flag(data.get("isString", False)),
            _flag(data.get("isDriverId", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this parameter."""
        return {
            "letter": self.letter,
            "value": self.string_value,
            "isDriverId": self.is_driver_id,
            "isString": self.is_string,
        }

    def clone(self) -> CodeParameter:
        """Return a shallow copy of this parameter."""
        return copy.copy(self)

    def __str__(self) -> str:
        letter = "" if self.letter == LETTER_FOR_UNPRECEDENTED_STRING else self.letter
        if self.is_string and not self.is_expression:
            escaped = self.string_value.replace('"', '""')
            return f'{letter}"{escaped}"'
        return f"{letter}{self.string_value}"

    def _parse(self) -> None:
        if self.is_string:
            self.parsed_value = self.string_value
            return
        if self.is_driver_id:
            self.convert_driver_ids()
            return
        value = self.string_value.strip()
        if not value:
            self.parsed_value = 0
        elif value.startswith("{") and value.endswith("}"):
            self.is_expression = True
        elif ":" in value:
            self._parse_list(value)
        elif (number := _parse_int64(value)) is not None:
            self.parsed_value = number
        elif (number := _parse_uint64(value)) is not None:
            self.parsed_value = number
        elif (real := _parse_float(value)) is not None:
            self.parsed_value = real
        else:
            self.parsed_value = value

    def _parse_list(self, value: str) -> None:
        parts = value.split(":")
        parsers = (_parse_float,) if "." in value else (_parse_int64, _parse_uint64)
        for parser in parsers:
            items = [parser(part) for part in parts]
            if all(item is not None for item in items):
                self.parsed_value = items
                return
        self.parsed_value = value

    def convert_driver_ids(self) -> None:
        """Convert this parameter to a driver id or a list of driver ids."""
        if self.is_expression:
            return
        drivers = []
        for part in self.string_value.split(":"):
            try:
                drivers.append(DriverId.parse(part))
            except ValueError as err:
                raise ValueError(f"{err} from {self.letter} parameter") from err
        self.parsed_value = drivers[0] if len(drivers) == 1 else drivers
        self.is_driver_id = True

    def _conversion_error(self, target: str) -> ValueError:
        return ValueError(
            f"Cannot convert {self.letter} parameter to {target} "
            f"(value {self.string_value} of type {type(self.parsed_value).__name__})"
        )

    def as_float(self) -> float:
        """Return the value as a float."""
        value = self.parsed_value
        if isinstance(value, float):
            return value
        if _is_int64(value) or _is_uint64(value):
            return float(value)
        raise self._conversion_error("float")

    def as_int(self) -> int:
        """Return the value as a signed 64-bit integer."""
        if _is_int64(self.parsed_value):
            return self.parsed_value
        raise self._conversion_error("int")

    def as_uint(self) -> int:
        """Return the value as an unsigned 64-bit integer."""
        value = self.parsed_value
        if _is_uint64(value):
            return value
        if isinstance(value, DriverId):
            return value.as_uint64()
        raise self._conversion_error("uint")

    def as_driver_id(self) -> DriverId:
        """Return the value as a driver id."""
        value = self.parsed_value
        if isinstance(value, DriverId):
            return value
        if _is_uint64_only(value):
            return DriverId.from_uint64(value)
        raise ValueError(
            f"Cannot convert {self.letter} parameter to driver ID (value {self.string_value})"
        )

    def as_bool(self) -> bool:
        """Return the text of this parameter read as a boolean."""
        if self.string_value in _TRUE_WORDS:
            return True
        if self.string_value in _FALSE_WORDS:
            return False
        raise ValueError(f'Cannot parse "{self.string_value}" as bool')

    def as_string(self) -> str:
        """Return the text of this parameter."""
        return self.string_value

    def as_float_list(self) -> list[float]:
        """Return the value as a list of floats."""
        value = self.parsed_value
        if _is_float_list(value):
            return list(value)
        if isinstance(value, float):
            return [value]
        if _is_int64(value) or _is_uint64(value):
            return [float(value)]
        if _is_int64_list(value) or _is_uint64_list(value):
            return [float(v) for v in value]
        raise self._conversion_error("list of float")

    def as_int_list(self) -> list[int]:
        """Return the value as a list of signed 64-bit integers."""
        value = self.parsed_value
        if _is_int64_list(value):
            return list(value)
        if isinstance(value, float):
            return [_truncate(value)]
        if _is_int64(value):
            return [value]
        if _is_uint64_only(value):
            return [_wrap_int64(value)]
        if _is_float_list(value):
            return [_truncate(v) for v in value]
        if _is_uint64_list(value):
            return [_wrap_int64(v) for v in value]
        raise self._conversion_error("list of int")

    def as_uint_list(self) -> list[int]:
        """Return the value as a list of unsigned 64-bit integers."""
        value = self.parsed_value
        if _is_uint64_list(value):
            return list(value)
        if isinstance(value, float):
            return [_truncate(value) & _UINT64_MAX]
        if _is_uint64(value):
            return [value]
        if _is_float_list(value):
            return [_truncate(v) & _UINT64_MAX for v in value]
        if _is_int64_list(value) and all(v >= 0 for v in value):
            return list(value)
        if _is_driver_list(value):
            return [v.as_uint64() for v in value]
        if isinstance(value, DriverId):
            return [value.as_uint64()]
        raise self._conversion_error("list of uint")

    def as_driver_id_list(self) -> list[DriverId]:
        """Return the value as a list of driver ids."""
        value = self.parsed_value
        if _is_driver_list(value):
            return list(value)
        if isinstance(value, DriverId):
            return [value]
        if _is_uint64_only(value):
            return [DriverId.from_uint64(value)]
        if _is_uint64_list(value):
            return [DriverId.from_uint64(v) for v in value]
        raise self._conversion_error("list of driver ID")