"""Kinematics of the move subsystem and typed views of them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

DEFAULT_ANCHOR_DZ = 3000.0
DEFAULT_HANGPRINTER_PRINT_RADIUS = 1500.0


class KinematicsName(str, Enum):
    """Supported kinematics types."""

    CARTESIAN = "cartesian"
    CORE_XY = "coreXY"
    CORE_XYU = "coreXYU"
    CORE_XYUV = "coreXYUV"
    CORE_XZ = "coreXZ"
    MARK_FORGED = "markForged"
    FIVE_BAR_SCARA = "FiveBarScara"
    HANGPRINTER = "Hangprinter"
    DELTA = "delta"
    POLAR = "Polar"
    ROTARY_DELTA = "Rotary delta"
    SCARA = "Scara"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


Name = Union[KinematicsName, str]

_CORE_NAMES = frozenset(
    {
        KinematicsName.CARTESIAN,
        KinematicsName.CORE_XY,
        KinematicsName.CORE_XYU,
        KinematicsName.CORE_XYUV,
        KinematicsName.CORE_XZ,
        KinematicsName.MARK_FORGED,
    }
)
_DELTA_NAMES = frozenset({KinematicsName.DELTA, KinematicsName.ROTARY_DELTA})


def _to_name(value: str) -> Name:
    try:
        return KinematicsName(value)
    except ValueError:
        return value


def _name_value(name: Name) -> str:
    return name.value if isinstance(name, KinematicsName) else name


def _identity() -> list[list[float]]:
    return [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def _default_anchor_a() -> list[float]:
    return [0.0, -2000.0, -100.0]


def _default_anchor_b() -> list[float]:
    return [2000.0, 1000.0, -100.0]


def _default_anchor_c() -> list[float]:
    return [-2000.0, 1000.0, -100.0]


def _require_map(data: Any, key: str) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"'{key}' expected a map, got {type(data).__name__}")
    return data


def _lookup(data: dict, key: str) -> Any:
    """Find a key exactly, else case-insensitively; None when absent."""
    if key in data:
        return data[key]
    wanted = key.lower()
    return next(
        (v for k, v in data.items() if isinstance(k, str) and k.lower() == wanted),
        None,
    )


def _decode_float(current: Optional[float], value: Any, key: str) -> float:
    if value is None:
        return 0.0 if current is None else current
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' expected a number, got {type(value).__name__}")
    return float(value)


def _decode_name(current: Name, value: Any, key: str) -> Name:
    if value is None:
        return current
    if not isinstance(value, str):
        raise TypeError(f"'{key}' expected a string, got {type(value).__name__}")
    return _to_name(value)


def _overlay(
    current: Optional[list], value: Any, key: str, convert: Callable[[Any, Any, str], Any]
) -> list:
    """Decode a list element by element on top of the existing list, keeping surplus items."""
    if value is None:
        return [] if current is None else current
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"'{key}' expected a list, got {type(value).__name__}")
    result = list(current or [])
    for index, item in enumerate(value):
        item_key = f"{key}[{index}]"
        if index < len(result):
            result[index] = convert(result[index], item, item_key)
        else:
            result.append(convert(None, item, item_key))
    return result


def _decode_float_list(current: Optional[list], value: Any, key: str) -> list[float]:
    return _overlay(current, value, key, _decode_float)


def _decode_matrix(current: Optional[list], value: Any, key: str) -> list[list[float]]:
    return _overlay(current, value, key, _decode_float_list)


class Kinematics(dict):
    """Kinematics as received in the machine model: a plain mapping."""

    def get_name(self) -> Name:
        """Return the kinematics name; names outside KinematicsName are returned as strings."""
        value = self["name"]
        if not isinstance(value, str):
            raise TypeError(f"Kinematics name must be a string, got {type(value).__name__}")
        return _to_name(value)

    def as_base_kinematics(self) -> BaseKinematics:
        """Return this mapping as BaseKinematics."""
        base = BaseKinematics()
        base._decode(self)
        return base

    def as_core_kinematics(self) -> CoreKinematics:
        """Return this mapping as CoreKinematics."""
        name = self.get_name()
        if name not in _CORE_NAMES:
            raise ValueError(f"Not core kinematics: {_name_value(name)}")
        core = CoreKinematics()
        core._decode(self)
        return core

    def as_delta_kinematics(self) -> DeltaKinematics:
        """Return this mapping as DeltaKinematics."""
        name = self.get_name()
        if name not in _DELTA_NAMES:
            raise ValueError(f"Not delta kinematics: {_name_value(name)}")
        delta = DeltaKinematics()
        delta._decode(self)
        return delta

    def as_hangprinter_kinematics(self) -> HangprinterKinematics:
        """Return this mapping as HangprinterKinematics."""
        name = self.get_name()
        if name != KinematicsName.HANGPRINTER:
            raise ValueError(f"Not Hangprinter kinematics: {_name_value(name)}")
        hang = HangprinterKinematics()
        hang._decode(self)
        return hang


@dataclass
class BaseKinematics:
    """The configured kinematics, by name only."""

    name: Name = ""

    def _decode(self, data: dict) -> None:
        self.name = _decode_name(self.name, _lookup(data, "name"), "name")

    def as_kinematics(self) -> Kinematics:
        """Return this instance as a Kinematics mapping."""
        return Kinematics(name=_name_value(self.name))


@dataclass
class CoreKinematics(BaseKinematics):
    """Core kinematics with forward and inverse movement matrices."""

    forward_matrix: list[list[float]] = field(default_factory=_identity)
    inverse_matrix: list[list[float]] = field(default_factory=_identity)

    def _decode(self, data: dict) -> None:
        super()._decode(data)
        self.forward_matrix = _decode_matrix(
            self.forward_matrix, _lookup(data, "forwardMatrix"), "forwardMatrix"
        )
        self.inverse_matrix = _decode_matrix(
            self.inverse_matrix, _lookup(data, "inverseMatrix"), "inverseMatrix"
        )

    def as_kinematics(self) -> Kinematics:
        return Kinematics(
            name=_name_value(self.name),
            forwardMatrix=[list(row) for row in self.forward_matrix],
            inverseMatrix=[list(row) for row in self.inverse_matrix],
        )


@dataclass
class DeltaTower:
    """Properties of one delta tower."""

    angle_correction: float = 0.0
    diagonal: float = 0.0
    endstop_adjustment: float = 0.0
    x_pos: float = 0.0
    y_pos: float = 0.0

    _KEYS = (
        ("angle_correction", "angleCorrection"),
        ("diagonal", "diagonal"),
        ("endstop_adjustment", "endstopAdjustment"),
        ("x_pos", "xPos"),
        ("y_pos", "yPos"),
    )

    @classmethod
    def _decode(cls, current: Optional[DeltaTower], value: Any, key: str) -> DeltaTower:
        tower = cls() if current is None else current
        if value is None:
            return tower
        data = _require_map(value, key)
        for attr, json_key in cls._KEYS:
            setattr(
                tower,
                attr,
                _decode_float(getattr(tower, attr), _lookup(data, json_key), json_key),
            )
        return tower

    def _to_dict(self) -> dict[str, float]:
        return {json_key: getattr(self, attr) for attr, json_key in self._KEYS}


@dataclass
class DeltaKinematics(BaseKinematics):
    """Delta kinematics."""

    delta_radius: float = 0.0
    homed_height: float = 0.0
    print_radius: float = 0.0
    towers: list[DeltaTower] = field(default_factory=list)
    x_tilt: float = 0.0
    y_tilt: float = 0.0

    _FLOAT_KEYS = (
        ("delta_radius", "deltaRadius"),
        ("homed_height", "homedHeight"),
        ("print_radius", "printRadius"),
        ("x_tilt", "xTilt"),
        ("y_tilt", "yTilt"),
    )

    def _decode(self, data: dict) -> None:
        super()._decode(data)
        for attr, json_key in self._FLOAT_KEYS:
            setattr(
                self,
                attr,
                _decode_float(getattr(self, attr), _lookup(data, json_key), json_key),
            )
        self.towers = _overlay(self.towers, _lookup(data, "towers"), "towers", DeltaTower._decode)

    def as_kinematics(self) -> Kinematics:
        return Kinematics(
            name=_name_value(self.name),
            deltaRadius=self.delta_radius,
            homedHeight=self.homed_height,
            printRadius=self.print_radius,
            towers=[tower._to_dict() for tower in self.towers],
            xTilt=self.x_tilt,
            yTilt=self.y_tilt,
        )


@dataclass
class HangprinterKinematics(BaseKinematics):
    """Hangprinter kinematics."""

    anchor_a: list[float] = field(default_factory=_default_anchor_a)
    anchor_b: list[float] = field(default_factory=_default_anchor_b)
    anchor_c: list[float] = field(default_factory=_default_anchor_c)
    anchor_dz: float = DEFAULT_ANCHOR_DZ
    print_radius: float = DEFAULT_HANGPRINTER_PRINT_RADIUS

    def _decode(self, data: dict) -> None:
        super()._decode(data)
        self.anchor_a = _decode_float_list(self.anchor_a, _lookup(data, "anchorA"), "anchorA")
        self.anchor_b = _decode_float_list(self.anchor_b, _lookup(data, "anchorB"), "anchorB")
        self.anchor_c = _decode_float_list(self.anchor_c, _lookup(data, "anchorC"), "anchorC")
        self.anchor_dz = _decode_float(self.anchor_dz, _lookup(data, "anchorDz"), "anchorDz")
        self.print_radius = _decode_float(
            self.print_radius, _lookup(data, "printRadius"), "printRadius"
        )

    def as_kinematics(self) -> Kinematics:
        return Kinematics(
            name=_name_value(self.name),
            anchorA=list(self.anchor_a),
            anchorB=list(self.anchor_b),
            anchorC=list(self.anchor_c),
            anchorDz=self.anchor_dz,
            printRadius=self.print_radius,
        )