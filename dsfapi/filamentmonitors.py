"""Filament monitors of the sensor subsystem and typed views of them."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union


class InvalidIndexError(IndexError):
    """Raised when a filament monitor is requested at an index that does not exist."""

    def __init__(self) -> None:
        super().__init__("Invalid index")


class FilamentMonitorType(str, Enum):
    """Supported filament monitor types."""

    SIMPLE = "simple"
    LASER = "laser"
    PULSED = "pulsed"
    ROTATING_MAGNET = "rotatingMagnet"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


MonitorType = Union[FilamentMonitorType, str]


def _to_type(value: str) -> MonitorType:
    try:
        return FilamentMonitorType(value)
    except ValueError:
        return value


def _type_value(value: MonitorType) -> str:
    return value.value if isinstance(value, FilamentMonitorType) else value


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _require_map(data: Any, key: str) -> dict:
    if not isinstance(data, dict):
        where = f"'{key}'" if key else "input"
        raise TypeError(f"{where} expected a map, got {type(data).__name__}")
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


def _decode_bool(current: Any, value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' expected type 'bool', got {type(value).__name__}")
    return value


def _decode_float(current: Any, value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' expected type 'float', got {type(value).__name__}")
    return float(value)


def _decode_type(current: Any, value: Any, key: str) -> MonitorType:
    if not isinstance(value, str):
        raise TypeError(f"'{key}' expected type 'string', got {type(value).__name__}")
    return _to_type(value)


def _decode_nested(current: Any, value: Any, key: str) -> Any:
    _decode_into(current, value, key)
    return current


def _decode_into(target: Any, data: Any, key: str) -> None:
    """Fill the fields of a dataclass from a mapping, leaving absent keys untouched."""
    mapping = _require_map(data, key)
    for f in fields(target):
        json_key = _camel(f.name)
        value = _lookup(mapping, json_key)
        if value is None:
            continue
        decode: Callable[[Any, Any, str], Any] = f.metadata["decode"]
        item_key = f"{key}.{json_key}" if key else json_key
        setattr(target, f.name, decode(getattr(target, f.name), value, item_key))


def _to_json(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if is_dataclass(value):
            value = _to_json(value)
        elif isinstance(value, Enum):
            value = value.value
        result[_camel(f.name)] = value
    return result


def _float_field() -> Any:
    return field(default=0.0, metadata={"decode": _decode_float})


def _nested_field(factory: Callable[[], Any]) -> Any:
    return field(default_factory=factory, metadata={"decode": _decode_nested})


class FilamentMonitor(dict):
    """A filament monitor as received in the machine model: a plain mapping."""

    def get_type(self) -> MonitorType:
        """Return the monitor type; types outside FilamentMonitorType are returned as strings."""
        value = self["type"]
        if not isinstance(value, str):
            raise TypeError(f"Filament monitor type must be a string, got {type(value).__name__}")
        return _to_type(value)


@dataclass
class BaseFilamentMonitor:
    """Common properties of every filament monitor."""

    enabled: bool = field(default=False, metadata={"decode": _decode_bool})
    type: MonitorType = field(default="", metadata={"decode": _decode_type})

    def as_filament_monitor(self) -> FilamentMonitor:
        """Return this instance as a FilamentMonitor mapping."""
        return FilamentMonitor(_to_json(self))


@dataclass
class SimpleFilamentMonitor(BaseFilamentMonitor):
    """A simple filament monitor reporting filament presence."""

    filament_present: Optional[bool] = field(default=None, metadata={"decode": _decode_bool})


@dataclass
class _FilamentMonitorProperties:
    percent_max: float = _float_field()
    percent_min: float = _float_field()


@dataclass
class FilamentMonitorCalibrated(_FilamentMonitorProperties):
    """Calibrated properties shared by the measuring filament monitors."""

    total_distance: float = _float_field()


@dataclass
class FilamentMonitorConfigured(_FilamentMonitorProperties):
    """Configured properties shared by the measuring filament monitors."""

    sample_distance: float = _float_field()


LaserFilamentMonitorConfigured = FilamentMonitorConfigured


@dataclass
class LaserFilamentMonitorCalibrated(FilamentMonitorCalibrated):
    """Calibrated properties of a laser filament monitor."""

    sensitivity: float = _float_field()


@dataclass
class LaserFilamentMonitor(SimpleFilamentMonitor):
    """A laser filament monitor."""

    calibrated: LaserFilamentMonitorCalibrated = _nested_field(LaserFilamentMonitorCalibrated)
    configured: FilamentMonitorConfigured = _nested_field(FilamentMonitorConfigured)


@dataclass
class PulsedFilamentMonitorCalibrated(FilamentMonitorCalibrated):
    """Calibrated properties of a pulsed filament monitor."""

    mm_per_pulse: float = _float_field()


@dataclass
class PulsedFilamentMonitorConfigured(FilamentMonitorConfigured):
    """Configured properties of a pulsed filament monitor."""

    mm_per_pulse: float = _float_field()


@dataclass
class PulsedFilamentMonitor(BaseFilamentMonitor):
    """A pulsed filament monitor."""

    calibrated: PulsedFilamentMonitorCalibrated = _nested_field(PulsedFilamentMonitorCalibrated)
    configured: PulsedFilamentMonitorConfigured = _nested_field(PulsedFilamentMonitorConfigured)


@dataclass
class RotatingMagnetFilamentMonitorCalibrated(FilamentMonitorCalibrated):
    """Calibrated properties of a rotating magnet filament monitor."""

    mm_per_rev: float = _float_field()


@dataclass
class RotatingMagnetFilamentMonitorConfigured(FilamentMonitorConfigured):
    """Configured properties of a rotating magnet filament monitor."""

    mm_per_rev: float = _float_field()


@dataclass
class RotatingMagnetFilamentMonitor(SimpleFilamentMonitor):
    """A rotating magnet filament monitor."""

    calibrated: RotatingMagnetFilamentMonitorCalibrated = _nested_field(
        RotatingMagnetFilamentMonitorCalibrated
    )
    configured: RotatingMagnetFilamentMonitorConfigured = _nested_field(
        RotatingMagnetFilamentMonitorConfigured
    )


class FilamentMonitors(list):
    """The list of configured filament monitors."""

    def _get(self, index: int, expected: Optional[FilamentMonitorType], cls: type) -> Any:
        if not 0 <= index < len(self):
            raise InvalidIndexError()
        monitor = FilamentMonitor(self[index])
        if expected is not None:
            name = monitor.get_type()
            if name != expected:
                raise ValueError(f"Not {cls.__name__}: {_type_value(name)}")
        result = cls()
        _decode_into(result, monitor, "")
        return result

    def get_as_base(self, index: int) -> BaseFilamentMonitor:
        """Return the monitor at index as BaseFilamentMonitor, whatever its type."""
        return self._get(index, None, BaseFilamentMonitor)

    def get_as_simple(self, index: int) -> SimpleFilamentMonitor:
        """Return the monitor at index as SimpleFilamentMonitor."""
        return self._get(index, FilamentMonitorType.SIMPLE, SimpleFilamentMonitor)

    def get_as_laser(self, index: int) -> LaserFilamentMonitor:
        """Return the monitor at index as LaserFilamentMonitor."""
        return self._get(index, FilamentMonitorType.LASER, LaserFilamentMonitor)

    def get_as_pulsed(self, index: int) -> PulsedFilamentMonitor:
        """Return the monitor at index as PulsedFilamentMonitor."""
        return self._get(index, FilamentMonitorType.PULSED, PulsedFilamentMonitor)

    def get_as_rotating_magnet(self, index: int) -> RotatingMagnetFilamentMonitor:
        """Return the monitor at index as RotatingMagnetFilamentMonitor."""
        return self._get(
            index, FilamentMonitorType.ROTATING_MAGNET, RotatingMagnetFilamentMonitor
        )