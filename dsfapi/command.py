"""The base of every command sent to the control server, and its generic response."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Command:
    """A command identified by its name."""

    command: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of this command."""
        return {"Command": self.command}


@dataclass
class Response:
    """A response from the control server to a command."""

    success: bool = False
    result: Any = None
    error_type: str = ""
    error_message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Response:
        """Build a response from JSON; key names are matched case-insensitively."""
        fields = {key.lower(): value for key, value in data.items()}
        return cls(
            success=bool(fields.get("success") or False),
            result=fields.get("result"),
            error_type=fields.get("errortype") or "",
            error_message=fields.get("errormessage") or "",
        )


_ACKNOWLEDGE = Command("Acknowledge")
_CANCEL = Command("Cancel")
_GET_MACHINE_MODEL = Command("GetMachineModel")
_IGNORE = Command("Ignore")
_SYNC_MACHINE_MODEL = Command("SyncMachineModel")
_LOCK_MACHINE_MODEL = Command("LockMachineModel")
_UNLOCK_MACHINE_MODEL = Command("UnlockMachineModel")


def acknowledge() -> Command:
    """Return the Acknowledge command."""
    return _ACKNOWLEDGE


def cancel() -> Command:
    """Return the Cancel command."""
    return _CANCEL


def get_machine_model() -> Command:
    """Return the GetMachineModel command."""
    return _GET_MACHINE_MODEL


def ignore() -> Command:
    """Return the Ignore command."""
    return _IGNORE


def sync_machine_model() -> Command:
    """Return the SyncMachineModel command."""
    return _SYNC_MACHINE_MODEL


def lock_machine_model() -> Command:
    """Return the LockMachineModel command."""
    return _LOCK_MACHINE_MODEL


def unlock_machine_model() -> Command:
    """Return the UnlockMachineModel command."""
    return _UNLOCK_MACHINE_MODEL