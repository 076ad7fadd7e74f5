"""Shared result, status and request types for radio control."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union


class CommandResultCode(enum.Enum):
    """Outcome of a command sent to a radio adapter."""

    OK = "ok"
    INVALID_RANGE = "invalid_range"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"
    INTERNAL_ERROR = "internal"


class RadioStatus(enum.Enum):
    """Lifecycle status of a radio."""

    OFFLINE = "offline"
    DISCOVERING = "discovering"
    READY = "ready"
    BUSY = "busy"
    RECOVERING = "recovering"


class ErrorCode(enum.Enum):
    """Error codes reported by the control surface."""

    OK = "OK"
    BAD_REQUEST = "BAD_REQUEST"
    INVALID_RANGE = "INVALID_RANGE"
    BUSY = "BUSY"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"


@dataclass
class CommandResult:
    """Result of an adapter command, with an optional raw vendor payload."""

    code: CommandResultCode = CommandResultCode.OK
    message: str = ""
    vendor_payload: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code is CommandResultCode.OK


@dataclass
class RadioState:
    """Last known state of a radio."""

    status: RadioStatus = RadioStatus.OFFLINE
    channel_index: Optional[int] = None
    power_watts: Optional[float] = None


@dataclass
class ChannelRequest:
    """Request to change a radio's channel."""

    channel_index: Optional[int] = None
    frequency_mhz: Optional[float] = None
    correlation_id: str = ""

    def __post_init__(self) -> None:
        if self.channel_index is not None and not 0 <= self.channel_index <= 0xFFFFFFFF:
            raise ValueError(f"channel_index out of range: {self.channel_index}")


@dataclass
class PowerRequest:
    """Request to change a radio's transmit power."""

    watts: Optional[float] = None
    preset_name: Optional[str] = None
    correlation_id: str = ""


@dataclass
class RadioSummary:
    """Short description of a radio for listings."""

    id: str = ""
    model: str = ""
    state: str = ""
    capabilities: list[str] = field(default_factory=list)


def to_string(value: Union[CommandResultCode, RadioStatus, ErrorCode]) -> str:
    """Return the wire name of a result code, radio status or error code."""
    if isinstance(value, (CommandResultCode, RadioStatus, ErrorCode)):
        return value.value
    raise TypeError(f"no string form for {value!r}")