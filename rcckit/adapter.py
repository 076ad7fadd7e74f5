"""Radio adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from rcckit.types import CommandResult, RadioState


@dataclass
class CapabilityInfo:
    """What a radio can do: its channel frequencies and power range."""

    supported_frequencies_mhz: list[float] = field(default_factory=list)
    power_range_watts: tuple[float, float] = (0.0, 0.0)


class RadioAdapter(ABC):
    """Interface every vendor radio adapter implements."""

    @abstractmethod
    def id(self) -> str:
        """The radio's identifier."""

    @abstractmethod
    def capabilities(self) -> CapabilityInfo:
        """The radio's capabilities."""

    @abstractmethod
    def connect(self) -> CommandResult:
        """Connect to the radio."""

    @abstractmethod
    def set_power(self, watts: float) -> CommandResult:
        """Set transmit power in watts."""

    @abstractmethod
    def set_channel(self, channel_index: int, frequency_mhz: float) -> CommandResult:
        """Tune to a channel."""

    @abstractmethod
    def refresh_state(self) -> CommandResult:
        """Re-read the radio's state."""

    @abstractmethod
    def state(self) -> RadioState:
        """The last known state."""