"""Registry of configured radios and the active selection."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from rcckit.adapter import RadioAdapter
from rcckit.config import Config
from rcckit.types import CommandResultCode, RadioState

AdapterFactory = Callable[[str, str], RadioAdapter]


@dataclass
class RadioDescriptor:
    """A configured radio with its adapter and last known state."""

    id: str
    adapter_type: str
    adapter: RadioAdapter
    state: RadioState = field(default_factory=RadioState)


class RadioManager:
    """Builds adapters from configuration and tracks the active radio.

    ``adapter_factories`` maps an adapter type name (as used in
    ``RadioEntry.adapter``) to a callable taking ``(id, endpoint)``.
    Entries with an unknown adapter type are skipped.
    """

    def __init__(
        self,
        config: Config,
        adapter_factories: Optional[Mapping[str, AdapterFactory]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._radios: dict[str, RadioDescriptor] = {}
        self._active: Optional[str] = None
        self._factories = dict(adapter_factories or {})
        self._load_from_config(config)

    def _load_from_config(self, config: Config) -> None:
        with self._lock:
            self._radios.clear()
            for entry in config.radios:
                factory = self._factories.get(entry.adapter)
                if factory is None or entry.id in self._radios:
                    continue
                adapter = factory(entry.id, entry.endpoint)
                self._radios[entry.id] = RadioDescriptor(
                    id=entry.id,
                    adapter_type=entry.adapter,
                    adapter=adapter,
                    state=adapter.state(),
                )

    def start(self) -> None:
        """Connect every adapter, recording state for those that succeed."""
        with self._lock:
            for descriptor in self._radios.values():
                result = descriptor.adapter.connect()
                if result.code is CommandResultCode.OK:
                    descriptor.state = descriptor.adapter.state()

    def stop(self) -> None:
        """Clear the active radio selection."""
        with self._lock:
            self._active = None

    def list_radios(self) -> list[RadioDescriptor]:
        """Snapshot copies of all radio descriptors."""
        with self._lock:
            return [
                dataclasses.replace(d, state=dataclasses.replace(d.state))
                for d in self._radios.values()
            ]

    def active_radio(self) -> Optional[str]:
        with self._lock:
            return self._active

    def set_active_radio(self, radio_id: str) -> bool:
        """Select a radio; returns False if it is not known."""
        with self._lock:
            if radio_id not in self._radios:
                return False
            self._active = radio_id
            return True

    def get_adapter(self, radio_id: str) -> Optional[RadioAdapter]:
        with self._lock:
            descriptor = self._radios.get(radio_id)
            return descriptor.adapter if descriptor else None

    def get_state(self, radio_id: str) -> RadioState:
        """Current adapter state, or a default state for unknown radios."""
        with self._lock:
            descriptor = self._radios.get(radio_id)
            if descriptor is None:
                return RadioState()
            return descriptor.adapter.state()