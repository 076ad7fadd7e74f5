"""Telemetry hub: builds event payloads and publishes them to subscribers."""

from __future__ import annotations

import math
import threading
import time
from collections import deque
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional, Union

from rcckit.config import Config
from rcckit.types import RadioStatus

EventSink = Callable[[str, dict], None]

READY_REEMIT_PERIOD = 12
SSE_PATH = "/api/v1/telemetry"


def effective_sse_secret(config: Config) -> str:
    """The secret used to validate SSE clients.

    When no secret is configured and unauthenticated access is not allowed,
    a random unguessable value is returned so that every client is rejected.
    """
    security = config.security
    if security.token_secret or security.allow_unauthenticated_dev_access:
        return security.token_secret
    return f"__rcc-disabled-auth-{time.monotonic_ns()}"


def normalize_status(status: Union[str, RadioStatus]) -> str:
    """Collapse a radio status into online, recovering or offline."""
    if isinstance(status, RadioStatus):
        status = status.value
    if status in ("ready", "discovering", "busy"):
        return "online"
    if status == "recovering":
        return "recovering"
    return "offline"


def power_dbm(watts: Optional[float]) -> Optional[float]:
    """Convert watts to whole dBm, or None for a non-positive or missing power."""
    if watts is None or watts <= 0.0:
        return None
    value = 10.0 * math.log10(watts * 1000.0)
    # Round half away from zero.
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _now_iso8601() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _now_iso8601_ms() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"


class TelemetryHub:
    """Publishes telemetry events and emits periodic heartbeats.

    Every event is kept in a bounded buffer (``events``) and, if a ``sink``
    is given, passed to it as ``sink(tag, payload)``.
    """

    def __init__(self, config: Config, sink: Optional[EventSink] = None) -> None:
        self.container_id = config.container.container_id
        self.deployment = config.container.deployment
        self.sse_secret = effective_sse_secret(config)
        self.sse_port = config.effective_sse_port()
        self.bind_address = config.network.bind_address
        self.heartbeat_interval = config.telemetry.heartbeat_interval
        self._sink = sink
        self._buffer: deque[tuple[str, dict]] = deque(
            maxlen=max(0, config.telemetry.event_buffer_size)
        )
        self._buffer_lock = threading.Lock()
        self._ready_lock = threading.Lock()
        self._last_ready: Optional[dict] = None
        self._ticks = 0
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def events(self) -> list[tuple[str, dict]]:
        """Buffered events, oldest first."""
        with self._buffer_lock:
            return list(self._buffer)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start emitting heartbeats every ``heartbeat_interval``."""
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._heartbeat_loop, name="telemetry-heartbeat", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop heartbeats; further ticks publish nothing."""
        self._stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _heartbeat_loop(self) -> None:
        interval = self.heartbeat_interval.total_seconds()
        while not self._stopped.wait(interval):
            self.heartbeat_tick()

    def heartbeat_tick(self) -> None:
        """Publish one heartbeat, re-emitting the last ready snapshot periodically."""
        if self._stopped.is_set():
            return
        self.publish_event("heartbeat", {"ts": _now_iso8601_ms()})
        self._ticks += 1
        if self._ticks % READY_REEMIT_PERIOD == 0:
            with self._ready_lock:
                snapshot = self._last_ready
            if snapshot is not None:
                self.publish_event("ready", snapshot)

    def publish_ready(self, snapshot: Any) -> None:
        payload = {"snapshot": snapshot}
        with self._ready_lock:
            self._last_ready = payload
        self.publish_event("ready", payload)

    def publish_radio_state(
        self,
        radio_id: str,
        status: Union[str, RadioStatus],
        channel_index: int,
        power_watts: float,
        frequency_mhz: float = 0.0,
    ) -> None:
        self.publish_event(
            "state",
            {
                "radioId": radio_id,
                "status": normalize_status(status),
                "powerDbm": power_dbm(power_watts),
                "ts": _now_iso8601(),
                "channelIndex": channel_index if channel_index > 0 else None,
                "frequencyMhz": frequency_mhz if frequency_mhz > 0.0 else None,
            },
        )

    def publish_channel_changed(
        self, radio_id: str, channel_index: int, frequency_mhz: float
    ) -> None:
        self.publish_event(
            "channelChanged",
            {
                "radioId": radio_id,
                "frequencyMhz": frequency_mhz,
                "channelIndex": channel_index,
                "ts": _now_iso8601(),
            },
        )

    def publish_power_changed(self, radio_id: str, watts: float) -> None:
        self.publish_event(
            "powerChanged",
            {"radioId": radio_id, "powerDbm": power_dbm(watts), "ts": _now_iso8601()},
        )

    def publish_fault(
        self, radio_id: str, code: str, message: str, retry_ms: int = 0
    ) -> None:
        self.publish_event(
            "fault",
            {
                "radioId": radio_id,
                "code": code,
                "message": message,
                "details": {"retryMs": retry_ms},
                "ts": _now_iso8601(),
            },
        )

    def publish_event(self, tag: str, payload: dict) -> None:
        with self._buffer_lock:
            self._buffer.append((tag, payload))
        if self._sink is not None:
            self._sink(tag, payload)