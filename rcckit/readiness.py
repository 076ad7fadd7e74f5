"""Ready snapshot and discovery endpoints announced at service start-up."""

from __future__ import annotations

from typing import Any

from rcckit.adapter import CapabilityInfo
from rcckit.radio_manager import RadioManager
from rcckit.telemetry import normalize_status, power_dbm


def build_ready_snapshot(radio_manager: RadioManager) -> dict[str, Any]:
    """Summarise every radio and the active selection for the ``ready`` event."""
    items = []
    for desc in radio_manager.list_radios():
        if desc.adapter is not None:
            state = desc.adapter.state()
            caps = desc.adapter.capabilities()
        else:
            state = desc.state
            caps = CapabilityInfo()

        frequency_mhz = 0.0
        frequencies = caps.supported_frequencies_mhz
        if state.channel_index is not None and frequencies:
            if 1 <= state.channel_index <= len(frequencies):
                frequency_mhz = frequencies[state.channel_index - 1]

        items.append(
            {
                "id": desc.id,
                "model": f"Silvus-{desc.id}",
                "status": normalize_status(state.status),
                "state": {
                    "powerDbm": power_dbm(state.power_watts),
                    "frequencyMhz": frequency_mhz if frequency_mhz > 0.0 else None,
                },
            }
        )

    return {"activeRadioId": radio_manager.active_radio(), "radios": items}


def discovery_endpoints(host: str, command_port: int, sse_port: int) -> dict[str, str]:
    """Endpoint URLs advertised by the service discovery responder."""
    return {
        "rest": f"http://{host}:{command_port}",
        "sse": f"http://{host}:{sse_port}/api/v1/telemetry",
        "health": f"http://{host}:{command_port}/api/v1/health",
    }