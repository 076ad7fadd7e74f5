import math
import re
import threading
from datetime import timedelta

import pytest

from rcckit.config import Config
from rcckit.telemetry import (
    SSE_PATH,
    TelemetryHub,
    effective_sse_secret,
    normalize_status,
    power_dbm,
)
from rcckit.types import RadioStatus


def make_hub(**telemetry):
    cfg = Config()
    for key, value in telemetry.items():
        setattr(cfg.telemetry, key, value)
    received = []
    hub = TelemetryHub(cfg, lambda tag, payload: received.append((tag, payload)))
    return hub, received


@pytest.mark.parametrize(
    "status,expected",
    [
        ("ready", "online"),
        ("discovering", "online"),
        ("busy", "online"),
        ("recovering", "recovering"),
        ("offline", "offline"),
        ("anything", "offline"),
        (RadioStatus.READY, "online"),
        (RadioStatus.RECOVERING, "recovering"),
    ],
)
def test_normalize_status(status, expected):
    assert normalize_status(status) == expected


@pytest.mark.parametrize("watts", [0.0, -1.0, None])
def test_power_dbm_non_positive_is_none(watts):
    assert power_dbm(watts) is None


def test_power_dbm_one_watt():
    assert power_dbm(1.0) == 30.0


@pytest.mark.parametrize("exponent", [-2, -1, 0, 1, 2])
def test_power_dbm_round_trips_powers_of_ten(exponent):
    watts = 10.0**exponent
    dbm = power_dbm(watts)
    assert dbm == float(int(dbm))
    assert math.isclose(10 ** (dbm / 10) / 1000, watts)


def test_sse_secret_configured():
    cfg = Config()
    cfg.security.token_secret = "secret"
    assert effective_sse_secret(cfg) == "secret"


def test_sse_secret_dev_access_empty():
    cfg = Config()
    cfg.security.allow_unauthenticated_dev_access = True
    assert effective_sse_secret(cfg) == ""


def test_sse_secret_disabled_when_missing():
    cfg = Config()
    secret = effective_sse_secret(cfg)
    assert secret.startswith("__rcc-disabled-auth-")
    assert len(secret) > len("__rcc-disabled-auth-")


def test_hub_uses_effective_sse_port():
    cfg = Config()
    hub = TelemetryHub(cfg)
    assert hub.sse_port == cfg.network.command_port + 1
    assert SSE_PATH == "/api/v1/telemetry"


def test_publish_ready_wraps_snapshot():
    hub, received = make_hub()
    hub.publish_ready({"radios": []})
    assert received == [("ready", {"snapshot": {"radios": []}})]
    assert hub.events == received


def test_publish_radio_state_fields():
    hub, received = make_hub()
    hub.publish_radio_state("r1", "busy", 3, 1.0, 2220.0)
    tag, payload = received[0]
    assert tag == "state"
    assert payload["radioId"] == "r1"
    assert payload["status"] == "online"
    assert payload["powerDbm"] == power_dbm(1.0)
    assert payload["channelIndex"] == 3
    assert payload["frequencyMhz"] == 2220.0
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ", payload["ts"])


def test_publish_radio_state_nulls():
    hub, received = make_hub()
    hub.publish_radio_state("r1", "offline", 0, 0.0)
    payload = received[0][1]
    assert payload["channelIndex"] is None
    assert payload["frequencyMhz"] is None
    assert payload["powerDbm"] is None


def test_publish_channel_and_power_changed():
    hub, received = make_hub()
    hub.publish_channel_changed("r2", 5, 4700.0)
    hub.publish_power_changed("r2", 0.0)
    assert received[0][0] == "channelChanged"
    assert received[0][1]["channelIndex"] == 5
    assert received[0][1]["frequencyMhz"] == 4700.0
    assert received[1][0] == "powerChanged"
    assert received[1][1]["powerDbm"] is None


def test_publish_fault_details():
    hub, received = make_hub()
    hub.publish_fault("r3", "UNAVAILABLE", "soft boot")
    hub.publish_fault("r3", "BUSY", "wait", 250)
    assert received[0][1]["details"] == {"retryMs": 0}
    assert received[1][1]["details"] == {"retryMs": 250}
    assert received[1][1]["code"] == "BUSY"
    assert received[1][1]["message"] == "wait"


def test_event_buffer_is_bounded():
    hub, _ = make_hub(event_buffer_size=2)
    for n in range(5):
        hub.publish_event("custom", {"n": n})
    assert [p["n"] for _, p in hub.events] == [3, 4]


def test_heartbeat_reemits_ready_every_twelve_ticks():
    hub, received = make_hub()
    hub.publish_ready({"activeRadioId": None})
    received.clear()
    for _ in range(11):
        hub.heartbeat_tick()
    assert [t for t, _ in received] == ["heartbeat"] * 11
    hub.heartbeat_tick()
    assert received[-1] == ("ready", {"snapshot": {"activeRadioId": None}})
    assert re.fullmatch(
        r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", received[0][1]["ts"]
    )


def test_heartbeat_without_ready_emits_only_heartbeats():
    hub, received = make_hub()
    for _ in range(12):
        hub.heartbeat_tick()
    assert {t for t, _ in received} == {"heartbeat"}


def test_stopped_hub_publishes_no_heartbeat():
    hub, received = make_hub()
    hub.stop()
    hub.heartbeat_tick()
    assert received == []


def test_start_emits_heartbeats_then_stop():
    got = threading.Event()
    cfg = Config()
    cfg.telemetry.heartbeat_interval = timedelta(milliseconds=10)

    def sink(tag, payload):
        if tag == "heartbeat":
            got.set()

    hub = TelemetryHub(cfg, sink)
    hub.start()
    try:
        assert got.wait(2.0)
        assert hub.running
    finally:
        hub.stop()
    assert not hub.running