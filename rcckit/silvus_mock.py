"""Simulated radio that answers the StreamScape JSON-RPC API."""

from __future__ import annotations

import copy
import json
import math
import re
import threading
import time
from collections.abc import Callable
from typing import Any, Optional

_EPSILON = 1e-6
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")

# Methods that keep answering while the radio is in a blackout period.
_ALWAYS_AVAILABLE = frozenset({"max_link_distance", "read_power_dBm", "read_power_mw"})

_DEFAULT_PROFILES = [
    {"frequencies": ["2200:20:2380", "4700"], "bandwidth": "-1", "antenna_mask": "15"},
    {"frequencies": ["4420:40:4700"], "bandwidth": "-1", "antenna_mask": "3"},
    {"frequencies": ["4700:20:4980"], "bandwidth": "-1", "antenna_mask": "12"},
]


class _RequestError(Exception):
    """A request field has a type the handler cannot use."""


def _parse_float(text: str) -> float:
    """Parse the leading floating-point number of ``text``."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"no number in {text!r}")
    return float(match.group().strip())


def _parse_int(text: str) -> int:
    """Parse the leading 32-bit integer of ``text``."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"no integer in {text!r}")
    value = int(match.group())
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {value}")
    return value


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _almost_equal(a: float, b: float) -> bool:
    return abs(a - b) < _EPSILON


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else _dump(value)


def _param_int(value: Any) -> int:
    if isinstance(value, bool):
        raise _RequestError("boolean is not a number")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        return _parse_int(value)
    raise _RequestError(f"cannot read an integer from {value!r}")


def frequency_matches_profile(freq: float, profile: str) -> bool:
    """Whether ``freq`` is a single value or a ``low:step:high`` grid point of ``profile``."""
    if ":" not in profile:
        try:
            value = _parse_float(profile)
        except ValueError:
            return False
        return _almost_equal(freq, value)

    parts = profile.split(":")
    if len(parts) != 3:
        return False
    try:
        low, step, high = (_parse_float(part) for part in parts)
    except ValueError:
        return False
    if step <= 0.0 or high < low:
        return False
    if freq < low - _EPSILON or freq > high + _EPSILON:
        return False
    steps = _round_half_away((freq - low) / step)
    return _almost_equal(low + steps * step, freq)


def to_mw(dbm: int) -> float:
    """Convert dBm to milliwatts."""
    return 10.0 ** (dbm / 10.0)


def _error(code: int, message: str, id_: Any, data: Optional[str] = None) -> dict:
    error: dict[str, Any] = {"code": code, "message": message}
    if data:
        error["data"] = data
    return {"jsonrpc": "2.0", "error": error, "id": id_}


def _result(result: Any, id_: Any) -> dict:
    return {"jsonrpc": "2.0", "result": result, "id": id_}


def _done(id_: Any) -> dict:
    return _result([""], id_)


class SilvusMock:
    """In-memory radio state driven by JSON-RPC requests.

    Changing frequency, power or resetting the radio starts a blackout
    during which most methods answer ``UNAVAILABLE``. ``clock`` returns
    monotonic seconds and may be replaced for testing.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        soft_boot_duration: float = 30.0,
        power_change_duration: float = 5.0,
        radio_reset_duration: float = 60.0,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._frequency = "4700.0"
        self._power_dbm = 30
        self._max_link_distance_m = 10000
        self._gps_lat = "0.0"
        self._gps_lon = "0.0"
        self._gps_alt = "0.0"
        self._gps_mode = "enabled"
        self._gps_time = str(int(time.time()))
        self._blackout_until = -math.inf
        self._soft_boot_duration = soft_boot_duration
        self._power_change_duration = power_change_duration
        self._radio_reset_duration = radio_reset_duration
        self._profiles = copy.deepcopy(_DEFAULT_PROFILES)

    def _is_available(self) -> bool:
        return self._clock() >= self._blackout_until

    def _blackout(self, seconds: float) -> None:
        self._blackout_until = self._clock() + seconds

    def _validate_frequency(self, text: str) -> bool:
        try:
            freq = _parse_float(text)
        except ValueError:
            return False
        return any(
            frequency_matches_profile(freq, item)
            for profile in self._profiles
            for item in profile["frequencies"]
        )

    def handle_jsonrpc(self, request: Any) -> dict:
        """Answer one JSON-RPC request object with a response object.

        Raises TypeError if ``request`` is not an object.
        """
        if not isinstance(request, dict):
            raise TypeError(f"request must be an object, not {type(request).__name__}")
        if request.get("jsonrpc", "") != "2.0" or "method" not in request:
            return _error(-32600, "Invalid Request", request.get("id"))

        id_ = request.get("id")
        try:
            method = request["method"]
            if not isinstance(method, str):
                raise _RequestError(f"method must be a string, not {_dump(method)}")
            if "params" in request:
                raw = request["params"]
                params = list(raw) if isinstance(raw, list) else [raw]
            else:
                params = []
            with self._lock:
                if not self._is_available() and method not in _ALWAYS_AVAILABLE:
                    return _error(-32000, "UNAVAILABLE", id_)
                return self._dispatch(method, params, id_)
        except _RequestError as exc:
            return _error(-32603, f"Internal error: {exc}", id_)

    def _dispatch(self, method: str, params: list, id_: Any) -> dict:
        if method == "freq":
            if not params:
                return _result([self._frequency], id_)
            value = _as_text(params[0])
            if not self._validate_frequency(value):
                return _error(-32002, "INVALID_RANGE", id_)
            self._frequency = value
            self._blackout(self._soft_boot_duration)
            return _done(id_)

        if method == "power_dBm":
            if not params:
                return _result([str(self._power_dbm)], id_)
            try:
                power = _param_int(params[0])
            except (ValueError, OverflowError, _RequestError):
                return _error(-32002, "INVALID_RANGE", id_)
            if not 0 <= power <= 39:
                return _error(-32002, "INVALID_RANGE", id_)
            self._power_dbm = power
            self._blackout(self._power_change_duration)
            return _done(id_)

        if method == "supported_frequency_profiles":
            return _result(copy.deepcopy(self._profiles), id_)

        if method == "read_power_dBm":
            return _result([str(self._power_dbm)], id_)

        if method == "read_power_mw":
            return _result([str(int(_round_half_away(to_mw(self._power_dbm))))], id_)

        if method == "max_link_distance":
            if not params:
                return _result([str(self._max_link_distance_m)], id_)
            try:
                distance = _param_int(params[0])
            except (ValueError, OverflowError, _RequestError):
                return _error(-32002, "INVALID_RANGE", id_, "Invalid distance")
            if not 0 <= distance <= 100000:
                return _error(-32002, "INVALID_RANGE", id_, "Distance out of range")
            self._max_link_distance_m = distance
            return _done(id_)

        if method == "gps_coordinates":
            if not params:
                return _result(self._coordinates(), id_)
            if len(params) != 3:
                return _error(
                    -32602, "INVALID_RANGE", id_, "gps_coordinates requires three parameters"
                )
            self._gps_lat, self._gps_lon, self._gps_alt = (_as_text(p) for p in params)
            return _done(id_)

        if method == "gps_mode":
            if not params:
                return _result({"mode": self._gps_mode}, id_)
            self._gps_mode = _as_text(params[0])
            return _done(id_)

        if method == "gps_time":
            if not params:
                return _result([self._gps_time], id_)
            self._gps_time = _as_text(params[0])
            return _done(id_)

        if method == "zeroize":
            self._frequency = "2490.0"
            self._power_dbm = 30
            self._blackout_until = -math.inf
            return _done(id_)

        if method == "radio_reset":
            self._blackout(self._radio_reset_duration)
            return _done(id_)

        if method == "factory_reset":
            self._frequency = "2490.0"
            self._power_dbm = 30
            return _done(id_)

        return _error(-32601, "Method not found", id_)

    def _coordinates(self) -> dict:
        return {"lat": self._gps_lat, "lon": self._gps_lon, "alt": self._gps_alt}

    def get_status(self) -> dict:
        """Snapshot of the radio state for the status page."""
        with self._lock:
            remaining = max(0.0, self._blackout_until - self._clock())
            return {
                "frequency": self._frequency,
                "power_dBm": self._power_dbm,
                "available": self._is_available(),
                "blackoutUntil": int(remaining),
                "max_link_distance_m": self._max_link_distance_m,
                "gps_coordinates": self._coordinates(),
                "gps_mode": self._gps_mode,
                "gps_time": self._gps_time,
                "supported_frequency_profiles": copy.deepcopy(self._profiles),
            }

    def handle_jsonrpc_text(self, payload: str) -> str:
        """Answer a JSON-RPC request or batch given as text; never raises."""
        try:
            request = json.loads(payload, parse_constant=_reject_constant)
        except ValueError:
            return _dump(_error(-32700, "Parse error", None))
        try:
            if isinstance(request, list):
                return _dump([self.handle_jsonrpc(item) for item in request])
            return _dump(self.handle_jsonrpc(request))
        except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON-RPC error
            return _dump(_error(-32603, f"Internal error: {exc}", None))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")