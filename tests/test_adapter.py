import pytest

from rcckit.adapter import CapabilityInfo, RadioAdapter
from rcckit.types import CommandResult, CommandResultCode, RadioState, RadioStatus

_OPERATIONS = (
    "id",
    "capabilities",
    "connect",
    "set_power",
    "set_channel",
    "refresh_state",
    "state",
)


class _Adapter(RadioAdapter):
    def __init__(self):
        self._state = RadioState()
        self._caps = CapabilityInfo([2200.0, 2220.0], (0.1, 5.0))

    def id(self):
        return "radio-1"

    def capabilities(self):
        return self._caps

    def connect(self):
        self._state.status = RadioStatus.READY
        return CommandResult()

    def set_power(self, watts):
        lo, hi = self._caps.power_range_watts
        if not lo <= watts <= hi:
            return CommandResult(CommandResultCode.INVALID_RANGE, "power")
        self._state.power_watts = watts
        return CommandResult()

    def set_channel(self, channel_index, frequency_mhz):
        self._state.channel_index = channel_index
        return CommandResult()

    def refresh_state(self):
        return CommandResult()

    def state(self):
        return self._state


def _partial_adapter(missing):
    methods = {
        name: _Adapter.__dict__[name] for name in _OPERATIONS if name != missing
    }
    methods["__init__"] = _Adapter.__dict__["__init__"]
    return type("Partial", (RadioAdapter,), methods)


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        RadioAdapter()


@pytest.mark.parametrize("missing", _OPERATIONS)
def test_adapter_missing_an_operation_cannot_be_instantiated(missing):
    partial = _partial_adapter(missing)
    with pytest.raises(TypeError):
        partial()
    completed = type("Completed", (partial,), {missing: _Adapter.__dict__[missing]})
    adapter = completed()
    assert adapter.state() == RadioState()
    assert adapter.connect() == CommandResult()
    assert adapter.state().status is RadioStatus.READY


def test_adapter_with_every_operation_can_be_instantiated():
    full = _partial_adapter(None)
    adapter = full()
    assert adapter.id() == "radio-1"
    assert adapter.capabilities() == CapabilityInfo([2200.0, 2220.0], (0.1, 5.0))
    assert adapter.refresh_state() == CommandResult()
    assert adapter.state() == RadioState()


def test_capability_defaults():
    caps = CapabilityInfo()
    assert caps.supported_frequencies_mhz == []
    assert caps.power_range_watts == (0.0, 0.0)


def test_capability_lists_independent():
    first = CapabilityInfo()
    first.supported_frequencies_mhz.append(1.0)
    assert CapabilityInfo().supported_frequencies_mhz == []


def test_concrete_adapter_flow():
    adapter = _Adapter()
    assert isinstance(adapter, RadioAdapter)
    assert adapter.capabilities() == CapabilityInfo([2200.0, 2220.0], (0.1, 5.0))
    assert adapter.connect() == CommandResult()
    assert adapter.set_power(2.0).ok
    rejected = adapter.set_power(10.0)
    assert rejected.code is CommandResultCode.INVALID_RANGE
    assert rejected.message == "power"
    adapter.set_channel(2, 2220.0)
    assert adapter.state() == RadioState(
        status=RadioStatus.READY, channel_index=2, power_watts=2.0
    )