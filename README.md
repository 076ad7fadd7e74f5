# rcckit

This package has two parts:

- building blocks for a radio control container;
- a self-contained mock of a Silvus radio's JSON-RPC interface.

The package has no third-party runtime dependencies.

## Installation

```
pip install rcckit
```

To run the tests, install the `test` extra:

```
pip install rcckit[test]
pytest
```

## The Silvus mock

### Running it

Start the mock from the command line:

```
silvus-mock
```

The command runs two servers. Both bind on all interfaces.

- **HTTP server.** It listens on port 80, or on the port in `SILVUS_MOCK_HTTP_PORT`. It answers GET, POST and PUT requests on these paths:
  - `/streamscape_api` takes a JSON-RPC 2.0 request in the body, either a single object or a batch array. An empty body gets an `Invalid Request` error (-32600).
  - `/status` returns the current radio state as JSON.
  - `/` and `/index.html` serve a small web page. The page shows the status and has buttons that send the control methods.
  - Any other path gets a 404.
- **Maintenance server.** It listens on TCP port 50000, or on the port in `SILVUS_MOCK_MAINT_PORT`. Each connection carries one newline-terminated JSON-RPC request. The server answers with one newline-terminated response, and an empty line gets no answer.

If a port variable is not a number, the default port is used. If a port cannot be bound, the command prints a hint and exits with status 1.

### Methods

| Method | Without params | With params |
| --- | --- | --- |
| `freq` | current frequency | set frequency; must fall in a supported profile, else `INVALID_RANGE` (-32002) |
| `power_dBm` | current power | set power, 0–39 dBm, else `INVALID_RANGE` |
| `read_power_dBm` | current power | — |
| `read_power_mw` | power in milliwatts, rounded | — |
| `max_link_distance` | current distance in metres | set distance, 0–100000 |
| `supported_frequency_profiles` | the frequency profiles | — |
| `gps_coordinates` | `{"lat","lon","alt"}` | set all three (exactly three params) |
| `gps_mode` | `{"mode": ...}` | set mode |
| `gps_time` | current GPS time | set time |
| `zeroize` | reset frequency to 2490.0 and power to 30, and clear any blackout | — |
| `radio_reset` | start a reset blackout | — |
| `factory_reset` | reset frequency to 2490.0 and power to 30 | — |

An unknown method gets `Method not found` (-32601). A request that is not valid JSON gets `Parse error` (-32700).

### Blackouts

Some methods start a blackout period:

| Action | Blackout |
| --- | --- |
| setting the frequency | 30 s |
| changing power | 5 s |
| `radio_reset` | 60 s |

During a blackout, every method except `max_link_distance`, `read_power_dBm` and `read_power_mw` answers `UNAVAILABLE` (-32000).

### Using the mock from Python

```python
from rcckit.silvus_mock import SilvusMock

mock = SilvusMock()
print(mock.handle_jsonrpc_text('{"jsonrpc":"2.0","method":"freq","id":1}'))
print(mock.get_status()["power_dBm"])
```

`SilvusMock` takes these keyword arguments:

- `clock`, a callable that returns monotonic seconds;
- `soft_boot_duration`;
- `power_change_duration`;
- `radio_reset_duration`.

Passing a fake clock makes blackouts easy to test.

Other classes and functions in the mock's modules:

- `rcckit.silvus_mock.frequency_matches_profile(freq, profile)` checks a frequency against one profile entry. An entry is either a single value such as `"4700"` or a `low:step:high` grid.
- `rcckit.silvus_mock.to_mw(dbm)` converts dBm to milliwatts.
- `rcckit.http_server.HttpServer(port, mock)`:
  - `route(path, body)` answers a request without any networking;
  - `serve()` blocks while it serves requests;
  - `shutdown()` stops `serve()`.
- `rcckit.maintenance_server.MaintenanceServer(port, mock)`:
  - the port is bound when the server is constructed;
  - `start()` accepts connections in a background thread;
  - `stop()` releases the port;
  - `process_line(payload)` answers one request line directly;
  - the server also works as a context manager.
- `rcckit.web_assets.get_web_index_html()` returns the web page.
- `rcckit.mock_main.env_port(name, fallback)` reads a port from the environment. `rcckit.mock_main.main()` is the command's entry point.

## Container building blocks

- `rcckit.types` holds these values:
  - `CommandResultCode`, `RadioStatus` and `ErrorCode` enums;
  - `CommandResult` and `RadioState`;
  - `ChannelRequest`, `PowerRequest` and `RadioSummary`.

  `to_string` gives the wire name of any of the three enums.
- `rcckit.config` holds the `Config` dataclass tree with its defaults:
  - network;
  - telemetry;
  - security;
  - service discovery;
  - timing;
  - container info;
  - radio entries.

  `Config.effective_sse_port()` returns the SSE port. If none is set, it returns the command port plus one.
- `rcckit.adapter` holds `RadioAdapter`, the abstract interface a radio adapter implements, and `CapabilityInfo`.
- `rcckit.radio_manager` holds `RadioManager` and `RadioDescriptor`. `RadioManager(config, adapter_factories)` builds one adapter per configured radio. `adapter_factories` maps an adapter type name to a callable that takes `(id, endpoint)`, and entries with an unknown type are skipped. The manager has these methods:
  - `start()` connects every adapter;
  - `list_radios()`;
  - `get_adapter()`;
  - `get_state()`;
  - `set_active_radio()` and `active_radio()` track the selected radio.
- `rcckit.telemetry` holds `TelemetryHub(config, sink)`, which builds event payloads:
  - `ready`;
  - `state`;
  - `channelChanged`;
  - `powerChanged`;
  - `fault`;
  - custom events.

  The hub keeps each event in a bounded buffer (`events`) and passes it to `sink(tag, payload)`. `start()` sends heartbeats at the configured interval, and every twelfth heartbeat re-sends the last `ready` snapshot. The module also has these helpers:
  - `normalize_status`;
  - `power_dbm`;
  - `effective_sse_secret`.
- `rcckit.readiness` has two functions:
  - `build_ready_snapshot(radio_manager)` summarises the radios for the `ready` event;
  - `discovery_endpoints(host, command_port, sse_port)` lists the REST, SSE and health URLs.

## What this package does not do

The container building blocks are parts only; there is no runnable control service.

- The package has no REST control API.
- It has no authentication.
- It does not load configuration files; `Config` is built in code.
- It has no command orchestration or audit log.
- It has no service-discovery responder.
- No concrete radio adapter is included. `RadioManager` builds only the adapters you supply through `adapter_factories`.
- `TelemetryHub` does not serve events over the network. It only buffers them and hands them to the sink you supply.