import json
import socket

import pytest

from rcckit.maintenance_server import MaintenanceServer
from rcckit.silvus_mock import SilvusMock


class _FailingMock:
    def handle_jsonrpc_text(self, payload):
        raise RuntimeError("boom")


def _exchange(port, data):
    with socket.create_connection(("127.0.0.1", port), timeout=5) as sock:
        sock.sendall(data)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
            if chunk.endswith(b"\n"):
                break
        return b"".join(chunks)


@pytest.fixture
def maintenance():
    server = MaintenanceServer(0, SilvusMock())
    yield server
    server.stop()


def test_empty_line_has_no_response(maintenance):
    assert maintenance.process_line("") is None


def test_response_is_newline_terminated(maintenance):
    line = json.dumps({"jsonrpc": "2.0", "method": "gps_mode", "id": "a"})
    response = maintenance.process_line(line)
    assert response.endswith("\n")
    assert json.loads(response) == {"jsonrpc": "2.0", "result": {"mode": "enabled"}, "id": "a"}


def test_handler_exception_becomes_internal_error():
    with MaintenanceServer(0, _FailingMock()) as server:
        body = json.loads(server.process_line("{}"))
    assert body["error"]["code"] == -32603
    assert body["error"]["data"] == "boom"


def test_request_over_tcp(maintenance):
    maintenance.start()
    line = json.dumps({"jsonrpc": "2.0", "method": "max_link_distance", "id": 3})
    reply = _exchange(maintenance.port, line.encode() + b"\n")
    assert json.loads(reply) == {"jsonrpc": "2.0", "result": ["10000"], "id": 3}


def test_parse_error_over_tcp(maintenance):
    maintenance.start()
    reply = json.loads(_exchange(maintenance.port, b"not json\n"))
    assert reply["error"]["code"] == -32700


def test_missing_newline_gets_no_reply(maintenance):
    maintenance.start()
    with socket.create_connection(("127.0.0.1", maintenance.port), timeout=5) as sock:
        sock.sendall(b'{"jsonrpc":"2.0","method":"freq","id":1}')
        sock.shutdown(socket.SHUT_WR)
        assert sock.recv(4096) == b""


def test_stop_releases_port_and_is_idempotent():
    server = MaintenanceServer(0, SilvusMock())
    server.start()
    port = server.port
    server.stop()
    server.stop()
    with pytest.raises(ConnectionRefusedError):
        socket.create_connection(("127.0.0.1", port), timeout=5)


def test_start_after_stop_raises():
    server = MaintenanceServer(0, SilvusMock())
    server.stop()
    with pytest.raises(RuntimeError):
        server.start()