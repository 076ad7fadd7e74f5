"""Line-oriented TCP JSON-RPC endpoint for the mock radio."""

from __future__ import annotations

import json
import logging
import socketserver
import threading
from typing import Optional

from rcckit.silvus_mock import SilvusMock

logger = logging.getLogger(__name__)

_BIND_HOST = "0.0.0.0"


class _TCPServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True
    owner: "MaintenanceServer"


class _Handler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        try:
            line = self.rfile.readline()
            if not line.endswith(b"\n"):
                logger.error("Maintenance handler error: connection closed before newline")
                return
            response = self.server.owner.process_line(
                line[:-1].decode("utf-8", errors="replace")
            )
            if response is not None:
                self.wfile.write(response.encode("utf-8"))
        except OSError as exc:
            logger.error("Maintenance handler error: %s", exc)


class MaintenanceServer:
    """Accepts TCP connections, each carrying one newline-terminated request.

    The port is bound on construction; :meth:`start` begins accepting.
    """

    def __init__(self, port: int, mock: SilvusMock) -> None:
        self.mock = mock
        self._server = _TCPServer((_BIND_HOST, port), _Handler)
        self._server.owner = self
        self.port = self._server.server_address[1]
        self._thread: Optional[threading.Thread] = None
        self._closed = False

    def process_line(self, payload: str) -> Optional[str]:
        """Answer one request line; None for an empty line."""
        if not payload:
            return None
        logger.info("Maintenance JSON-RPC request: %s", payload)
        try:
            response = self.mock.handle_jsonrpc_text(payload)
        except Exception as exc:  # noqa: BLE001 - reported to the client
            logger.error("Maintenance JSON-RPC handler exception: %s", exc)
            response = json.dumps(
                {
                    "jsonrpc": "2.0",
                    "error": {"code": -32603, "message": "Internal error", "data": str(exc)},
                    "id": None,
                },
                separators=(",", ":"),
            )
        if not response.endswith("\n"):
            response += "\n"
        logger.info("Maintenance JSON-RPC response: %s", response.rstrip("\n"))
        return response

    def start(self) -> None:
        """Accept connections in a background thread."""
        if self._closed:
            raise RuntimeError("maintenance server is stopped")
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="maintenance-server", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop accepting and release the port; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        thread, self._thread = self._thread, None
        if thread is not None:
            self._server.shutdown()
            thread.join()
        self._server.server_close()

    def __enter__(self) -> "MaintenanceServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()