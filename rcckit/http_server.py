"""HTTP front end for the mock radio: JSON-RPC, status and web UI."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import urlsplit

from rcckit.silvus_mock import SilvusMock
from rcckit.web_assets import get_web_index_html

logger = logging.getLogger(__name__)

_BIND_HOST = "0.0.0.0"
_JSON = "application/json"
_HTML = "text/html"
_INVALID_REQUEST = (
    '{"jsonrpc":"2.0","error":{"code":-32600,"message":"Invalid Request"},"id":null}'
)


@dataclass(frozen=True)
class HttpResponse:
    """Status, content type and body of a routed request."""

    status: int
    content_type: str
    body: str


def _internal_error(message: str) -> str:
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "error": {"code": -32603, "message": "Internal error", "data": message},
            "id": None,
        },
        separators=(",", ":"),
    )


class _Server(ThreadingHTTPServer):
    daemon_threads = True


class HttpServer:
    """Serves the mock's JSON-RPC API, status and web page over HTTP."""

    def __init__(self, port: int, mock: SilvusMock) -> None:
        self.port = port
        self.mock = mock
        self.ready = threading.Event()
        self._server: Optional[_Server] = None

    def route(self, path: str, body: str = "") -> HttpResponse:
        """Answer a request for ``path`` carrying ``body``."""
        if path == "/streamscape_api":
            return self._jsonrpc(body)
        if path == "/status":
            status = json.dumps(
                self.mock.get_status(), separators=(",", ":"), sort_keys=True
            )
            return HttpResponse(200, _JSON, status)
        if path in ("/", "/index.html"):
            return HttpResponse(200, _HTML, get_web_index_html())
        return HttpResponse(404, "text/plain", "Not Found")

    def _jsonrpc(self, body: str) -> HttpResponse:
        if not body:
            logger.info("JSON-RPC request empty /streamscape_api")
            return HttpResponse(200, _JSON, _INVALID_REQUEST)
        logger.info("JSON-RPC request: %s", body)
        try:
            response = self.mock.handle_jsonrpc_text(body)
        except Exception as exc:  # noqa: BLE001 - reported to the client
            logger.error("JSON-RPC handler exception: %s", exc)
            return HttpResponse(200, _JSON, _internal_error(str(exc)))
        logger.info("JSON-RPC response: %s", response)
        return HttpResponse(200, _JSON, response)

    def _make_handler(self) -> type[BaseHTTPRequestHandler]:
        app = self

        class Handler(BaseHTTPRequestHandler):
            protocol_version = "HTTP/1.1"

            def _handle(self) -> None:
                try:
                    length = int(self.headers.get("Content-Length") or 0)
                except ValueError:
                    length = 0
                raw = self.rfile.read(length) if length > 0 else b""
                response = app.route(
                    urlsplit(self.path).path, raw.decode("utf-8", errors="replace")
                )
                data = response.body.encode("utf-8")
                self.send_response(response.status)
                self.send_header("Content-Type", response.content_type)
                self.send_header("Content-Length", str(len(data)))
                self.send_header("Connection", "close")
                self.end_headers()
                self.wfile.write(data)
                self.close_connection = True

            do_GET = _handle
            do_POST = _handle
            do_PUT = _handle

            def log_message(self, format: str, *args: object) -> None:
                logger.debug(format, *args)

        return Handler

    def serve(self) -> None:
        """Bind and serve requests until :meth:`shutdown` is called.

        Raises OSError if the port cannot be bound.
        """
        try:
            server = _Server((_BIND_HOST, self.port), self._make_handler())
        except OSError as exc:
            logger.error("REST server failed: %s", exc)
            logger.error(
                "Hint: Port %s may be already in use. Check for another "
                "silvus-mock instance or set SILVUS_MOCK_HTTP_PORT.",
                self.port,
            )
            raise
        with server:
            self._server = server
            self.port = server.server_address[1]
            self.ready.set()
            logger.info("REST server started on port %s", self.port)
            try:
                server.serve_forever()
            finally:
                self._server = None
                self.ready.clear()

    def shutdown(self) -> None:
        """Stop a running :meth:`serve` loop."""
        server = self._server
        if server is not None:
            server.shutdown()