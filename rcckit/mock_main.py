"""Command entry point for the mock radio."""

from __future__ import annotations

import os
import re
import sys
from typing import Optional, Sequence

from rcckit.http_server import HttpServer
from rcckit.maintenance_server import MaintenanceServer
from rcckit.silvus_mock import SilvusMock

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def env_port(name: str, fallback: int) -> int:
    """Read a port number from the environment, falling back when unset or invalid."""
    value = os.environ.get(name)
    if value is None:
        return fallback
    match = _INT_PREFIX.match(value)
    if match is None:
        return fallback
    port = int(match.group())
    if not _INT_MIN <= port <= _INT_MAX:
        return fallback
    return port


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the maintenance and HTTP servers; returns the exit status."""
    mock = SilvusMock()
    http_port = env_port("SILVUS_MOCK_HTTP_PORT", 80)
    maintenance_port = env_port("SILVUS_MOCK_MAINT_PORT", 50000)

    maintenance: Optional[MaintenanceServer] = None
    try:
        maintenance = MaintenanceServer(maintenance_port, mock)
        print(f"[silvus-mock] Maintenance server starting on port {maintenance_port}", flush=True)
        maintenance.start()

        server = HttpServer(http_port, mock)
        print(f"[silvus-mock] HTTP REST server starting on port {http_port}", flush=True)
        server.serve()
    except OSError as exc:
        print(f"[silvus-mock] Failed to start server: {exc}", file=sys.stderr)
        print(
            f"[silvus-mock] Hint: Port {http_port} (HTTP) or {maintenance_port} "
            "(maintenance) may already be in use. Check for another silvus-mock "
            "instance or change ports.",
            file=sys.stderr,
        )
        return 1
    except KeyboardInterrupt:
        pass
    except Exception as exc:  # noqa: BLE001 - any failure ends the process
        print(f"[silvus-mock] Fatal error: {exc}", file=sys.stderr)
        return 1
    finally:
        if maintenance is not None:
            maintenance.stop()

    print("[silvus-mock] Exiting", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())