"""Minimal health endpoint server."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, HTTPServer
import json
from typing import Callable, Dict

HealthPayload = Dict[str, object]


def _always_ok(payload: HealthPayload) -> int:
    return 200


def _ok_once_ready(payload: HealthPayload) -> int:
    return 200 if payload.get("ready") else 503


# Liveness only proves the process answers; readiness waits for the gate.
ROUTES: Dict[str, Callable[[HealthPayload], int]] = {
    "/health": _always_ok,
    "/health/live": _always_ok,
    "/health/ready": _ok_once_ready,
}


class HealthHandler(BaseHTTPRequestHandler):
    """Serves the runtime health snapshot, with a status code per probe kind."""

    def do_GET(self) -> None:  # noqa: N802
        status_for = ROUTES.get(self.path)
        if status_for is None:
            self.send_response(404)
            self.end_headers()
            return

        payload = self.server.get_health()  # type: ignore[attr-defined]
        self._send_json(status_for(payload), payload)

    def _send_json(self, status: int, payload: HealthPayload) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        return


class HealthServer(HTTPServer):
    """HTTP server that answers liveness and readiness probes from a snapshot callback."""

    def __init__(self, host: str, port: int, get_health: Callable[[], HealthPayload]) -> None:
        self.get_health = get_health
        super().__init__((host, port), HealthHandler)
