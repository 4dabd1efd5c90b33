"""Pytest configuration and fixtures for ctoai tests."""

import json
import socket
import threading
from collections.abc import Generator
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any

import pytest

from ctoai.config import SdkConfig


@dataclass
class RecordedRequest:
    """A request received by the fake daemon."""

    method: str
    path: str
    body: Any
    content_type: str | None = None


@dataclass
class FakeDaemon:
    """Stand-in for the SDK daemon on an ephemeral local port.

    Responses are keyed by operation path ("/secret/get"). Paths without a
    programmed response answer 200 with an empty JSON object.
    """

    port: int = 0
    requests: list[RecordedRequest] = field(default_factory=list)
    responses: dict[str, tuple[int, str]] = field(default_factory=dict)

    def respond(self, path: str, body: Any = None, status: int = 200, raw: str | None = None) -> None:
        """Program the response for a path, JSON-encoding body unless raw is given."""
        self.responses[path] = (status, raw if raw is not None else json.dumps(body))


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self) -> None:
        daemon: FakeDaemon = self.server.daemon  # type: ignore[attr-defined]
        length = int(self.headers.get("Content-Length", 0))
        raw = self.rfile.read(length)
        body = json.loads(raw) if raw else None
        daemon.requests.append(
            RecordedRequest("POST", self.path, body, self.headers.get("Content-Type"))
        )

        status, payload = daemon.responses.get(self.path, (200, "{}"))
        data = payload.encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: Any) -> None:
        pass


@pytest.fixture
def fake_daemon() -> Generator[FakeDaemon]:
    """Run a fake daemon HTTP server for the duration of a test."""
    daemon = FakeDaemon()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.daemon = daemon  # type: ignore[attr-defined]
    daemon.port = server.server_address[1]

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield daemon
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def _make_config(tmp_path: Path, port: int) -> SdkConfig:
    state_dir = tmp_path / "state"
    config_dir = tmp_path / "config"
    state_dir.mkdir()
    config_dir.mkdir()
    return SdkConfig(
        state_dir=str(state_dir), config_dir=str(config_dir), daemon_port=port
    )


@pytest.fixture
def sdk_config(tmp_path: Path, fake_daemon: FakeDaemon) -> SdkConfig:
    """Config with temp state/config directories pointing at the fake daemon."""
    return _make_config(tmp_path, fake_daemon.port)


@pytest.fixture
def dead_daemon_config(tmp_path: Path) -> SdkConfig:
    """Config pointing at a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return _make_config(tmp_path, port)
