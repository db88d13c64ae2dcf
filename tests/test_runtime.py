"""Tests for ServerReadyRuntime and the health endpoint."""

from __future__ import annotations

import http.client
import json
import threading
from pathlib import Path

import pytest

from server_ready.config import ConfigRepository
from server_ready.errors import CoordinatorError
from server_ready.health import HealthReporter
from server_ready.health_server import HealthServer
from server_ready.initializer import EmptyGame, GameState
from server_ready.registry_factory import RegistryFactory
from server_ready.runtime import ServerReadyRuntime

from conftest import FakeScheduler


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    raw = {
        "host_id": "server-ready",
        "coordinator": {"initial_delay_ticks": 2, "stable_ticks": 3},
        "registry": {"type": "static", "options": {"components": ["server-ready", "worlds", "economy"]}},
    }
    path = tmp_path / "server_ready.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    return str(path)


@pytest.fixture
def runtime(config_path, scheduler) -> ServerReadyRuntime:
    return ServerReadyRuntime(
        config_repo=ConfigRepository(config_path),
        factory=RegistryFactory(),
        initializer=EmptyGame(),
        health=HealthReporter(),
        scheduler=scheduler,
    )


class TestServerReadyRuntime:
    """Tests for the runtime facade."""

    def test_health_before_start(self, runtime):
        assert runtime.health_snapshot() == {
            "ready": False,
            "coordinator": {"status": "stopped"},
            "components": {},
        }

    def test_start_schedules_coordinator(self, runtime, scheduler: FakeScheduler):
        runtime.start()

        assert scheduler.handle.delay_ticks == 2
        assert not runtime.is_ready()

    def test_becomes_ready_once_components_settle(self, runtime, scheduler: FakeScheduler):
        runtime.start()
        scheduler.run(1)

        runtime.registry.set_enabled("worlds")
        runtime.registry.set_enabled("economy")
        scheduler.run(10)

        assert runtime.is_ready()
        assert runtime._initializer.game_state is GameState.PRE_START
        health = runtime.health_snapshot()
        assert health["coordinator"]["status"] == "fired"
        assert health["components"]["worlds"]["status"] == "not_ready"
        assert health["components"]["server-ready"] == {"status": "ready", "warned": 2, "polls": 5}

    def test_start_twice_raises_and_keeps_one_coordinator(self, runtime, scheduler: FakeScheduler):
        setups = []
        runtime._initializer.notifier.subscribe(setups.append)
        runtime.start()
        first = runtime.coordinator

        with pytest.raises(CoordinatorError):
            runtime.start()

        assert runtime.coordinator is first
        assert len(scheduler.handles) == 1

        runtime.registry.set_enabled("worlds")
        runtime.registry.set_enabled("economy")
        for handle in scheduler.handles:
            for _ in range(10):
                if not handle.cancelled:
                    handle.callback()

        assert [event.phase.value for event in setups] == ["pre", "post"]

    def test_stop_cancels_polling(self, runtime, scheduler: FakeScheduler):
        runtime.start()
        runtime.stop()

        assert scheduler.handle.cancelled
        assert not runtime.is_ready()


class TestHealthServer:
    """Tests for the HTTP health endpoint."""

    @pytest.fixture
    def serve(self):
        servers = []

        def _serve(payload):
            server = HealthServer("127.0.0.1", 0, lambda: payload)
            thread = threading.Thread(target=server.serve_forever, daemon=True)
            thread.start()
            servers.append(server)
            return server.server_address[1]

        yield _serve

        for server in servers:
            server.shutdown()
            server.server_close()

    @staticmethod
    def _get(port: int, path: str):
        conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
        try:
            conn.request("GET", path)
            response = conn.getresponse()
            return response.status, response.read()
        finally:
            conn.close()

    def test_ready_returns_503_while_waiting(self, serve):
        port = serve({"ready": False})

        status, body = self._get(port, "/health/ready")

        assert status == 503
        assert json.loads(body) == {"ready": False}

    def test_live_is_always_ok(self, serve):
        port = serve({"ready": False})

        status, _ = self._get(port, "/health/live")

        assert status == 200

    def test_summary_is_ok_while_waiting(self, serve):
        port = serve({"ready": False})

        status, body = self._get(port, "/health")

        assert status == 200
        assert json.loads(body) == {"ready": False}

    def test_ready_returns_200_once_fired(self, serve):
        port = serve({"ready": True})

        status, _ = self._get(port, "/health/ready")

        assert status == 200

    def test_unknown_path(self, serve):
        port = serve({"ready": True})

        status, _ = self._get(port, "/metrics")

        assert status == 404
