"""Server readiness entrypoint."""

from __future__ import annotations

import asyncio
import logging
import os
import threading

from server_ready.config import ConfigRepository
from server_ready.errors import ConfigError
from server_ready.health import HealthReporter
from server_ready.health_server import HealthServer
from server_ready.initializer import EmptyGame
from server_ready.registry_factory import RegistryFactory
from server_ready.runtime import ServerReadyRuntime


async def _run(runtime: ServerReadyRuntime) -> None:
    """Run the runtime and keep the loop alive."""
    runtime.start()
    try:
        while True:
            await asyncio.sleep(1)
    finally:
        runtime.stop()


def main() -> None:
    """Application entrypoint for the server readiness runtime."""
    config_path = os.getenv("SERVER_READY_CONFIG")
    health_host = os.getenv("HEALTH_HOST", "0.0.0.0")
    health_port = os.getenv("HEALTH_PORT", "8080")
    log_level = os.getenv("LOG_LEVEL", "INFO")

    if not config_path:
        raise ConfigError("SERVER_READY_CONFIG is required")

    try:
        health_port_int = int(health_port)
    except ValueError as exc:
        raise ConfigError(f"HEALTH_PORT must be an integer: {health_port}") from exc

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ConfigError(f"LOG_LEVEL is not a logging level: {log_level}")

    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    runtime = ServerReadyRuntime(
        config_repo=ConfigRepository(config_path),
        factory=RegistryFactory(),
        initializer=EmptyGame(),
        health=HealthReporter(),
    )

    server = HealthServer(health_host, health_port_int, runtime.health_snapshot)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    asyncio.run(_run(runtime))


if __name__ == "__main__":
    main()
