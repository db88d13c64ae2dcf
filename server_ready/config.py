"""Server readiness configuration models and repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import json

import jsonschema

from server_ready.errors import ConfigError

DEFAULT_HOST_ID = "server-ready"
DEFAULT_INITIAL_DELAY_TICKS = 1
DEFAULT_STABLE_TICKS = 20  # 1 second at 20 Hz
DEFAULT_TICK_INTERVAL_MS = 50


@dataclass(frozen=True)
class CoordinatorConfig:
    """Polling and stability settings for the loading coordinator."""

    initial_delay_ticks: int = DEFAULT_INITIAL_DELAY_TICKS
    stable_ticks: int = DEFAULT_STABLE_TICKS
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS

    @property
    def tick_seconds(self) -> float:
        return self.tick_interval_ms / 1000


@dataclass(frozen=True)
class RegistryConfig:
    """Which component registry to observe and how to build it."""

    registry_type: str = "static"
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ServerReadyConfig:
    """Top-level configuration for the server readiness runtime."""

    host_id: str = DEFAULT_HOST_ID
    coordinator: CoordinatorConfig = field(default_factory=CoordinatorConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)


class ConfigRepository:
    """
    Repository for loading configuration.

    Loads a local JSON file and validates it against the packaged schema.
    """

    def __init__(self, path: str, schema_path: str | None = None) -> None:
        """Initialize with config file path and optional schema path."""
        self._path = Path(path)
        if schema_path is None:
            self._schema_path = Path(__file__).resolve().parent / "schemas" / "server_ready_config.schema.json"
        else:
            self._schema_path = Path(schema_path)

    def load(self) -> ServerReadyConfig:
        """Load and validate server readiness configuration."""
        if not self._path.exists():
            raise ConfigError(f"Config file not found: {self._path}")

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file: {exc}") from exc

        self._validate(raw)

        coordinator_raw = raw.get("coordinator", {})
        coordinator = CoordinatorConfig(
            initial_delay_ticks=int(coordinator_raw.get("initial_delay_ticks", DEFAULT_INITIAL_DELAY_TICKS)),
            stable_ticks=int(coordinator_raw.get("stable_ticks", DEFAULT_STABLE_TICKS)),
            tick_interval_ms=int(coordinator_raw.get("tick_interval_ms", DEFAULT_TICK_INTERVAL_MS)),
        )

        registry_raw = raw.get("registry", {})
        registry = RegistryConfig(
            registry_type=registry_raw.get("type", "static"),
            options=dict(registry_raw.get("options", {})),
        )

        return ServerReadyConfig(
            host_id=raw.get("host_id", DEFAULT_HOST_ID),
            coordinator=coordinator,
            registry=registry,
        )

    def _validate(self, raw: dict) -> None:
        """Validate config against JSON Schema if available; fallback to basic checks."""
        if self._schema_path.exists():
            schema = json.loads(self._schema_path.read_text(encoding="utf-8"))
            try:
                jsonschema.validate(instance=raw, schema=schema)
            except jsonschema.ValidationError as exc:
                raise ConfigError(f"Config schema validation failed: {exc.message}") from exc
            return

        if not isinstance(raw, dict):
            raise ConfigError("Config must be a JSON object")

        coordinator = raw.get("coordinator", {})
        if not isinstance(coordinator, dict):
            raise ConfigError("'coordinator' must be an object")

        for key in ("stable_ticks", "tick_interval_ms"):
            if key in coordinator and (not isinstance(coordinator[key], int) or coordinator[key] < 1):
                raise ConfigError(f"'coordinator.{key}' must be a positive integer")

        delay = coordinator.get("initial_delay_ticks", 0)
        if not isinstance(delay, int) or delay < 0:
            raise ConfigError("'coordinator.initial_delay_ticks' must be a non-negative integer")

        if not isinstance(raw.get("registry", {}), dict):
            raise ConfigError("'registry' must be an object")
