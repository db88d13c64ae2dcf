"""Factory for creating component registries from config."""

from server_ready.config import RegistryConfig
from server_ready.errors import RegistryError
from server_ready.registry import ComponentRegistry, DockerRegistry, StaticRegistry


class RegistryFactory:
    """
    Factory for creating registries from config.

    Supports the in-process static registry and Docker containers.
    """

    def create(self, config: RegistryConfig) -> ComponentRegistry:
        """Create registry instance from config."""
        if config.registry_type == "static":
            components = config.options.get("components", [])
            if not isinstance(components, list) or not all(isinstance(name, str) for name in components):
                raise RegistryError("'components' must be a list of component names")
            return StaticRegistry(components)

        if config.registry_type == "docker":
            labels = config.options.get("labels", {})
            if not isinstance(labels, dict):
                raise RegistryError("'labels' must be an object of label names to values")
            return DockerRegistry(labels=labels)

        raise RegistryError(f"Unsupported registry type: {config.registry_type}")
