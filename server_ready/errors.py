"""Custom exceptions for server_ready."""


class ConfigError(Exception):
    """Raised when config is invalid or missing."""


class RegistryError(Exception):
    """Raised when a component registry cannot be built or queried."""


class CoordinatorError(Exception):
    """Raised when the loading coordinator is driven out of order."""
