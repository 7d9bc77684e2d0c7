class DelveError(Exception):
    """Base exception for the delve project."""


class ConfigError(DelveError, ValueError):
    """Raised when generation settings are invalid or cannot be loaded."""


class GenerationError(DelveError):
    """Raised when a level cannot be generated with the given parameters."""
