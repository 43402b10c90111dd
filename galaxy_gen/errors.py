"""Exception types for galaxy generation."""


class ConfigurationError(ValueError):
    """Raised when generation parameters or config files are invalid."""
