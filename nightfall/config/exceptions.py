"""
Exceptions for configuration errors.
"""


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    def __init__(self, key: str, value: object, message: str = ""):
        self.key = key
        self.value = value
        self.message = message or f"Invalid value for '{key}': {value!r}"
        super().__init__(self.message)
