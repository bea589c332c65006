"""Errors raised while wiring the library together."""


class UtilError(Exception):
    """Base utility error."""


class ConfigurationError(UtilError):
    """A setting is missing or unusable for the current environment."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"{setting}: {message}")


class DependencyInjectionError(UtilError):
    """No provider implementation exists for a requested component."""
