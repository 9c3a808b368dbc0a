"""Configuration exceptions.

Structural and input errors are raised to the caller. Conversion errors are
raised internally by the type converter and recovered by
``ConfigurationService.get_value``.
"""

from os import PathLike
from typing import Any, Optional, Union


class ConfigurationError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigurationArgumentError(ConfigurationError, ValueError):
    """Exception raised when a source, key or provider argument is invalid."""

    def __init__(self, argument: str, message: str):
        super().__init__(message)
        self.argument = argument


class ConfigurationFileNotFoundError(ConfigurationError, FileNotFoundError):
    """Exception raised when a configuration file does not exist."""

    def __init__(self, file_path: Union[str, PathLike]):
        self.file_path = str(file_path)
        super().__init__(f"Configuration file not found at path '{self.file_path}'")

    def __str__(self) -> str:
        # FileNotFoundError formats its args as (errno, strerror) otherwise
        return self.args[0]


class ConfigurationReadError(ConfigurationError):
    """Exception raised when a configuration file exists but cannot be read."""

    def __init__(self, source: Union[str, PathLike], message: str):
        super().__init__(message)
        self.source = str(source)


class ConfigurationParseError(ConfigurationError):
    """Exception raised when a configuration document is malformed."""

    def __init__(
        self, source: Union[str, PathLike], format_name: str, message: str
    ):
        self.source = str(source)
        self.format_name = format_name
        super().__init__(
            f"Failed to parse {format_name} configuration '{self.source}': {message}"
        )


class NoSuitableProviderError(ConfigurationError):
    """Exception raised when no registered provider claims a source."""

    def __init__(self, source: Union[str, PathLike]):
        self.source = str(source)
        super().__init__(
            f"No suitable provider found for configuration source '{self.source}'"
        )


class ConfigurationConversionError(ConfigurationError):
    """Exception raised when a stored value cannot be converted."""

    def __init__(
        self,
        key: Optional[str],
        value: Any,
        target_type: Any,
        reason: Optional[str] = None,
    ):
        self.key = key
        self.source_type = type(value)
        self.target_type = target_type
        target_name = getattr(target_type, "__name__", str(target_type))
        message = (
            f"Cannot convert configuration value for key '{key}' "
            f"from {self.source_type.__name__} to {target_name}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
