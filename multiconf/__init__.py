"""Unified configuration loading from JSON, XML, YAML and custom providers.

Sources are flattened into one dotted-key namespace:

    service = ConfigurationBuilder(ConfigurationService()).load_from(
        "appsettings.json", "overrides.xml"
    ).build()
    port = service.get_value("Server.Port", 8080)
"""

from .builder import ConfigurationBuilder
from .cache import ConfigurationCache
from .exceptions import (
    ConfigurationArgumentError,
    ConfigurationConversionError,
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationParseError,
    ConfigurationReadError,
    NoSuitableProviderError,
)
from .loader import (
    ConfigurationProvider,
    EnvironmentConfigurationProvider,
    JsonConfigurationProvider,
    MemoryConfigurationProvider,
    XmlConfigurationProvider,
    YamlConfigurationProvider,
)
from .registry import ProviderRegistry
from .service import ConfigurationService, get_configuration_service
from .settings import ConfigurationSettings
from .utils.logging import setup_logging

__all__ = [
    "ConfigurationBuilder",
    "ConfigurationCache",
    "ConfigurationService",
    "ConfigurationSettings",
    "ProviderRegistry",
    "get_configuration_service",
    "setup_logging",
    "ConfigurationProvider",
    "JsonConfigurationProvider",
    "XmlConfigurationProvider",
    "YamlConfigurationProvider",
    "MemoryConfigurationProvider",
    "EnvironmentConfigurationProvider",
    "ConfigurationError",
    "ConfigurationArgumentError",
    "ConfigurationFileNotFoundError",
    "ConfigurationReadError",
    "ConfigurationParseError",
    "NoSuitableProviderError",
    "ConfigurationConversionError",
]
