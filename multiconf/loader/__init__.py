"""Configuration provider package.

Built-in providers handle JSON, XML and YAML files selected by extension.
The memory and environment providers serve sources addressed by scheme
(``memory://``, ``env://``) and are registered explicitly.
"""

from .base import ConfigurationProvider, FileConfigurationProvider
from .env import EnvironmentConfigurationProvider
from .json_provider import JsonConfigurationProvider
from .memory import MemoryConfigurationProvider
from .xml_provider import XmlConfigurationProvider
from .yaml_provider import YamlConfigurationProvider

__all__ = [
    "ConfigurationProvider",
    "FileConfigurationProvider",
    "JsonConfigurationProvider",
    "XmlConfigurationProvider",
    "YamlConfigurationProvider",
    "MemoryConfigurationProvider",
    "EnvironmentConfigurationProvider",
]
