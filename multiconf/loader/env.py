"""Environment variable configuration provider.

Sources look like ``env://PREFIX``: every variable whose name starts with
``PREFIX`` becomes an entry, with the prefix removed and the nested separator
turned into ``.``. ``APP_DATABASE__HOST=db`` loaded from ``env://APP_`` gives
``DATABASE.HOST = "db"``. Values are kept as strings.
"""

import logging
import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from ..constants import ENVIRONMENT_PROVIDER_NAME, ENVIRONMENT_SCHEME
from .base import ConfigurationProvider, Source, is_blank

logger = logging.getLogger(__name__)


class EnvironmentConfigurationProvider(ConfigurationProvider):
    """Environment variable configuration provider.

    Supports:
    - Prefix selection through the source string
    - Nested keys from a separator
    - Regex include and exclude filters
    - Optional lower-casing of keys
    """

    def __init__(
        self,
        nested_separator: str = "__",
        lowercase_keys: bool = False,
        include_patterns: Optional[list[str]] = None,
        exclude_patterns: Optional[list[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the environment provider.

        Args:
            nested_separator: Separator for nested keys
            lowercase_keys: Whether to lower-case produced keys
            include_patterns: Regex patterns a variable name must match
            exclude_patterns: Regex patterns that drop a variable name
            environ: Mapping to read instead of ``os.environ``
        """
        self.nested_separator = nested_separator
        self.lowercase_keys = lowercase_keys
        self.include_patterns = include_patterns or []
        self.exclude_patterns = exclude_patterns or []
        self._environ = environ

    @property
    def name(self) -> str:
        return ENVIRONMENT_PROVIDER_NAME

    def can_handle(self, source: Source) -> bool:
        if is_blank(source) or not isinstance(source, str):
            return False
        return source.lower().startswith(ENVIRONMENT_SCHEME)

    def load(self, source: Source) -> dict[str, Any]:
        prefix = str(source)[len(ENVIRONMENT_SCHEME) :]
        config = {}

        for env_key, env_value in self._get_filtered_env_vars(prefix).items():
            config_key = self._env_key_to_config_key(env_key[len(prefix) :])
            if not config_key:
                continue
            config[config_key] = env_value
            logger.debug(f"Loaded env var: {env_key} -> {config_key}")

        logger.info(f"Loaded {len(config)} environment variables with prefix '{prefix}'")
        return config

    def _get_filtered_env_vars(self, prefix: str) -> dict[str, str]:
        """Get environment variables matching the prefix and filters."""
        environ = os.environ if self._environ is None else self._environ
        env_vars = {}

        for key, value in environ.items():
            if not key.startswith(prefix):
                continue

            if self.include_patterns:
                if not any(re.match(pattern, key) for pattern in self.include_patterns):
                    continue

            if self.exclude_patterns:
                if any(re.match(pattern, key) for pattern in self.exclude_patterns):
                    continue

            env_vars[key] = value

        return env_vars

    def _env_key_to_config_key(self, env_key: str) -> str:
        """Convert environment variable name to config key."""
        key = env_key.replace(self.nested_separator, ".")
        if self.lowercase_keys:
            key = key.lower()
        return key
