"""In-memory configuration provider."""

import logging
import threading
from collections.abc import Mapping
from typing import Any, Optional

from ..constants import MEMORY_PROVIDER_NAME, MEMORY_SCHEME
from ..exceptions import ConfigurationArgumentError
from ..utils.flatten import flatten_tree
from .base import ConfigurationProvider, Source, is_blank

logger = logging.getLogger(__name__)


class MemoryConfigurationProvider(ConfigurationProvider):
    """Serves values held in memory to any source starting with its scheme.

    Example:
        provider = MemoryConfigurationProvider()
        provider.set("Custom.Key1", "custom-value-1")
        service.register_provider(provider)
        service.load_configuration("memory://defaults")
    """

    def __init__(
        self,
        name: str = MEMORY_PROVIDER_NAME,
        scheme: str = MEMORY_SCHEME,
        values: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the provider.

        Args:
            name: Provider name
            scheme: Source prefix claimed by this provider, matched ignoring case
            values: Initial values, nested mappings are flattened
        """
        if is_blank(name):
            raise ConfigurationArgumentError("name", "Provider name cannot be empty")
        if is_blank(scheme):
            raise ConfigurationArgumentError("scheme", "Provider scheme cannot be empty")

        self._name = name
        self.scheme = scheme
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()
        if values:
            self.update(values)

    @property
    def name(self) -> str:
        return self._name

    def can_handle(self, source: Source) -> bool:
        if is_blank(source) or not isinstance(source, str):
            return False
        return source.lower().startswith(self.scheme.lower())

    def set(self, key: str, value: Any) -> None:
        """Store a single flat entry."""
        if is_blank(key):
            raise ConfigurationArgumentError("key", "Configuration key cannot be empty")
        with self._lock:
            self._values[key] = value

    def update(self, values: Mapping[str, Any]) -> None:
        """Store many entries, flattening nested mappings and sequences."""
        flat = flatten_tree(values)
        with self._lock:
            self._values.update(flat)

    def load(self, source: Source) -> dict[str, Any]:
        with self._lock:
            result = dict(self._values)
        logger.debug(f"Serving {len(result)} in-memory entries for {source}")
        return result
