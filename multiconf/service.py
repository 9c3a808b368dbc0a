"""Configuration service: provider selection, merging and typed lookups."""

import asyncio
import inspect
import logging
import threading
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from .cache import ConfigurationCache
from .exceptions import (
    ConfigurationArgumentError,
    ConfigurationConversionError,
    ConfigurationError,
    NoSuitableProviderError,
)
from .loader import (
    ConfigurationProvider,
    JsonConfigurationProvider,
    XmlConfigurationProvider,
    YamlConfigurationProvider,
)
from .loader.base import Source, is_blank
from .registry import ProviderRegistry
from .settings import ConfigurationSettings
from .utils.converter import TypeConverter

# Default types that get_value infers a conversion target from
_INFERABLE_TYPES = (str, int, float, bool, Decimal, Enum)


class ConfigurationService:
    """Central configuration interface.

    Owns a provider registry and a flat configuration cache. Every public
    operation runs under one non-reentrant lock, so providers must not call
    back into the service from ``load``.
    """

    def __init__(
        self,
        settings: Optional[ConfigurationSettings] = None,
        logger: Optional[logging.Logger] = None,
        converter: Optional[TypeConverter] = None,
    ):
        """Initialize the configuration service.

        Args:
            settings: Engine settings (defaults if None)
            logger: Logger receiving load, merge and conversion events
            converter: Type converter used by ``get_value``
        """
        self.settings = settings or ConfigurationSettings()
        self.logger = logger or logging.getLogger(__name__)
        self._converter = converter or TypeConverter()
        self._registry = ProviderRegistry()
        self._cache = ConfigurationCache()
        self._lock = threading.Lock()

        if self.settings.register_builtin_providers:
            self._register_builtin_providers()

    def _register_builtin_providers(self) -> None:
        encoding = self.settings.encoding
        for provider in (
            JsonConfigurationProvider(encoding=encoding),
            XmlConfigurationProvider(encoding=encoding),
            YamlConfigurationProvider(encoding=encoding),
        ):
            self.register_provider(provider)
        self._log(
            logging.DEBUG,
            "Registered built-in configuration providers: JSON, XML, YAML",
        )

    def _log(
        self, level: int, message: str, error: Optional[BaseException] = None
    ) -> None:
        self.logger.log(level, message, exc_info=error)

    @property
    def providers(self) -> list[str]:
        """Registered provider names in lookup order."""
        with self._lock:
            return self._registry.names

    def register_provider(self, provider: ConfigurationProvider) -> None:
        """Register a provider; a name that is already taken is ignored.

        Raises:
            ConfigurationArgumentError: If provider is None
        """
        if provider is None:
            raise ConfigurationArgumentError("provider", "Provider cannot be None")

        with self._lock:
            self._registry.register(provider)

    def load_configuration(self, source: Source) -> dict[str, Any]:
        """Load a source and merge its entries into the cache.

        Args:
            source: File path or provider-specific source string

        Returns:
            Copy of the whole cache after the merge

        Raises:
            ConfigurationArgumentError: If source is empty
            NoSuitableProviderError: If no provider claims the source
            ConfigurationFileNotFoundError: If the source file is missing
            ConfigurationParseError: If the document is malformed
        """
        self._validate_source(source)

        with self._lock:
            provider = self._find_provider(source)
            try:
                entries = provider.load(source)
            except Exception as e:
                self._log(logging.ERROR, f"Failed to load configuration: {source}", e)
                raise
            return self._merge(provider, source, entries)

    async def load_configuration_async(self, source: Source) -> dict[str, Any]:
        """Asynchronous variant of ``load_configuration``.

        The provider's ``load_async`` is awaited when it has one, otherwise
        ``load`` runs in a worker thread. The lock is only taken, from a
        worker thread, to resolve the provider and to merge, so a concurrent
        synchronous load never stalls the event loop.
        """
        self._validate_source(source)

        provider = await asyncio.to_thread(self._find_provider_locked, source)

        try:
            load_async = getattr(provider, "load_async", None)
            if load_async is not None and inspect.iscoroutinefunction(load_async):
                entries = await load_async(source)
            else:
                entries = await asyncio.to_thread(provider.load, source)
        except Exception as e:
            self._log(logging.ERROR, f"Failed to load configuration: {source}", e)
            raise

        return await asyncio.to_thread(self._merge_locked, provider, source, entries)

    def _find_provider_locked(self, source: Source) -> ConfigurationProvider:
        with self._lock:
            return self._find_provider(source)

    def _merge_locked(
        self, provider: ConfigurationProvider, source: Source, entries: Any
    ) -> dict[str, Any]:
        with self._lock:
            return self._merge(provider, source, entries)

    def _find_provider(self, source: Source) -> ConfigurationProvider:
        provider = self._registry.find_provider(source)
        if provider is None:
            error = NoSuitableProviderError(source)
            self._log(logging.ERROR, str(error))
            raise error
        return provider

    def _merge(
        self, provider: ConfigurationProvider, source: Source, entries: Any
    ) -> dict[str, Any]:
        """Merge a provider's flat map into the cache. Caller holds the lock."""
        if not isinstance(entries, Mapping):
            error = ConfigurationError(
                f"Provider {provider.name} returned {type(entries).__name__} "
                f"instead of a mapping for '{source}'"
            )
            self._log(logging.ERROR, str(error))
            raise error

        entries = dict(entries)
        self._log(
            logging.DEBUG, f"Loaded {len(entries)} configuration entries from {source}"
        )
        if self.settings.log_loaded_entries:
            for key, value in entries.items():
                self._log(
                    logging.DEBUG,
                    f"  Key: '{key}', Value: '{value}' ({type(value).__name__})",
                )

        size = self._cache.merge(entries)
        self._log(logging.DEBUG, f"Cache now contains {size} entries")
        self._log(
            logging.INFO,
            f"Successfully loaded configuration from {source} ({provider.name})",
        )
        return self._cache.snapshot()

    def get_value(
        self, key: str, default: Any = None, type_hint: Optional[Any] = None
    ) -> Any:
        """Get a configuration value converted to the requested type.

        The target type is ``type_hint`` or, without one, the type of a
        scalar ``default``. With neither the stored value is returned as is.
        A value that cannot be converted is logged and ``default`` returned.

        Args:
            key: Dotted configuration key
            default: Value returned when the key is missing or unconvertible
            type_hint: Target type, ``Optional[T]`` and enums allowed

        Returns:
            Converted value or default

        Raises:
            ConfigurationArgumentError: If key is empty
        """
        self._validate_key(key)

        target_type = type_hint
        if target_type is None and isinstance(default, _INFERABLE_TYPES):
            target_type = type(default)

        with self._lock:
            found, value = self._cache.lookup(key)
            if not found:
                self._log(
                    logging.DEBUG,
                    f"Configuration key not found, returning default value: {key}",
                )
                return default

            if target_type is None:
                return value

            try:
                return self._converter.convert(value, target_type, key)
            except ConfigurationConversionError as e:
                target_name = getattr(target_type, "__name__", str(target_type))
                self._log(
                    logging.WARNING,
                    f"Configuration value conversion failed: {key} -> {target_name}",
                    e,
                )
                return default

    def set_value(self, key: str, value: Any) -> None:
        """Set a configuration value, replacing any existing one.

        Raises:
            ConfigurationArgumentError: If key is empty
        """
        self._validate_key(key)

        with self._lock:
            self._cache.set(key, value)
            self._log(logging.DEBUG, f"Set configuration value: {key} = {value}")

    def contains_key(self, key: str) -> bool:
        """Return True if the key is present; False for empty keys."""
        if is_blank(key) or not isinstance(key, str):
            return False

        with self._lock:
            return self._cache.contains(key)

    def get_all_keys(self) -> list[str]:
        """Return all configuration keys."""
        with self._lock:
            return self._cache.keys()

    def get_all(self, prefix: Optional[str] = None) -> dict[str, Any]:
        """Get a copy of all configuration values.

        Args:
            prefix: Optional prefix to filter keys

        Returns:
            Dictionary of configuration values
        """
        with self._lock:
            return self._cache.snapshot(prefix)

    def refresh(self) -> None:
        """Clear all configuration values. Providers stay registered."""
        with self._lock:
            self._cache.clear()
            self._log(logging.INFO, "Configuration cache cleared")

    @staticmethod
    def _validate_source(source: Source) -> None:
        if is_blank(source):
            raise ConfigurationArgumentError(
                "source", "Configuration source path cannot be empty"
            )

    @staticmethod
    def _validate_key(key: str) -> None:
        if not isinstance(key, str) or not key.strip():
            raise ConfigurationArgumentError("key", "Configuration key cannot be empty")


_default_service: Optional[ConfigurationService] = None
_default_service_lock = threading.Lock()


def get_configuration_service() -> ConfigurationService:
    """Return the process-wide service, creating it on first use.

    Settings are read from ``MULTICONF_*`` environment variables at creation.
    """
    global _default_service
    if _default_service is None:
        with _default_service_lock:
            if _default_service is None:
                _default_service = ConfigurationService(
                    settings=ConfigurationSettings.from_environment()
                )
    return _default_service
