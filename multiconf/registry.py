"""Ordered registry of configuration providers."""

import logging
from collections.abc import Iterator
from typing import Optional

from .exceptions import ConfigurationArgumentError
from .loader.base import ConfigurationProvider, Source

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Providers in registration order, unique by case-insensitive name.

    Lookups return the first provider whose ``can_handle`` accepts a source,
    so a custom provider registered after the built-ins is consulted last.
    Not thread-safe on its own; ``ConfigurationService`` guards it.
    """

    def __init__(self):
        self._providers: list[ConfigurationProvider] = []

    def register(self, provider: ConfigurationProvider) -> bool:
        """Append a provider unless one with the same name exists.

        Args:
            provider: Provider to register

        Returns:
            True if added, False if the name was already taken

        Raises:
            ConfigurationArgumentError: If provider is None or lacks the
                provider interface
        """
        if provider is None:
            raise ConfigurationArgumentError("provider", "Provider cannot be None")
        for attribute in ("name", "can_handle", "load"):
            if not hasattr(provider, attribute):
                raise ConfigurationArgumentError(
                    "provider", f"Provider {provider!r} has no '{attribute}'"
                )
        if not isinstance(provider.name, str) or not provider.name.strip():
            raise ConfigurationArgumentError("provider", "Provider name cannot be empty")

        if provider.name.casefold() in self:
            logger.debug(f"Configuration provider already registered: {provider.name}")
            return False

        self._providers.append(provider)
        logger.debug(f"Registered configuration provider: {provider.name}")
        return True

    def find_provider(self, source: Source) -> Optional[ConfigurationProvider]:
        """Return the first registered provider that can handle ``source``."""
        for provider in self._providers:
            if provider.can_handle(source):
                return provider
        return None

    def get(self, name: str) -> Optional[ConfigurationProvider]:
        """Return the provider registered under ``name``, ignoring case."""
        folded = name.casefold()
        for provider in self._providers:
            if provider.name.casefold() == folded:
                return provider
        return None

    @property
    def names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[ConfigurationProvider]:
        return iter(list(self._providers))

    def __len__(self) -> int:
        return len(self._providers)
