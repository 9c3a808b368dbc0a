"""Fluent setup of a ConfigurationService."""

from typing import Optional

from .loader.base import ConfigurationProvider, Source
from .service import ConfigurationService, get_configuration_service


class ConfigurationBuilder:
    """Registers providers and loads sources on a service, then returns it.

    Example:
        service = (
            ConfigurationBuilder.create_default()
            .add_provider(MemoryConfigurationProvider(values={"App": {"Name": "x"}}))
            .load_from("appsettings.json", "overrides.yaml", "memory://defaults")
            .build()
        )
    """

    def __init__(self, service: Optional[ConfigurationService] = None):
        """Initialize the builder.

        Args:
            service: Service to configure (the process-wide one if None)
        """
        self._service = service or get_configuration_service()

    @classmethod
    def create_default(cls) -> "ConfigurationBuilder":
        """Builder over the process-wide service."""
        return cls()

    def add_provider(self, provider: ConfigurationProvider) -> "ConfigurationBuilder":
        self._service.register_provider(provider)
        return self

    def load_from(self, *sources: Source) -> "ConfigurationBuilder":
        """Load sources in order; later sources override earlier keys.

        Stops at the first failing source, sources before it stay merged.
        """
        for source in sources:
            self._service.load_configuration(source)
        return self

    def build(self) -> ConfigurationService:
        return self._service
