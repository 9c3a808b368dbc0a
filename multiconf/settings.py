"""Settings for the configuration engine itself."""

import codecs
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfigurationSettings(BaseModel):
    """Behaviour switches for ``ConfigurationService`` and its providers."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    encoding: str = Field(
        default="utf-8-sig",
        description="Text encoding used to read JSON and YAML files",
    )
    register_builtin_providers: bool = Field(
        default=True,
        description="Register the JSON, XML and YAML providers on construction",
    )
    log_loaded_entries: bool = Field(
        default=False,
        description="Log every loaded and merged entry at DEBUG level",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v):
        """Validate that the encoding is known to the codec registry."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @classmethod
    def from_environment(
        cls, prefix: str = "MULTICONF_", environ: Optional[dict[str, str]] = None
    ) -> "ConfigurationSettings":
        """Build settings from ``<PREFIX><FIELD_NAME>`` environment variables.

        Args:
            prefix: Environment variable prefix
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Settings with environment overrides applied

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name in cls.model_fields:
            env_key = f"{prefix}{field_name}".upper()
            if env_key in environ:
                values[field_name] = environ[env_key].strip()
        return cls(**values)
