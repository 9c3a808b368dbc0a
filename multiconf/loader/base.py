"""Provider interface and shared file handling for configuration sources."""

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path, PurePath
from typing import Any, Union

from ..exceptions import (
    ConfigurationArgumentError,
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationParseError,
    ConfigurationReadError,
)

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike]


def is_blank(source: Any) -> bool:
    """Return True for None and for sources that are empty or whitespace."""
    if source is None:
        return True
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    return not str(source).strip()


class ConfigurationProvider(ABC):
    """A named strategy that loads one class of configuration sources.

    ``load`` returns a new flat map on every call: dotted keys mapped to leaf
    values, never nested containers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name, unique under case-insensitive comparison."""

    @abstractmethod
    def can_handle(self, source: Source) -> bool:
        """Return True if this provider understands ``source``."""

    @abstractmethod
    def load(self, source: Source) -> dict[str, Any]:
        """Load and flatten ``source``."""

    async def load_async(self, source: Source) -> dict[str, Any]:
        """Load ``source`` without blocking the event loop."""
        return await asyncio.to_thread(self.load, source)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class FileConfigurationProvider(ConfigurationProvider):
    """Base class for providers that read a file selected by its extension.

    Subclasses set ``provider_name``, ``format_name`` and ``extensions`` and
    implement ``_parse``.
    """

    provider_name: str = ""
    format_name: str = ""
    extensions: tuple[str, ...] = ()

    def __init__(self, encoding: str = "utf-8-sig"):
        """Initialize the provider.

        Args:
            encoding: Text encoding for formats that decode the file as text
        """
        self.encoding = encoding

    @property
    def name(self) -> str:
        return self.provider_name

    def can_handle(self, source: Source) -> bool:
        """Match the end of the file name against the extensions, ignoring case.

        A bare dotfile such as ``.json`` counts as having that extension.
        """
        if is_blank(source):
            return False
        file_name = PurePath(os.fspath(source)).name.lower()
        return file_name.endswith(self.extensions)

    def load(self, source: Source) -> dict[str, Any]:
        """Read, parse and flatten a configuration file.

        Raises:
            ConfigurationArgumentError: If source is empty
            ConfigurationFileNotFoundError: If the file does not exist
            ConfigurationReadError: If the file cannot be read
            ConfigurationParseError: If the document is malformed
        """
        path = self._validate_source(source)
        content = self._read(path)
        return self._parse_content(path, content)

    async def load_async(self, source: Source) -> dict[str, Any]:
        """Read the file in a worker thread, then parse and flatten it."""
        path = self._validate_source(source)
        content = await asyncio.to_thread(self._read, path)
        return self._parse_content(path, content)

    def _validate_source(self, source: Source) -> Path:
        if is_blank(source):
            raise ConfigurationArgumentError(
                "source", "Configuration source path cannot be empty or whitespace"
            )

        path = Path(os.fspath(source))
        if not path.exists():
            raise ConfigurationFileNotFoundError(path)
        if not path.is_file():
            raise ConfigurationReadError(path, f"Path is not a file: {path}")
        return path

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ConfigurationReadError(
                path, f"Failed to read configuration file {path}: {e}"
            ) from e

    def _decode(self, content: bytes) -> str:
        return content.decode(self.encoding)

    def _parse_content(self, path: Path, content: bytes) -> dict[str, Any]:
        try:
            result = self._parse(content)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationParseError(path, self.format_name, str(e)) from e

        logger.debug(
            f"Parsed {len(result)} entries from {path} ({self.format_name})"
        )
        return result

    @abstractmethod
    def _parse(self, content: bytes) -> dict[str, Any]:
        """Parse raw file content into a flat map."""
