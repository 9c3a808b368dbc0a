"""YAML configuration provider."""

from typing import Any

import yaml

from ..constants import YAML_EXTENSIONS, YAML_PROVIDER_NAME
from ..utils.flatten import flatten_yaml
from .base import FileConfigurationProvider


class YamlConfigurationProvider(FileConfigurationProvider):
    """Loads ``.yaml`` and ``.yml`` files with ``yaml.safe_load``.

    Leaf values keep the type assigned by the YAML resolver (``42`` is an
    int, ``yes`` a bool, ``2024-01-01`` a date, quoted scalars strings).
    """

    provider_name = YAML_PROVIDER_NAME
    format_name = "YAML"
    extensions = YAML_EXTENSIONS

    def _parse(self, content: bytes) -> dict[str, Any]:
        return flatten_yaml(yaml.safe_load(self._decode(content)))
