"""Shared fixtures for multiconf tests."""

import json
from pathlib import Path

import pytest

from multiconf.service import ConfigurationService


@pytest.fixture
def service():
    """Independent service with the built-in providers."""
    return ConfigurationService()


@pytest.fixture
def write_file(tmp_path):
    """Write text content to a file under tmp_path and return its path."""

    def _write(name: str, content: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def write_json(write_file):
    """Serialize a dictionary to a JSON file under tmp_path."""

    def _write(name: str, data: dict) -> Path:
        return write_file(name, json.dumps(data))

    return _write
