"""Flattening, type conversion and logging helpers."""

from .converter import ConversionStrategy, TypeConverter
from .flatten import flatten_json, flatten_tree, flatten_xml, flatten_yaml
from .logging import setup_logging

__all__ = [
    "ConversionStrategy",
    "TypeConverter",
    "flatten_json",
    "flatten_tree",
    "flatten_xml",
    "flatten_yaml",
    "setup_logging",
]
