"""Flattening of parsed configuration documents into dotted-key maps.

Every algorithm here emits leaf values only. Nested mappings and elements add
a ``.``-joined segment to the key, sequence items add an ``[i]`` suffix:

    {"A": {"B": 1, "C": [True, "x"]}}
    -> {"A.B": 1, "A.C[0]": True, "A.C[1]": "x"}
"""

from collections.abc import Mapping
from typing import Any, Optional
from xml.etree import ElementTree as ET


def join_key(prefix: str, segment: Any) -> str:
    """Append a structural segment to a key prefix."""
    return f"{prefix}.{segment}" if prefix else str(segment)


def flatten_tree(
    node: Any, prefix: str = "", result: Optional[dict[str, Any]] = None
) -> dict[str, Any]:
    """Flatten a tree of mappings, sequences and scalars.

    Args:
        node: Parsed document node
        prefix: Key of ``node`` itself
        result: Map to add entries to (a new one if None)

    Returns:
        Flat map of dotted keys to leaf values
    """
    if result is None:
        result = {}

    if isinstance(node, Mapping):
        for key, value in node.items():
            flatten_tree(value, join_key(prefix, key), result)
    elif isinstance(node, (list, tuple)):
        for index, item in enumerate(node):
            flatten_tree(item, f"{prefix}[{index}]", result)
    else:
        result[prefix] = node

    return result


def _flatten_root(root: Any) -> dict[str, Any]:
    if root is None:
        return {}
    if not isinstance(root, (Mapping, list, tuple)):
        raise TypeError(
            f"document root must be a mapping or a sequence, got {type(root).__name__}"
        )
    return flatten_tree(root)


def flatten_json(root: Any) -> dict[str, Any]:
    """Flatten a decoded JSON document.

    Every top-level key is an object member, so the root must be an object.

    Raises:
        TypeError: If the document root is not an object
    """
    if root is not None and not isinstance(root, Mapping):
        raise TypeError(f"document root must be an object, got {type(root).__name__}")
    return _flatten_root(root)


def flatten_yaml(root: Any) -> dict[str, Any]:
    """Flatten a loaded YAML document.

    Leaf scalars keep the type the YAML resolver gave them. Non-string mapping
    keys are joined using ``str()``.

    Raises:
        TypeError: If the document root is a scalar
    """
    return _flatten_root(root)


def _local_name(tag: str) -> str:
    # "{uri}name" -> "name"
    return tag.rsplit("}", 1)[-1]


def _is_setting(element: ET.Element) -> bool:
    attributes = element.attrib
    return len(attributes) >= 2 and "name" in attributes and "value" in attributes


def _flatten_element(
    node: ET.Element, prefix: str, result: dict[str, Any]
) -> None:
    for child in node:
        # Comments and processing instructions carry a non-string tag
        if not isinstance(child.tag, str):
            continue

        if _is_setting(child):
            result[join_key(prefix, child.attrib["name"])] = child.attrib["value"]
            continue

        key = join_key(prefix, _local_name(child.tag))
        if len(child):
            _flatten_element(child, key, result)
        else:
            result[key] = (child.text or "").strip()


def flatten_xml(root: Optional[ET.Element]) -> dict[str, str]:
    """Flatten an XML document starting below its root element.

    Rules, applied to each child element:

    - ``<setting name="K" value="V" />`` (two or more attributes including
      ``name`` and ``value``) emits ``K`` and is not descended into.
    - An element with child nodes other than text is descended into. Comments
      and processing instructions count as child nodes when the parser keeps
      them, and never emit entries themselves.
    - Any other element emits its trimmed text, ``""`` when empty.

    The root element name is not part of any key and all values are strings.
    """
    result: dict[str, str] = {}
    if root is not None:
        _flatten_element(root, "", result)
    return result
