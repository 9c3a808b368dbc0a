"""JSON configuration provider."""

import json
from typing import Any, Optional, Union

from ..constants import INT64_MAX, INT64_MIN, JSON_EXTENSION, JSON_PROVIDER_NAME
from ..utils.flatten import flatten_json
from .base import FileConfigurationProvider


def _parse_int(literal: str) -> Union[int, float]:
    value = int(literal)
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return float(literal)


def _comment_end(text: str, start: int) -> int:
    """Return the index just past the comment starting at ``start``."""
    if text[start + 1] == "/":
        end = text.find("\n", start)
        return len(text) if end == -1 else end

    end = text.find("*/", start + 2)
    if end == -1:
        raise ValueError(f"Unterminated comment starting at position {start}")
    return end + 2


def strip_comments_and_trailing_commas(text: str) -> str:
    """Blank out ``//`` and ``/* */`` comments and trailing commas.

    String literals are left untouched. Removed characters become spaces and
    line breaks are kept, so decoder error positions still match the file.

    Raises:
        ValueError: If a block comment is not closed
    """
    chars = list(text)
    pending_comma: Optional[int] = None
    in_string = False
    i = 0

    while i < len(chars):
        ch = chars[i]

        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            pending_comma = None
        elif ch == "/" and i + 1 < len(chars) and chars[i + 1] in "/*":
            end = _comment_end(text, i)
            for j in range(i, end):
                if chars[j] not in "\r\n":
                    chars[j] = " "
            i = end
            continue
        elif ch == ",":
            pending_comma = i
        elif ch in "}]":
            if pending_comma is not None:
                chars[pending_comma] = " "
            pending_comma = None
        elif not ch.isspace():
            pending_comma = None

        i += 1

    return "".join(chars)


class JsonConfigurationProvider(FileConfigurationProvider):
    """Loads ``.json`` files.

    Scalars keep their inferred JSON type: ``true``/``false`` become bool,
    integral literals int, other numbers float, ``null`` None. Comments and
    trailing commas, common in hand-edited settings files, are accepted.
    """

    provider_name = JSON_PROVIDER_NAME
    format_name = "JSON"
    extensions = (JSON_EXTENSION,)

    def _parse(self, content: bytes) -> dict[str, Any]:
        text = strip_comments_and_trailing_commas(self._decode(content))
        if not text.strip():
            return {}
        return flatten_json(json.loads(text, parse_int=_parse_int))
