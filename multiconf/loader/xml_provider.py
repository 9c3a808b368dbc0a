"""XML configuration provider."""

import codecs
from typing import Any
from xml.etree import ElementTree as ET
from xml.parsers.expat import errors as expat_errors

from ..constants import XML_EXTENSION, XML_PROVIDER_NAME
from ..utils.flatten import flatten_xml
from .base import FileConfigurationProvider

_NO_ELEMENTS = expat_errors.codes[expat_errors.XML_ERROR_NO_ELEMENTS]


def _has_start_tag(content: bytes) -> bool:
    parser = ET.XMLPullParser(events=("start",))
    parser.feed(content)
    try:
        for _ in parser.read_events():
            return True
    except ET.ParseError:
        pass
    return False


class XmlConfigurationProvider(FileConfigurationProvider):
    """Loads ``.xml`` files.

    The document is handed to the parser as bytes so that the BOM and the
    XML declaration decide the encoding, UTF-8 otherwise. All values are
    strings. Comments and processing instructions are kept in the tree, so an
    element holding only a comment is treated as a container, not a value.
    A document without a root element yields an empty map.
    """

    provider_name = XML_PROVIDER_NAME
    format_name = "XML"
    extensions = (XML_EXTENSION,)

    def _parse(self, content: bytes) -> dict[str, Any]:
        if not content.removeprefix(codecs.BOM_UTF8).strip():
            return {}

        parser = ET.XMLParser(
            target=ET.TreeBuilder(insert_comments=True, insert_pis=True)
        )
        try:
            root = ET.fromstring(content, parser=parser)
        except ET.ParseError as e:
            # Declaration, comments or whitespace only; a truncated element still fails
            if e.code == _NO_ELEMENTS and not _has_start_tag(content):
                return {}
            raise
        return flatten_xml(root)
