# ABOUTME: Decodes uploaded JSON and XML documents into plain untyped trees
# ABOUTME: XML drops the root element, repeats become lists, attributes and text become keys

import json
from enum import Enum
from pathlib import PurePath

from lxml import etree
from pydantic import JsonValue

from hotel_converter.core.exceptions import DocumentDecodeError, HotelValidationError

# Key holding an element's own text when it also has attributes or children
XML_TEXT_KEY = ""


class DocumentFormat(str, Enum):
    """Supported upload formats, keyed by file extension."""

    XML = "xml"
    JSON = "json"

    @classmethod
    def from_filename(cls, filename: str) -> "DocumentFormat":
        """Resolve the format from the file extension, case-insensitively.

        Raises:
            HotelValidationError: If the extension is not a supported format
        """
        extension = PurePath(filename).suffix.lstrip(".")
        try:
            return cls(extension.lower())
        except ValueError:
            raise HotelValidationError(f"Unsupported file type: {extension}") from None


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _element_to_tree(element: etree._Element) -> JsonValue:
    """Convert one element; leaves become strings, everything else a mapping."""
    children = [child for child in element if isinstance(child.tag, str)]
    text = (element.text or "").strip()

    if not children and not element.attrib:
        return text

    node: dict[str, JsonValue] = {}
    for name, value in element.attrib.items():
        node[etree.QName(name).localname] = value

    for child in children:
        name = _local_name(child)
        value = _element_to_tree(child)
        if name not in node:
            node[name] = value
        elif isinstance(node[name], list):
            node[name].append(value)  # type: ignore[union-attr]
        else:
            node[name] = [node[name], value]

    if text:
        node[XML_TEXT_KEY] = text
    return node


def _decode_xml(content: bytes) -> JsonValue:
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)
    root = etree.fromstring(content, parser=parser)
    return _element_to_tree(root)


def decode_document(content: bytes, document_format: DocumentFormat) -> JsonValue:
    """Decode raw document bytes into an untyped tree.

    The XML root element itself is not kept; its children become the top-level
    mapping. Repeated sibling elements become lists, attributes become keys,
    and element text sits under the empty-string key when the element also has
    attributes or children.

    Args:
        content: Raw file bytes
        document_format: Format resolved from the filename

    Returns:
        Decoded mapping/list/scalar tree

    Raises:
        DocumentDecodeError: If the content is malformed
    """
    try:
        if document_format is DocumentFormat.JSON:
            return json.loads(content)
        return _decode_xml(content)
    except (ValueError, etree.XMLSyntaxError) as e:
        raise DocumentDecodeError(f"Malformed {document_format.value} content: {e}") from e
