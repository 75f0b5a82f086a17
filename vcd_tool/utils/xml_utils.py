"""
XML helpers for vCloud API bodies.

vCD answers with namespaced XML (``http://www.vmware.com/vcloud/v1.5`` plus
extension namespaces). Lookups here match on local names so the models do
not have to carry namespace maps around.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, Iterator, Optional

from .constants import NS_OVF, NS_VCLOUD

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

ET.register_namespace("", NS_VCLOUD)
ET.register_namespace("ovf", NS_OVF)


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def parse_xml(content: str, operation: str = "parse response") -> ET.Element:
    """
    Parse an XML document.

    Raises:
        ValueError: If the document is not well-formed XML
    """
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        logging.error("Failed to parse XML during %s: %s", operation, e)
        logging.debug("Content preview: %s", content[:500])
        raise ValueError(f"Invalid XML during {operation}: {e}") from e


def iter_children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield direct children of ``element`` whose local name is ``name``."""
    for child in element:
        if local_name(child.tag) == name:
            yield child


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    """Return the first direct child named ``name``, or None."""
    return next(iter_children(element, name), None)


def find_path(element: ET.Element, *names: str) -> Optional[ET.Element]:
    """Follow a chain of child names, e.g. ``find_path(vapp, "Children", "Vm")``."""
    current: Optional[ET.Element] = element
    for name in names:
        if current is None:
            return None
        current = find_child(current, name)
    return current


def child_text(element: ET.Element, name: str, default: str = "") -> str:
    """Return the stripped text of a child element."""
    child = find_child(element, name)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def parse_bool(value: Optional[str]) -> bool:
    """Decode an ``xs:boolean`` value."""
    return (value or "").strip().lower() in ("true", "1")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def vcloud_tag(name: str) -> str:
    return f"{{{NS_VCLOUD}}}{name}"


def new_element(name: str, attrib: Optional[Dict[str, str]] = None, text: Optional[str] = None) -> ET.Element:
    """Create a vCloud-namespaced element, dropping attributes whose value is None."""
    element = ET.Element(vcloud_tag(name), {k: v for k, v in (attrib or {}).items() if v is not None})
    if text is not None:
        element.text = text
    return element


def add_child(
    parent: ET.Element, name: str, text: Optional[str] = None, attrib: Optional[Dict[str, str]] = None
) -> ET.Element:
    """Append a vCloud-namespaced child element and return it."""
    child = new_element(name, attrib, text)
    parent.append(child)
    return child


def to_xml(element: ET.Element) -> str:
    """Serialize an element as a standalone document with the XML declaration."""
    return XML_HEADER + ET.tostring(element, encoding="unicode")


__all__ = [
    "XML_HEADER",
    "local_name",
    "parse_xml",
    "iter_children",
    "find_child",
    "find_path",
    "child_text",
    "parse_bool",
    "format_bool",
    "vcloud_tag",
    "new_element",
    "add_child",
    "to_xml",
]
