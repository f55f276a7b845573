"""
XML utilities for DOCX documents.

Namespace handling and small lxml helpers shared by the parsers and the
exporters.
"""

from typing import Dict, Optional

from lxml import etree

from ..exceptions import PackageCorruptError

NAMESPACES: Dict[str, str] = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
    'mc': 'http://schemas.openxmlformats.org/markup-compatibility/2006',
    'rels': 'http://schemas.openxmlformats.org/package/2006/relationships',
    'ct': 'http://schemas.openxmlformats.org/package/2006/content-types',
    'xml': 'http://www.w3.org/XML/1998/namespace',
}

W_NS = NAMESPACES['w']
XML_SPACE = f"{{{NAMESPACES['xml']}}}space"

# Namespace map used when creating parts from scratch
DEFAULT_NSMAP = {
    'w': NAMESPACES['w'],
    'r': NAMESPACES['r'],
}

_PARSER = etree.XMLParser(resolve_entities=False, remove_blank_text=False, huge_tree=True)


def qn(tag: str) -> str:
    """
    Convert a prefixed tag (``w:p``) into Clark notation (``{ns}p``).

    Args:
        tag: prefixed tag name

    Returns:
        Clark-notation tag name
    """
    if tag.startswith('{'):
        return tag
    prefix, _, local = tag.partition(':')
    if not local:
        return tag
    return f"{{{NAMESPACES[prefix]}}}{local}"


def local_name(tag: str) -> str:
    """Strip the namespace from a Clark-notation tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit('}', 1)[-1]


def is_w(element: etree._Element, local: Optional[str] = None) -> bool:
    """True if ``element`` lives in the main WordprocessingML namespace."""
    tag = element.tag
    if not isinstance(tag, str) or not tag.startswith(f"{{{W_NS}}}"):
        return False
    return local is None or local_name(tag) == local


def get_w_attr(element: etree._Element, name: str) -> Optional[str]:
    """Read a ``w:``-namespaced attribute."""
    return element.get(qn(f"w:{name}"))


def set_w_attr(element: etree._Element, name: str, value: str) -> None:
    element.set(qn(f"w:{name}"), value)


def w_element(tag: str, **attrs: str) -> etree._Element:
    """Create a ``w:`` element with ``w:`` attributes."""
    element = etree.Element(qn(f"w:{tag}"), nsmap={'w': W_NS})
    for key, value in attrs.items():
        if value is not None:
            set_w_attr(element, key, value)
    return element


def w_sub(parent: etree._Element, tag: str, **attrs: str) -> etree._Element:
    """Append a ``w:`` child element."""
    element = etree.SubElement(parent, qn(f"w:{tag}"))
    for key, value in attrs.items():
        if value is not None:
            set_w_attr(element, key, value)
    return element


def parse_xml(data: bytes, part_name: str = "") -> etree._Element:
    """
    Parse a package part.

    Raises:
        PackageCorruptError: if the part is not well-formed XML
    """
    try:
        return etree.fromstring(data, parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        raise PackageCorruptError("Malformed XML part", str(exc), package_path=part_name or None) from exc


def serialize_xml(root: etree._Element) -> bytes:
    """Serialize a part with the XML declaration Word writes."""
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", standalone=True)


def parse_on_off(value: Optional[str]) -> Optional[bool]:
    """
    Interpret an ``ST_OnOff`` attribute; a missing ``w:val`` means on.

    Returns:
        True/False, or None if the value is not a recognized on/off string
    """
    if value is None:
        return True
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'on'):
        return True
    if lowered in ('0', 'false', 'off', 'none'):
        return False
    return None
