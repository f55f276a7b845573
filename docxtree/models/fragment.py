"""Opaque XML fragments kept for round-trip fidelity."""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from ..utils.xml_utils import local_name


@dataclass(frozen=True)
class OpaqueFragment:
    """
    Serialized XML that the model does not interpret.

    The fragment is captured on load, attached to the node that owned it and
    written back unchanged on save. Namespace declarations the fragment needs
    travel with it.
    """

    xml: bytes
    tag: str = field(default="", compare=False)

    @classmethod
    def from_element(cls, element: etree._Element) -> "OpaqueFragment":
        data = etree.tostring(element, with_tail=False, encoding="UTF-8")
        return cls(xml=data, tag=element.tag if isinstance(element.tag, str) else "")

    @classmethod
    def shell_of(cls, element: etree._Element) -> "OpaqueFragment":
        """The element's tag, attributes and namespace declarations without its children."""
        shell = etree.Element(element.tag, attrib=dict(element.attrib), nsmap=element.nsmap)
        return cls.from_element(shell)

    def to_element(self) -> etree._Element:
        """Fresh element tree for this fragment."""
        return etree.fromstring(self.xml)

    @property
    def local_name(self) -> str:
        return local_name(self.tag)

    def __repr__(self) -> str:
        return f"OpaqueFragment(<{self.local_name or '?'}>, {len(self.xml)} bytes)"
