"""
XML parser for the main document part.

Builds the :class:`Body` tree from ``word/document.xml``. Paragraphs and
runs are modelled; every other element is attached to its owner as an
opaque fragment so it can be written back unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from ..models.body import Body, UnknownBlock
from ..models.fragment import OpaqueFragment
from ..models.paragraph import Paragraph
from ..models.run import Run
from ..styles.style_manager import StyleManager
from ..utils.enums import StyleType
from ..utils.xml_utils import get_w_attr, is_w, parse_xml, qn
from .properties_parser import PropertiesParser

logger = logging.getLogger(__name__)

# w:br types that read back as a plain line break
_LINE_BREAK_TYPES = (None, "textWrapping")


@dataclass
class DocumentShell:
    """
    What surrounds the body in the main document part.

    Attributes:
        root: ``w:document`` with its attributes and namespace declarations
        body: ``w:body`` with its attributes
        leading: ``w:document`` children before the body (``w:background``)
        trailing: ``w:document`` children after the body
    """

    root: OpaqueFragment
    body: OpaqueFragment
    leading: List[OpaqueFragment] = field(default_factory=list)
    trailing: List[OpaqueFragment] = field(default_factory=list)


class XMLParser:
    """
    Parser for ``word/document.xml``.

    Style references are stored by name; the catalog must be loaded first so
    that ``w:pStyle``/``w:rStyle`` ids can be translated. Unknown ids are kept
    as names and reported when formatting is resolved.
    """

    def __init__(self, properties_parser: PropertiesParser, styles: StyleManager):
        self.properties_parser = properties_parser
        self.styles = styles

    def parse(self, data: bytes, part_name: str = "word/document.xml"):
        """
        Returns:
            (body, shell)
        """
        root = parse_xml(data, part_name)
        body = Body()
        leading: List[OpaqueFragment] = []
        trailing: List[OpaqueFragment] = []
        body_element: Optional[etree._Element] = None

        for child in root:
            if body_element is None and is_w(child, "body"):
                body_element = child
            elif body_element is None:
                self.properties_parser.keep_opaque(child, leading)
            else:
                self.properties_parser.keep_opaque(child, trailing)

        if body_element is None:
            logger.warning(f"{part_name} has no w:body; starting with an empty body")
            body_shell = OpaqueFragment.from_element(etree.Element(qn("w:body")))
        else:
            body_shell = OpaqueFragment.shell_of(body_element)
            self._parse_body(body_element, body)

        shell = DocumentShell(
            root=OpaqueFragment.shell_of(root),
            body=body_shell,
            leading=leading,
            trailing=trailing,
        )
        logger.info(f"Parsed {len(body.paragraphs)} paragraphs ({len(body.children)} blocks) from {part_name}")
        return body, shell

    # ------------------------------------------------------------------
    def _parse_body(self, element: etree._Element, body: Body) -> None:
        children = [child for child in element if isinstance(child.tag, str)]
        for position, child in enumerate(children):
            if is_w(child, "p"):
                body.add_paragraph(self.parse_paragraph(child))
            elif is_w(child, "sectPr") and position == len(children) - 1:
                body.section_properties = OpaqueFragment.from_element(child)
            elif self.properties_parser.preserve_unknown:
                body.add_child(UnknownBlock(OpaqueFragment.from_element(child)))
            else:
                logger.debug(f"Dropping block {child.tag}")

    def parse_paragraph(self, element: etree._Element) -> Paragraph:
        paragraph = Paragraph()
        paragraph.shell = self._shell(element)
        for child in element:
            if is_w(child, "pPr"):
                formatting, style_id, mark = self.properties_parser.parse_paragraph_properties(child)
                paragraph.properties = formatting
                paragraph.style_name = self._style_name(style_id, StyleType.PARAGRAPH)
                paragraph.mark_properties = mark
            elif is_w(child, "r"):
                paragraph.add_run(self.parse_run(child))
            else:
                extras: List[OpaqueFragment] = []
                self.properties_parser.keep_opaque(child, extras)
                for fragment in extras:
                    paragraph.add_child(fragment)
        return paragraph

    def parse_run(self, element: etree._Element) -> Run:
        run = Run()
        run.shell = self._shell(element)
        for child in element:
            if is_w(child, "rPr"):
                formatting, style_id = self.properties_parser.parse_run_properties(child)
                run.properties = formatting
                run.style_name = self._style_name(style_id, StyleType.CHARACTER)
            elif is_w(child, "t"):
                run.add_text(child.text or "")
            elif is_w(child, "tab"):
                run.add_text("\t")
            elif is_w(child, "br") and get_w_attr(child, "type") in _LINE_BREAK_TYPES \
                    and get_w_attr(child, "clear") is None:
                run.add_text("\n")
            else:
                extras: List[OpaqueFragment] = []
                self.properties_parser.keep_opaque(child, extras)
                for fragment in extras:
                    run.add_fragment(fragment)
        return run

    def _shell(self, element: etree._Element) -> Optional[OpaqueFragment]:
        if not element.attrib or not self.properties_parser.preserve_unknown:
            return None
        return OpaqueFragment.shell_of(element)

    def _style_name(self, style_id: Optional[str], style_type: StyleType) -> Optional[str]:
        if not style_id:
            return None
        style = self.styles.find_by_id(style_id, style_type)
        if style is None:
            logger.debug(f"{style_type.value} style id '{style_id}' is not in the catalog")
            return style_id
        return style.name
