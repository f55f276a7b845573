"""
Style parser for DOCX documents.

Fills a :class:`StyleManager` from the styles part: document defaults,
styles and the unmodelled children of ``w:styles``.
"""

import logging
from typing import List, Optional, Tuple

from lxml import etree

from ..exceptions import DuplicateStyleNameError
from ..models.fragment import OpaqueFragment
from ..styles.style import Style
from ..styles.style_manager import StyleManager
from ..utils.enums import StyleType
from ..utils.xml_utils import get_w_attr, is_w, parse_on_off, parse_xml, qn
from .properties_parser import PropertiesParser

logger = logging.getLogger(__name__)


def _attr_flag(element: etree._Element, name: str) -> bool:
    value = get_w_attr(element, name)
    return value is not None and parse_on_off(value) is True


class StyleParser:
    """
    Parser for ``word/styles.xml``.

    ``basedOn`` and ``next`` hold style ids in the XML; they are turned into
    style names once every style is known. An id that matches no style is
    kept as the name so it survives a save.
    """

    def __init__(self, properties_parser: PropertiesParser):
        self.properties_parser = properties_parser

    def parse(self, data: bytes, styles: StyleManager, part_name: str = "word/styles.xml") -> StyleManager:
        root = parse_xml(data, part_name)
        styles.shell = OpaqueFragment.shell_of(root)
        links: List[Tuple[Style, Optional[str], Optional[str]]] = []

        for child in root:
            if is_w(child, "docDefaults"):
                self._parse_doc_defaults(child, styles)
            elif is_w(child, "style"):
                parsed = self._parse_style(child, styles)
                if parsed is not None:
                    links.append(parsed)
            else:
                self.properties_parser.keep_opaque(child, styles.extra)

        for style, based_on_id, next_id in links:
            style.based_on = self._name_for_id(styles, based_on_id, style.style_type)
            style.next_style = self._name_for_id(styles, next_id, StyleType.PARAGRAPH)

        logger.info(f"Parsed {len(styles)} styles from {part_name}")
        return styles

    # ------------------------------------------------------------------
    def _parse_doc_defaults(self, element: etree._Element, styles: StyleManager) -> None:
        for child in element:
            if is_w(child, "pPrDefault"):
                ppr = child.find(qn("w:pPr"))
                formatting, _, _ = self.properties_parser.parse_paragraph_properties(ppr)
                styles.defaults.paragraph_formatting = formatting
            elif is_w(child, "rPrDefault"):
                rpr = child.find(qn("w:rPr"))
                formatting, _ = self.properties_parser.parse_run_properties(rpr)
                styles.defaults.run_formatting = formatting

    def _parse_style(self, element: etree._Element,
                     styles: StyleManager) -> Optional[Tuple[Style, Optional[str], Optional[str]]]:
        style_id = get_w_attr(element, "styleId")
        raw_type = get_w_attr(element, "type") or StyleType.PARAGRAPH.value
        try:
            style_type = StyleType.coerce(raw_type)
            if not style_id:
                raise ValueError("style without w:styleId")
        except ValueError as exc:
            self.properties_parser.mapping_problem(element, exc, styles.extra)
            return None

        name = style_id
        based_on_id = next_id = None
        children = []
        for child in element:
            if is_w(child, "name"):
                name = get_w_attr(child, "val") or style_id
            elif is_w(child, "basedOn"):
                based_on_id = get_w_attr(child, "val")
            elif is_w(child, "next"):
                next_id = get_w_attr(child, "val")
            else:
                children.append(child)

        style = Style(
            name,
            style_type,
            style_id,
            is_default=_attr_flag(element, "default"),
            is_custom=_attr_flag(element, "customStyle"),
        )
        for child in children:
            if is_w(child, "pPr"):
                formatting, _, _ = self.properties_parser.parse_paragraph_properties(child)
                style.paragraph_formatting = formatting
            elif is_w(child, "rPr"):
                formatting, _ = self.properties_parser.parse_run_properties(child)
                style.run_formatting = formatting
            else:
                self.properties_parser.keep_opaque(child, style.extra)

        try:
            styles.register(style)
        except (DuplicateStyleNameError, ValueError) as exc:
            logger.warning(f"Keeping style '{name}' unmapped: {exc}")
            self.properties_parser.keep_opaque(element, styles.extra)
            return None
        return style, based_on_id, next_id

    @staticmethod
    def _name_for_id(styles: StyleManager, style_id: Optional[str], style_type: StyleType) -> Optional[str]:
        if style_id is None:
            return None
        style = styles.find_by_id(style_id, style_type)
        return style.name if style is not None else style_id
