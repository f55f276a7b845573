"""
XML exporter for DOCX documents.

Regenerates ``word/document.xml`` and ``word/styles.xml`` from the model.
Only fields that are set are written, in schema order; opaque fragments
kept on load are merged back into their schema position. A fragment whose
tag is also produced from a modelled field supplies the attributes the model
does not write; where both carry an attribute or children, the model wins.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from lxml import etree

from ..models.body import Body, UnknownBlock
from ..models.border import Border
from ..models.formatting import ParagraphFormatting, RunFormatting
from ..models.fragment import OpaqueFragment
from ..models.paragraph import Paragraph
from ..models.run import Run
from ..styles.style import Style
from ..styles.style_manager import StyleManager
from ..utils.color_utils import ColorValue
from ..utils.enums import BorderSide, ShadePattern, StyleType
from ..utils.xml_utils import (
    DEFAULT_NSMAP,
    W_NS,
    XML_SPACE,
    local_name,
    qn,
    serialize_xml,
    set_w_attr,
    w_element,
    w_sub,
)

logger = logging.getLogger(__name__)

# Child order of w:pPr (CT_PPr)
PPR_ORDER = (
    "pStyle", "keepNext", "keepLines", "pageBreakBefore", "framePr", "widowControl", "numPr",
    "suppressLineNumbers", "pBdr", "shd", "tabs", "suppressAutoHyphens", "kinsoku", "wordWrap",
    "overflowPunct", "topLinePunct", "autoSpaceDE", "autoSpaceDN", "bidi", "adjustRightInd",
    "snapToGrid", "spacing", "ind", "contextualSpacing", "mirrorIndents", "suppressOverlap", "jc",
    "textDirection", "textAlignment", "textboxTightWrap", "outlineLvl", "divId", "cnfStyle",
    "rPr", "sectPr", "pPrChange",
)

# Child order of w:rPr (CT_RPr)
RPR_ORDER = (
    "rStyle", "rFonts", "b", "bCs", "i", "iCs", "caps", "smallCaps", "strike", "dstrike",
    "outline", "shadow", "emboss", "imprint", "noProof", "snapToGrid", "vanish", "webHidden",
    "color", "spacing", "w", "kern", "position", "sz", "szCs", "highlight", "u", "effect",
    "bdr", "shd", "fitText", "vertAlign", "rtl", "cs", "em", "lang", "eastAsianLayout",
    "specVanish", "oMath", "rPrChange",
)

# Child order of w:style (CT_Style)
STYLE_ORDER = (
    "name", "aliases", "basedOn", "next", "link", "autoRedefine", "hidden", "uiPriority",
    "semiHidden", "unhideWhenUsed", "qFormat", "locked", "personal", "personalCompose",
    "personalReply", "rsid", "pPr", "rPr", "tblPr", "trPr", "tcPr", "tblStylePr",
)

# Child order of w:styles
STYLES_ORDER = ("docDefaults", "latentStyles", "style")


def _rank(element: etree._Element, order: Sequence[str]) -> int:
    if isinstance(element.tag, str) and element.tag.startswith(f"{{{W_NS}}}"):
        name = local_name(element.tag)
        if name in order:
            return order.index(name)
    return len(order)


def overlay(base: etree._Element, element: etree._Element) -> etree._Element:
    """Put the attributes and children of ``element`` on top of ``base``."""
    for key, value in element.attrib.items():
        base.set(key, value)
    if len(element):
        del base[:]
        for child in list(element):
            base.append(child)
    return base


def append_ordered(parent: etree._Element, modelled: Iterable[etree._Element],
                   extras: Iterable[OpaqueFragment], order: Sequence[str],
                   merge_emitted: bool = True) -> None:
    """
    Append modelled elements and opaque fragments to ``parent`` in schema order.

    Elements with the same rank keep their relative order; tags outside
    ``order`` go last. With ``merge_emitted``, a fragment whose tag is
    already among the modelled elements is merged into it with
    :func:`overlay`, the modelled element on top.
    """
    items: List[etree._Element] = list(modelled)
    positions = {element.tag: index for index, element in enumerate(items)}
    for fragment in extras:
        index = positions.get(fragment.tag) if merge_emitted else None
        if index is None:
            items.append(fragment.to_element())
            continue
        logger.debug(f"Merging preserved <{fragment.local_name}> under the modelled element")
        items[index] = overlay(fragment.to_element(), items[index])
    for element in sorted(items, key=lambda el: _rank(el, order)):
        parent.append(element)


def _set_color(element: etree._Element, color: ColorValue, rgb_attr: str, theme_attr: str = "themeColor",
               tint_attr: str = "themeTint", shade_attr: str = "themeShade", required: bool = False) -> None:
    if color.rgb is not None:
        set_w_attr(element, rgb_attr, color.rgb)
    elif required:
        set_w_attr(element, rgb_attr, "auto")
    if color.theme_color is not None:
        set_w_attr(element, theme_attr, color.theme_color)
    if color.theme_tint is not None:
        set_w_attr(element, tint_attr, color.theme_tint)
    if color.theme_shade is not None:
        set_w_attr(element, shade_attr, color.theme_shade)


def border_element(tag: str, border: Border) -> etree._Element:
    element = w_element(tag)
    set_w_attr(element, "val", border.style.value)
    if border.size is not None:
        set_w_attr(element, "sz", str(border.size.eighths))
    if border.spacing is not None:
        set_w_attr(element, "space", str(border.spacing.whole_points))
    if border.color is not None:
        _set_color(element, border.color, "color")
    if border.shadow:
        set_w_attr(element, "shadow", "1")
    if border.frame:
        set_w_attr(element, "frame", "1")
    return element


def _shading_element(formatting) -> Optional[etree._Element]:
    pattern, fill, color = formatting.shade_pattern, formatting.shade_fill, formatting.shade_color
    if pattern is None and fill is None and color is None:
        return None
    element = w_element("shd")
    # w:val is required; without a pattern the shading is a plain fill
    set_w_attr(element, "val", (pattern if pattern is not None else ShadePattern.CLEAR).value)
    if color is not None:
        _set_color(element, color, "color")
    if fill is not None:
        _set_color(element, fill, "fill", "themeFill", "themeFillTint", "themeFillShade")
    return element


def _preserves(extras: Iterable[OpaqueFragment], tag: str, attribute: str) -> bool:
    """True if a preserved ``w:tag`` fragment carries its own ``w:attribute``."""
    for fragment in extras:
        if fragment.tag == qn(f"w:{tag}") and fragment.to_element().get(qn(f"w:{attribute}")) is not None:
            return True
    return False


def _flag_element(tag: str, value: Optional[bool]) -> Optional[etree._Element]:
    if value is None:
        return None
    element = w_element(tag)
    if not value:
        set_w_attr(element, "val", "0")
    return element


class XMLExporter:
    """
    Serialize the document tree and the style catalog to WordprocessingML.

    Args:
        styles: catalog used to translate style names into style ids
    """

    def __init__(self, styles: StyleManager):
        self.styles = styles
        logger.debug("XML exporter initialized")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    def paragraph_properties(self, formatting: ParagraphFormatting, style_id: Optional[str] = None,
                             mark: Optional[OpaqueFragment] = None) -> Optional[etree._Element]:
        """``w:pPr`` for ``formatting``, or None when there is nothing to write."""
        modelled: List[etree._Element] = []
        if style_id:
            modelled.append(self._val_element("pStyle", style_id))
        for tag, value in (("keepNext", formatting.keep_with_next),
                           ("keepLines", formatting.keep_lines_together),
                           ("pageBreakBefore", formatting.page_break_before)):
            element = _flag_element(tag, value)
            if element is not None:
                modelled.append(element)

        borders = [(side, formatting.get_border(side)) for side in BorderSide]
        if any(border is not None for _, border in borders):
            pbdr = w_element("pBdr")
            for side, border in borders:
                if border is not None:
                    pbdr.append(border_element(side.value, border))
            modelled.append(pbdr)

        shading = _shading_element(formatting)
        if shading is not None:
            modelled.append(shading)

        spacing = self._attrs_element("spacing", (
            ("before", formatting.spacing_before),
            ("after", formatting.spacing_after),
            ("line", formatting.line_spacing),
        ))
        if formatting.line_rule is not None:
            if spacing is None:
                spacing = w_element("spacing")
            set_w_attr(spacing, "lineRule", formatting.line_rule.value)
        if spacing is not None:
            modelled.append(spacing)

        indentation = self._attrs_element("ind", (
            ("left", formatting.left_indent),
            ("right", formatting.right_indent),
            ("firstLine", formatting.first_line_indent),
            ("hanging", formatting.hanging_indent),
        ))
        if indentation is not None:
            modelled.append(indentation)

        if formatting.alignment is not None:
            modelled.append(self._val_element("jc", formatting.alignment.value))

        extras = list(formatting.extra)
        if mark is not None:
            extras.append(mark)
        if not modelled and not extras:
            return None
        ppr = w_element("pPr")
        append_ordered(ppr, modelled, extras, PPR_ORDER)
        return ppr

    def run_properties(self, formatting: RunFormatting, style_id: Optional[str] = None) -> Optional[etree._Element]:
        """``w:rPr`` for ``formatting``, or None when there is nothing to write."""
        modelled: List[etree._Element] = []
        if style_id:
            modelled.append(self._val_element("rStyle", style_id))
        if formatting.font_name is not None:
            fonts = w_element("rFonts")
            set_w_attr(fonts, "ascii", formatting.font_name)
            if not _preserves(formatting.extra, "rFonts", "hAnsi"):
                set_w_attr(fonts, "hAnsi", formatting.font_name)
            modelled.append(fonts)
        for tag, value in (("b", formatting.bold), ("i", formatting.italic),
                           ("caps", formatting.caps), ("strike", formatting.strikethrough)):
            element = _flag_element(tag, value)
            if element is not None:
                modelled.append(element)
        if formatting.color is not None:
            color = w_element("color")
            _set_color(color, formatting.color, "val", required=True)
            modelled.append(color)
        if formatting.font_size is not None:
            modelled.append(self._val_element("sz", str(int(formatting.font_size * 2))))
        if formatting.underline is not None:
            modelled.append(self._val_element("u", formatting.underline.value))
        if formatting.border is not None:
            modelled.append(border_element("bdr", formatting.border))
        shading = _shading_element(formatting)
        if shading is not None:
            modelled.append(shading)

        if not modelled and not formatting.extra:
            return None
        rpr = w_element("rPr")
        append_ordered(rpr, modelled, formatting.extra, RPR_ORDER)
        return rpr

    @staticmethod
    def _val_element(tag: str, value: str) -> etree._Element:
        element = w_element(tag)
        set_w_attr(element, "val", value)
        return element

    @staticmethod
    def _attrs_element(tag: str, attrs: Sequence[Tuple[str, object]]) -> Optional[etree._Element]:
        present = [(name, value) for name, value in attrs if value is not None]
        if not present:
            return None
        element = w_element(tag)
        for name, value in present:
            set_w_attr(element, name, str(value.dxa))  # type: ignore[attr-defined]
        return element

    # ------------------------------------------------------------------
    # Main document part
    # ------------------------------------------------------------------
    def style_id_for(self, name: Optional[str], style_type: StyleType) -> Optional[str]:
        """Id of the style named ``name``; an unknown name is written as-is."""
        if name is None:
            return None
        style = self.styles.get_style(name, style_type)
        return style.style_id if style is not None else name

    def export_run(self, run: Run) -> etree._Element:
        element = run.shell.to_element() if run.shell is not None else w_element("r")
        rpr = self.run_properties(run.properties, self.style_id_for(run.style_name, StyleType.CHARACTER))
        if rpr is not None:
            element.append(rpr)
        for item in run.content:
            if isinstance(item, OpaqueFragment):
                element.append(item.to_element())
            else:
                self._append_text(element, item)
        return element

    @staticmethod
    def _append_text(run_element: etree._Element, text: str) -> None:
        buffer = []

        def flush() -> None:
            if buffer:
                chunk = "".join(buffer)
                t = w_sub(run_element, "t")
                t.text = chunk
                if chunk != chunk.strip():
                    t.set(XML_SPACE, "preserve")
                buffer.clear()

        for char in text:
            if char == "\t":
                flush()
                w_sub(run_element, "tab")
            elif char == "\n":
                flush()
                w_sub(run_element, "br")
            else:
                buffer.append(char)
        flush()

    def export_paragraph(self, paragraph: Paragraph) -> etree._Element:
        element = paragraph.shell.to_element() if paragraph.shell is not None else w_element("p")
        ppr = self.paragraph_properties(
            paragraph.properties,
            self.style_id_for(paragraph.style_name, StyleType.PARAGRAPH),
            paragraph.mark_properties,
        )
        if ppr is not None:
            element.append(ppr)
        for child in paragraph.children:
            if isinstance(child, Run):
                element.append(self.export_run(child))
            else:
                element.append(child.to_element())
        return element

    def export_body(self, body: Body, shell: Optional[OpaqueFragment] = None) -> etree._Element:
        element = shell.to_element() if shell is not None else w_element("body")
        for block in body.children:
            if isinstance(block, Paragraph):
                element.append(self.export_paragraph(block))
            elif isinstance(block, UnknownBlock):
                element.append(block.fragment.to_element())
        if body.section_properties is not None:
            element.append(body.section_properties.to_element())
        return element

    def export_document(self, body: Body, shell=None) -> bytes:
        """
        Serialize ``word/document.xml``.

        Args:
            body: document body
            shell: :class:`~docxtree.parser.xml_parser.DocumentShell` from a
                loaded part; None for a new document
        """
        if shell is None:
            root = etree.Element(qn("w:document"), nsmap=DEFAULT_NSMAP)
            root.append(self.export_body(body))
        else:
            root = shell.root.to_element()
            for fragment in shell.leading:
                root.append(fragment.to_element())
            root.append(self.export_body(body, shell.body))
            for fragment in shell.trailing:
                root.append(fragment.to_element())
        return serialize_xml(root)

    # ------------------------------------------------------------------
    # Styles part
    # ------------------------------------------------------------------
    def export_style(self, style: Style) -> etree._Element:
        element = w_element("style")
        set_w_attr(element, "type", style.style_type.value)
        if style.is_default:
            set_w_attr(element, "default", "1")
        if style.is_custom:
            set_w_attr(element, "customStyle", "1")
        set_w_attr(element, "styleId", style.style_id)

        modelled = [self._val_element("name", style.name)]
        based_on = self.style_id_for(style.based_on, style.style_type)
        if based_on:
            modelled.append(self._val_element("basedOn", based_on))
        next_style = self.style_id_for(style.next_style, StyleType.PARAGRAPH)
        if next_style:
            modelled.append(self._val_element("next", next_style))
        ppr = self.paragraph_properties(style.paragraph_formatting)
        if ppr is not None:
            modelled.append(ppr)
        rpr = self.run_properties(style.run_formatting)
        if rpr is not None:
            modelled.append(rpr)
        append_ordered(element, modelled, style.extra, STYLE_ORDER)
        return element

    def export_styles(self) -> bytes:
        """Serialize ``word/styles.xml``."""
        styles = self.styles
        root = styles.shell.to_element() if styles.shell is not None else \
            etree.Element(qn("w:styles"), nsmap=DEFAULT_NSMAP)

        modelled: List[etree._Element] = []
        if not styles.defaults.is_empty():
            defaults = w_element("docDefaults")
            rpr = self.run_properties(styles.defaults.run_formatting)
            if rpr is not None:
                etree.SubElement(defaults, qn("w:rPrDefault")).append(rpr)
            ppr = self.paragraph_properties(styles.defaults.paragraph_formatting)
            if ppr is not None:
                etree.SubElement(defaults, qn("w:pPrDefault")).append(ppr)
            modelled.append(defaults)
        modelled.extend(self.export_style(style) for style in styles)
        append_ordered(root, modelled, styles.extra, STYLES_ORDER, merge_emitted=False)
        logger.debug(f"Exported {len(styles)} styles")
        return serialize_xml(root)
