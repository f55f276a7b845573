"""
Properties parser for DOCX documents.

Maps ``w:pPr`` and ``w:rPr`` elements onto :class:`ParagraphFormatting` and
:class:`RunFormatting`. Children the model does not cover are kept as
opaque fragments on the formatting set's ``extra`` list. So are the
attributes of a mapped child that no field reads (``w:eastAsia`` on
``w:rFonts``, ``w:beforeAutospacing`` on ``w:spacing``): they travel as a
childless copy of the element, which the exporter merges back under the
modelled attributes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from lxml import etree

from ..exceptions import SerializationMappingError
from ..models.border import Border
from ..models.formatting import FormattingSet, ParagraphFormatting, RunFormatting
from ..models.fragment import OpaqueFragment
from ..utils.color_utils import ColorValue
from ..utils.enums import Alignment, BorderSide, BorderStyle, LineRule, ShadePattern, UnderlineStyle
from ..utils.units import Uom
from ..utils.xml_utils import W_NS, get_w_attr, is_w, local_name, parse_on_off

logger = logging.getLogger(__name__)

FieldValues = Dict[str, Any]

_COLOR_ATTRIBUTES = ("themeColor", "themeTint", "themeShade")

# w: attributes each handled element maps onto formatting fields
MODELLED_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    'jc': ("val",),
    'keepNext': ("val",),
    'keepLines': ("val",),
    'pageBreakBefore': ("val",),
    'spacing': ("before", "after", "line", "lineRule"),
    'ind': ("left", "start", "right", "end", "firstLine", "hanging"),
    'pBdr': (),
    'shd': ("val", "color", "fill", "themeFill", "themeFillTint", "themeFillShade") + _COLOR_ATTRIBUTES,
    'rFonts': ("ascii", "hAnsi"),
    'b': ("val",),
    'i': ("val",),
    'caps': ("val",),
    'strike': ("val",),
    'color': ("val",) + _COLOR_ATTRIBUTES,
    'sz': ("val",),
    'u': ("val",),
    'bdr': ("val", "sz", "space", "color", "shadow", "frame") + _COLOR_ATTRIBUTES,
}


def _int_attr(element: etree._Element, name: str) -> Optional[int]:
    value = get_w_attr(element, name)
    if value is None:
        return None
    return int(value.strip())


def _first_int_attr(element: etree._Element, *names: str) -> Optional[int]:
    for name in names:
        value = _int_attr(element, name)
        if value is not None:
            return value
    return None


def _on_off(element: etree._Element) -> bool:
    value = parse_on_off(get_w_attr(element, "val"))
    if value is None:
        raise ValueError(f"invalid on/off value {get_w_attr(element, 'val')!r}")
    return value


def _flag(element: etree._Element, name: str) -> bool:
    value = get_w_attr(element, name)
    if value is None:
        return False
    flag = parse_on_off(value)
    if flag is None:
        raise ValueError(f"invalid on/off value {value!r} for w:{name}")
    return flag


def _color(element: etree._Element, rgb_attr: str, theme_attr: str = "themeColor",
           tint_attr: str = "themeTint", shade_attr: str = "themeShade") -> Optional[ColorValue]:
    rgb = get_w_attr(element, rgb_attr)
    theme = get_w_attr(element, theme_attr)
    if rgb is None and theme is None:
        return None
    return ColorValue(rgb=rgb, theme_color=theme,
                      theme_tint=get_w_attr(element, tint_attr),
                      theme_shade=get_w_attr(element, shade_attr))


def parse_border(element: etree._Element) -> Border:
    """``w:top``/``w:bdr``/... into a :class:`Border`."""
    size = _int_attr(element, "sz")
    space = _int_attr(element, "space")
    return Border(
        style=BorderStyle.coerce(get_w_attr(element, "val") or "nil"),
        size=Uom.from_eighths(size) if size is not None else None,
        color=_color(element, "color"),
        spacing=Uom.from_points(space) if space is not None else None,
        shadow=_flag(element, "shadow"),
        frame=_flag(element, "frame"),
    )


def _modelled_names(element: etree._Element) -> Tuple[str, ...]:
    """Names of the ``w:`` attributes of ``element`` that map onto fields."""
    tag = local_name(element.tag)
    modelled = set(MODELLED_ATTRIBUTES.get(tag, ()))
    if tag == "rFonts":
        ascii_name = get_w_attr(element, "ascii")
        h_ansi = get_w_attr(element, "hAnsi")
        if ascii_name is not None and h_ansi is not None and h_ansi != ascii_name:
            modelled.discard("hAnsi")
    elif tag == "ind":
        # ST_SignedTwipsMeasure: negative left/right indents stay unmapped
        for pair in (("left", "start"), ("right", "end")):
            value = _first_int_attr(element, *pair)
            if value is not None and value < 0:
                modelled.difference_update(pair)
    return tuple(modelled)


def unmodelled_shell(element: etree._Element) -> Optional[etree._Element]:
    """
    Childless copy of ``element`` holding only the attributes no field reads.

    Returns:
        The copy, or None when every attribute is modelled
    """
    modelled = {f"{{{W_NS}}}{name}" for name in _modelled_names(element)}
    kept = [(key, value) for key, value in element.attrib.items() if key not in modelled]
    if not kept:
        return None
    shell = etree.Element(element.tag, nsmap=element.nsmap)
    for key, value in kept:
        shell.set(key, value)
    return shell


def _shading(element: etree._Element) -> FieldValues:
    values: FieldValues = {}
    pattern = get_w_attr(element, "val")
    if pattern is not None:
        values['shade_pattern'] = ShadePattern.coerce(pattern)
    fill = _color(element, "fill", "themeFill", "themeFillTint", "themeFillShade")
    if fill is not None:
        values['shade_fill'] = fill
    color = _color(element, "color")
    if color is not None:
        values["shade_color"] = color
    return values


class PropertiesParser:
    """
    Parse paragraph and run property elements.

    Args:
        strict_mapping: raise :class:`SerializationMappingError` for a
            recognized element holding an out-of-domain value; otherwise log a
            warning and keep the element opaque
        preserve_unknown: keep unmodelled elements as opaque fragments
    """

    def __init__(self, strict_mapping: bool = True, preserve_unknown: bool = True) -> None:
        self.strict_mapping = strict_mapping
        self.preserve_unknown = preserve_unknown
        self._paragraph_handlers: Dict[str, Callable[[etree._Element], Optional[FieldValues]]] = {
            'jc': lambda el: {'alignment': Alignment.coerce(get_w_attr(el, "val") or "")},
            'keepNext': lambda el: {'keep_with_next': _on_off(el)},
            'keepLines': lambda el: {'keep_lines_together': _on_off(el)},
            'pageBreakBefore': lambda el: {'page_break_before': _on_off(el)},
            'spacing': self._paragraph_spacing,
            'ind': self._indentation,
            'pBdr': self._paragraph_borders,
            'shd': _shading,
        }
        self._run_handlers: Dict[str, Callable[[etree._Element], Optional[FieldValues]]] = {
            'rFonts': self._fonts,
            'b': lambda el: {'bold': _on_off(el)},
            'i': lambda el: {'italic': _on_off(el)},
            'caps': lambda el: {'caps': _on_off(el)},
            'strike': lambda el: {'strikethrough': _on_off(el)},
            'color': self._run_color,
            'sz': self._font_size,
            'u': lambda el: {'underline': UnderlineStyle.coerce(get_w_attr(el, "val") or "single")},
            'bdr': lambda el: {'border': parse_border(el)},
            'shd': _shading,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def parse_paragraph_properties(
        self, ppr: Optional[etree._Element]
    ) -> Tuple[ParagraphFormatting, Optional[str], Optional[OpaqueFragment]]:
        """
        Returns:
            (formatting, style id from ``w:pStyle``, paragraph mark ``w:rPr``)
        """
        formatting = ParagraphFormatting()
        if ppr is None:
            return formatting, None, None
        style_id = None
        mark = None
        for child in ppr:
            if is_w(child, "pStyle"):
                style_id = get_w_attr(child, "val")
            elif is_w(child, "rPr"):
                mark = OpaqueFragment.from_element(child)
            else:
                self._apply(child, formatting, self._paragraph_handlers)
        return formatting, style_id, mark

    def parse_run_properties(self, rpr: Optional[etree._Element],
                             style_tag: str = "rStyle") -> Tuple[RunFormatting, Optional[str]]:
        """
        Returns:
            (formatting, style id from ``w:rStyle``)
        """
        formatting = RunFormatting()
        if rpr is None:
            return formatting, None
        style_id = None
        for child in rpr:
            if is_w(child, style_tag):
                style_id = get_w_attr(child, "val")
            else:
                self._apply(child, formatting, self._run_handlers)
        return formatting, style_id

    # ------------------------------------------------------------------
    def keep_opaque(self, element: etree._Element, extras: List[OpaqueFragment]) -> None:
        """Attach an unmodelled element to ``extras`` unless unknown content is dropped."""
        if not isinstance(element.tag, str):
            # comments and processing instructions
            return
        if self.preserve_unknown:
            extras.append(OpaqueFragment.from_element(element))
        else:
            logger.debug(f"Dropping unmodelled element <{local_name(element.tag)}>")

    def mapping_problem(self, element: etree._Element, exc: Exception, extras: List[OpaqueFragment]) -> None:
        """Strict mode raises; lenient mode logs and keeps the element opaque."""
        tag = local_name(element.tag)
        value = " ".join(f"{local_name(k)}={v}" for k, v in element.attrib.items())
        if self.strict_mapping:
            raise SerializationMappingError(f"Cannot map <w:{tag}>: {exc}", tag=tag, value=value) from exc
        logger.warning(f"Keeping <w:{tag} {value}> unmapped: {exc}")
        self.keep_opaque(element, extras)

    def _apply(self, child: etree._Element, formatting: FormattingSet,
               handlers: Dict[str, Callable[[etree._Element], Optional[FieldValues]]]) -> None:
        handler = handlers.get(local_name(child.tag)) if is_w(child) else None
        if handler is None:
            self.keep_opaque(child, formatting.extra)
            return
        try:
            values = handler(child)
            if values is None:
                self.keep_opaque(child, formatting.extra)
                return
            # validate everything before touching the formatting set
            staged = type(formatting)(**values)
        except (ValueError, TypeError) as exc:
            self.mapping_problem(child, exc, formatting.extra)
            return
        formatting.merge(staged)
        shell = unmodelled_shell(child)
        if shell is not None:
            self.keep_opaque(shell, formatting.extra)

    # ------------------------------------------------------------------
    # Element handlers
    # ------------------------------------------------------------------
    @staticmethod
    def _paragraph_spacing(element: etree._Element) -> FieldValues:
        values: FieldValues = {}
        before = _int_attr(element, "before")
        after = _int_attr(element, "after")
        line = _int_attr(element, "line")
        rule = get_w_attr(element, "lineRule")
        if before is not None:
            values['spacing_before'] = Uom.from_dxa(before)
        if after is not None:
            values['spacing_after'] = Uom.from_dxa(after)
        if line is not None:
            values['line_spacing'] = Uom.from_dxa(line)
        if rule is not None:
            values['line_rule'] = LineRule.coerce(rule)
        return values

    @staticmethod
    def _indentation(element: etree._Element) -> FieldValues:
        values: FieldValues = {}
        left = _first_int_attr(element, "left", "start")
        right = _first_int_attr(element, "right", "end")
        first_line = _int_attr(element, "firstLine")
        hanging = _int_attr(element, "hanging")
        if left is not None and left >= 0:
            values['left_indent'] = Uom.from_dxa(left)
        if right is not None and right >= 0:
            values['right_indent'] = Uom.from_dxa(right)
        if hanging is not None:
            values['hanging_indent'] = Uom.from_dxa(hanging)
        elif first_line is not None:
            values['first_line_indent'] = Uom.from_dxa(first_line)
        return values

    @staticmethod
    def _paragraph_borders(element: etree._Element) -> FieldValues:
        values: FieldValues = {}
        for child in element:
            if not isinstance(child.tag, str):
                continue
            side = BorderSide.coerce(local_name(child.tag))
            values[f"{side.value}_border"] = parse_border(child)
        return values

    @staticmethod
    def _fonts(element: etree._Element) -> Optional[FieldValues]:
        name = get_w_attr(element, "ascii") or get_w_attr(element, "hAnsi")
        if name is None:
            # theme fonts only
            return None
        return {'font_name': name}

    @staticmethod
    def _font_size(element: etree._Element) -> FieldValues:
        half_points = _int_attr(element, "val")
        if half_points is None:
            raise ValueError("w:sz without w:val")
        return {'font_size': half_points / 2}

    @staticmethod
    def _run_color(element: etree._Element) -> Optional[FieldValues]:
        color = _color(element, "val")
        if color is None:
            return None
        return {'color': color}
