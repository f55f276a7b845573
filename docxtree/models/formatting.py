"""
Formatting property sets for paragraphs, runs and styles.

Every field is optional: ``None`` means the field is absent and resolution
moves on to the next source (style, document defaults). Setters store an
independent copy of the value, never the caller's instance, so no two owners
share a mutable value.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..utils.color_utils import ColorValue, coerce_color
from ..utils.enums import Alignment, BorderSide, BorderStyle, LineRule, ShadePattern, UnderlineStyle
from ..utils.units import Uom, coerce_uom
from .border import Border
from .font import Font
from .fragment import OpaqueFragment


def _as_bool(name: str) -> Callable[[Any], bool]:
    def coerce(value: Any) -> bool:
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be a bool, got {type(value).__name__}")
        return value
    return coerce


def _as_uom(name: str) -> Callable[[Any], Uom]:
    return lambda value: coerce_uom(value, name)


def _as_border(name: str) -> Callable[[Any], Optional[Border]]:
    def coerce(value: Any) -> Optional[Border]:
        if not isinstance(value, Border):
            raise TypeError(f"{name} must be a Border, got {type(value).__name__}")
        if value.is_empty():
            return None
        return value.copy()
    return coerce


def _as_font_name(value: Any) -> str:
    return Font(name=value).name  # type: ignore[return-value]


def _as_font_size(value: Any) -> float:
    return Font(size=value).size  # type: ignore[return-value]


def _as_underline(value: Any) -> UnderlineStyle:
    if isinstance(value, bool):
        return UnderlineStyle.SINGLE if value else UnderlineStyle.NONE
    return UnderlineStyle.coerce(value)


def _border_is_empty(value: Any) -> bool:
    return isinstance(value, Border) and value.is_empty()


class FormattingField:
    """
    Descriptor for one optional formatting field.

    Args:
        coerce: validates a new value and returns the copy to store (or
            ``None`` to clear the field)
        clears: names of fields cleared when this one is set
        prune: predicate for stored values that have become meaningless
            through in-place edits and must read back as absent
    """

    def __init__(self, coerce: Callable[[Any], Any], clears: Tuple[str, ...] = (),
                 prune: Optional[Callable[[Any], bool]] = None):
        self.coerce = coerce
        self.clears = clears
        self.prune = prune
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Optional["FormattingSet"], objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        value = obj._values.get(self.name)
        if value is not None and self.prune is not None and self.prune(value):
            del obj._values[self.name]
            return None
        return value

    def __set__(self, obj: "FormattingSet", value: Any) -> None:
        current = obj._values.get(self.name)
        if value is None:
            obj._values.pop(self.name, None)
            return
        if value is current:
            # re-assigning the slot's own instance
            return
        stored = self.coerce(value)
        if stored is None:
            obj._values.pop(self.name, None)
            return
        obj._values[self.name] = stored
        for other in self.clears:
            obj._values.pop(other, None)


class FormattingSet:
    """Base class for :class:`ParagraphFormatting` and :class:`RunFormatting`."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, **fields: Any):
        self._values: Dict[str, Any] = {}
        self.extra: List[OpaqueFragment] = []
        for name, value in fields.items():
            if name not in self.field_names():
                raise AttributeError(f"{type(self).__name__} has no field '{name}'")
            setattr(self, name, value)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        names = []
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, FormattingField) and name not in names:
                    names.append(name)
        return tuple(names)

    def get(self, name: str) -> Any:
        if name not in self.field_names():
            raise AttributeError(f"{type(self).__name__} has no field '{name}'")
        return getattr(self, name)

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Set fields in declaration order."""
        for name in self.field_names():
            value = getattr(self, name)
            if value is not None:
                yield name, value

    def is_empty(self) -> bool:
        """True if no field is set and no opaque content is attached."""
        return not self.extra and next(self.items(), None) is None

    def clear(self) -> None:
        self._values.clear()
        self.extra.clear()

    def copy(self):
        """Deep, independent copy."""
        clone = type(self)()
        for name, value in self.items():
            clone._values[name] = value.copy() if isinstance(value, Border) else value
        clone.extra = list(self.extra)
        return clone

    def merge(self, other: "FormattingSet") -> None:
        """Overlay every field set on ``other`` onto this set."""
        if not isinstance(other, type(self)):
            raise TypeError(f"Cannot merge {type(other).__name__} into {type(self).__name__}")
        for name, value in other.items():
            setattr(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for name, value in self.items():
            if isinstance(value, Border):
                result[name] = value.to_dict()
            elif isinstance(value, Uom):
                result[name] = value.points
            elif isinstance(value, (ColorValue,)):
                result[name] = str(value)
            elif hasattr(value, 'value'):
                result[name] = value.value
            else:
                result[name] = value
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormattingSet) or type(other) is not type(self):
            return NotImplemented
        return dict(self.items()) == dict(other.items()) and self.extra == other.extra

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.items())
        return f"{type(self).__name__}({fields})"


class _ShadingFields:
    """Shading shared by paragraphs and runs (``w:shd``)."""

    shade_fill = FormattingField(coerce_color)
    shade_pattern = FormattingField(ShadePattern.coerce)
    shade_color = FormattingField(coerce_color)


class ParagraphFormatting(FormattingSet):
    """
    Paragraph-level formatting (``w:pPr``).

    Example:
        >>> fmt = ParagraphFormatting()
        >>> fmt.set_borders(BorderStyle.SINGLE, "000000", 1.5)
        >>> fmt.top_border == fmt.bottom_border
        True
    """

    alignment = FormattingField(Alignment.coerce)
    keep_with_next = FormattingField(_as_bool("keep_with_next"))
    keep_lines_together = FormattingField(_as_bool("keep_lines_together"))
    page_break_before = FormattingField(_as_bool("page_break_before"))
    spacing_before = FormattingField(_as_uom("spacing_before"))
    spacing_after = FormattingField(_as_uom("spacing_after"))
    # with LineRule.AUTO the value is read as 240ths of a line, as Word does
    line_spacing = FormattingField(_as_uom("line_spacing"))
    line_rule = FormattingField(LineRule.coerce)
    left_indent = FormattingField(_as_uom("left_indent"))
    right_indent = FormattingField(_as_uom("right_indent"))
    first_line_indent = FormattingField(_as_uom("first_line_indent"), clears=("hanging_indent",))
    hanging_indent = FormattingField(_as_uom("hanging_indent"), clears=("first_line_indent",))
    top_border = FormattingField(_as_border("top_border"), prune=_border_is_empty)
    left_border = FormattingField(_as_border("left_border"), prune=_border_is_empty)
    bottom_border = FormattingField(_as_border("bottom_border"), prune=_border_is_empty)
    right_border = FormattingField(_as_border("right_border"), prune=_border_is_empty)
    between_border = FormattingField(_as_border("between_border"), prune=_border_is_empty)
    bar_border = FormattingField(_as_border("bar_border"), prune=_border_is_empty)
    shade_fill = _ShadingFields.shade_fill
    shade_pattern = _ShadingFields.shade_pattern
    shade_color = _ShadingFields.shade_color

    def get_border(self, side: Any) -> Optional[Border]:
        return getattr(self, f"{BorderSide.coerce(side).value}_border")

    def set_border(self, side: Any, border: Optional[Border]) -> None:
        setattr(self, f"{BorderSide.coerce(side).value}_border", border)

    def set_borders(self, style: Any, color: Any = None, width_points: Any = None) -> None:
        """
        Put the same border on the top, bottom, left and right sides.

        Args:
            style: border line style
            color: border color (ColorValue, hex string or None)
            width_points: line width in points or as a Uom
        """
        border = Border(style=style, size=width_points, color=color)
        for side in (BorderSide.TOP, BorderSide.BOTTOM, BorderSide.LEFT, BorderSide.RIGHT):
            self.set_border(side, border)


class RunFormatting(FormattingSet):
    """
    Character-level formatting (``w:rPr``).

    ``font`` is composed from ``font_name`` and ``font_size`` so a style can
    set one without the other.
    """

    font_name = FormattingField(_as_font_name)
    bold = FormattingField(_as_bool("bold"))
    italic = FormattingField(_as_bool("italic"))
    caps = FormattingField(_as_bool("caps"))
    strikethrough = FormattingField(_as_bool("strikethrough"))
    color = FormattingField(coerce_color)
    font_size = FormattingField(_as_font_size)
    underline = FormattingField(_as_underline)
    border = FormattingField(_as_border("border"), prune=_border_is_empty)
    shade_fill = _ShadingFields.shade_fill
    shade_pattern = _ShadingFields.shade_pattern
    shade_color = _ShadingFields.shade_color

    @property
    def font(self) -> Optional[Font]:
        name, size = self.font_name, self.font_size
        if name is None and size is None:
            return None
        return Font(name=name, size=size)

    @font.setter
    def font(self, value: Optional[Font]) -> None:
        if value is None:
            self.font_name = None
            self.font_size = None
            return
        if isinstance(value, str):
            # a bare family name keeps the size
            self.font_name = value
            return
        if not isinstance(value, Font):
            raise TypeError(f"font must be a Font, got {type(value).__name__}")
        self.font_name = value.name
        self.font_size = value.size


__all__ = [
    "FormattingField",
    "FormattingSet",
    "ParagraphFormatting",
    "RunFormatting",
]
