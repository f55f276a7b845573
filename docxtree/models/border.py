"""Border value object for paragraphs and runs."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..utils.color_utils import ColorValue, coerce_color
from ..utils.enums import BorderStyle
from ..utils.units import Uom, coerce_uom


class Border:
    """
    A border along one side of a paragraph, or around a run.

    Borders compare by content. They are mutable, but formatting sets never
    share them: assigning a border to a slot stores a copy, so changing the
    object afterwards (or the copy held by another slot) has no effect on
    that slot.

    Attributes:
        style: line style
        size: line width; written in eighths of a point
        color: line color
        spacing: distance from the text; written in whole points
        shadow: draw a shadow effect
        frame: reverse the border to create a frame effect
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, style: Any = BorderStyle.NONE, size: Any = None, color: Any = None,
                 spacing: Any = None, shadow: bool = False, frame: bool = False):
        self._style = BorderStyle.NONE
        self._size: Optional[Uom] = None
        self._color: Optional[ColorValue] = None
        self._spacing: Optional[Uom] = None
        self._shadow = False
        self._frame = False
        self.style = style
        self.size = size
        self.color = color
        self.spacing = spacing
        self.shadow = shadow
        self.frame = frame

    # ------------------------------------------------------------------
    @property
    def style(self) -> BorderStyle:
        return self._style

    @style.setter
    def style(self, value: Any) -> None:
        self._style = BorderStyle.NONE if value is None else BorderStyle.coerce(value)

    @property
    def size(self) -> Optional[Uom]:
        return self._size

    @size.setter
    def size(self, value: Any) -> None:
        self._size = None if value is None else coerce_uom(value, "Border.size")

    @property
    def color(self) -> Optional[ColorValue]:
        return self._color

    @color.setter
    def color(self, value: Any) -> None:
        if value is None:
            self._color = None
            return
        color = coerce_color(value)
        self._color = None if color.is_empty else color

    @property
    def spacing(self) -> Optional[Uom]:
        return self._spacing

    @spacing.setter
    def spacing(self, value: Any) -> None:
        if value is None:
            self._spacing = None
            return
        # w:space only holds whole points
        self._spacing = Uom.from_points(coerce_uom(value, "Border.spacing").whole_points)

    @property
    def shadow(self) -> bool:
        return self._shadow

    @shadow.setter
    def shadow(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError("Border.shadow must be a bool")
        self._shadow = value

    @property
    def frame(self) -> bool:
        return self._frame

    @frame.setter
    def frame(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError("Border.frame must be a bool")
        self._frame = value

    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        """True if the border has no value that affects rendering."""
        return (self._style is BorderStyle.NONE
                and self._size is None
                and self._color is None
                and self._spacing is None
                and not self._shadow
                and not self._frame)

    def copy(self) -> "Border":
        """Independent border with the same content."""
        clone = Border.__new__(Border)
        clone._style = self._style
        clone._size = self._size
        clone._color = self._color
        clone._spacing = self._spacing
        clone._shadow = self._shadow
        clone._frame = self._frame
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "Border":
        return self.copy()

    def _key(self) -> tuple:
        return (self._style, self._size, self._color, self._spacing, self._shadow, self._frame)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Border):
            return NotImplemented
        return self._key() == other._key()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'style': self._style.value,
            'size': self._size.eighths if self._size is not None else None,
            'color': str(self._color) if self._color is not None else None,
            'spacing': self._spacing.whole_points if self._spacing is not None else None,
            'shadow': self._shadow,
            'frame': self._frame,
        }

    def __repr__(self) -> str:
        parts = [f"style={self._style.name}"]
        if self._size is not None:
            parts.append(f"size={self._size.points:g}pt")
        if self._color is not None:
            parts.append(f"color={self._color}")
        if self._spacing is not None:
            parts.append(f"spacing={self._spacing.points:g}pt")
        if self._shadow:
            parts.append("shadow")
        if self._frame:
            parts.append("frame")
        return f"Border({', '.join(parts)})"
