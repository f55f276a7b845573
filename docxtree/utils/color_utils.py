"""Color values for DOCX documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Tuple

from ..exceptions import InvalidColorError

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")
_BYTE_RE = re.compile(r"^[0-9A-Fa-f]{2}$")

THEME_COLORS = (
    "dark1", "light1", "dark2", "light2",
    "accent1", "accent2", "accent3", "accent4", "accent5", "accent6",
    "hyperlink", "followedHyperlink", "none",
    "background1", "text1", "background2", "text2",
)

NAMED_COLORS = {
    'black': "000000",
    'white': "FFFFFF",
    'red': "FF0000",
    'green': "00FF00",
    'blue': "0000FF",
    'yellow': "FFFF00",
    'cyan': "00FFFF",
    'magenta': "FF00FF",
    'gray': "808080",
    'grey': "808080",
}


@dataclass(frozen=True)
class ColorValue:
    """
    A WordprocessingML color: an RGB hex value or ``auto``, optionally
    overridden by a theme color with tint/shade.

    Attributes:
        rgb: ``RRGGBB`` in upper case, ``"auto"`` or ``None``
        theme_color: one of :data:`THEME_COLORS`
        theme_tint: two-digit hex tint applied to the theme color
        theme_shade: two-digit hex shade applied to the theme color
    """

    rgb: Optional[str] = None
    theme_color: Optional[str] = None
    theme_tint: Optional[str] = None
    theme_shade: Optional[str] = None

    AUTO: ClassVar["ColorValue"]

    def __post_init__(self) -> None:
        if self.rgb is not None:
            if not isinstance(self.rgb, str):
                raise InvalidColorError("Color must be a hex string", repr(self.rgb))
            if self.rgb.lower() == "auto":
                object.__setattr__(self, "rgb", "auto")
            elif _HEX_RE.match(self.rgb):
                object.__setattr__(self, "rgb", self.rgb.upper())
            else:
                raise InvalidColorError("Invalid RGB color", repr(self.rgb))
        if self.theme_color is not None and self.theme_color not in THEME_COLORS:
            raise InvalidColorError("Unknown theme color", repr(self.theme_color))
        for name in ("theme_tint", "theme_shade"):
            value = getattr(self, name)
            if value is not None:
                if not isinstance(value, str) or not _BYTE_RE.match(value):
                    raise InvalidColorError(f"Invalid {name}", repr(value))
                object.__setattr__(self, name, value.upper())

    @classmethod
    def from_hex(cls, value: str) -> "ColorValue":
        """Parse ``#RRGGBB``, ``RRGGBB``, ``#RGB``, ``auto`` or a basic color name."""
        if not isinstance(value, str) or not value.strip():
            raise InvalidColorError("Color must be a non-empty string", repr(value))
        text = value.strip()
        if text.lower() in NAMED_COLORS:
            return cls(rgb=NAMED_COLORS[text.lower()])
        text = text.lstrip('#')
        if len(text) == 3:
            text = ''.join(c * 2 for c in text)
        return cls(rgb=text)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "ColorValue":
        for component in (red, green, blue):
            if isinstance(component, bool) or not isinstance(component, int) or not 0 <= component <= 255:
                raise InvalidColorError("RGB components must be integers 0-255", repr((red, green, blue)))
        return cls(rgb=f"{red:02X}{green:02X}{blue:02X}")

    @property
    def is_auto(self) -> bool:
        return self.rgb == "auto"

    @property
    def is_empty(self) -> bool:
        return self.rgb is None and self.theme_color is None

    def to_rgb(self) -> Optional[Tuple[int, int, int]]:
        """RGB components, or ``None`` for ``auto``/theme-only colors."""
        if self.rgb is None or self.is_auto:
            return None
        return tuple(int(self.rgb[i:i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]

    def __str__(self) -> str:
        if self.theme_color and not self.rgb:
            return self.theme_color
        return self.rgb or ""


ColorValue.AUTO = ColorValue(rgb="auto")


def coerce_color(value: Any) -> ColorValue:
    """
    Accept a :class:`ColorValue`, a hex/named color string or an RGB tuple.

    Raises:
        InvalidColorError: if the value cannot be interpreted as a color
    """
    if isinstance(value, ColorValue):
        return value
    if isinstance(value, str):
        return ColorValue.from_hex(value)
    if isinstance(value, (tuple, list)) and len(value) == 3:
        return ColorValue.from_rgb(*value)
    raise InvalidColorError("Unsupported color value", repr(value))
