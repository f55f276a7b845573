"""Value types and helpers shared across docxtree."""

from .units import Uom, coerce_uom
from .color_utils import ColorValue, coerce_color
from .enums import (
    Alignment,
    BorderSide,
    BorderStyle,
    DocumentState,
    LineRule,
    ShadePattern,
    StyleType,
    UnderlineStyle,
)
from .logger import configure_logging, get_logger, set_log_level

__all__ = [
    "Uom",
    "coerce_uom",
    "ColorValue",
    "coerce_color",
    "Alignment",
    "BorderSide",
    "BorderStyle",
    "DocumentState",
    "LineRule",
    "ShadePattern",
    "StyleType",
    "UnderlineStyle",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
