"""Style catalog and formatting cascade."""

from .style import Style
from .defaults import DocumentDefaults, fallback_paragraph_formatting, fallback_run_formatting
from .style_manager import StyleManager
from .style_cascade_engine import (
    EffectiveParagraphFormatting,
    EffectiveRunFormatting,
    StyleCascadeEngine,
)

__all__ = [
    "Style",
    "DocumentDefaults",
    "fallback_paragraph_formatting",
    "fallback_run_formatting",
    "StyleManager",
    "EffectiveParagraphFormatting",
    "EffectiveRunFormatting",
    "StyleCascadeEngine",
]
