"""
Document defaults (``w:docDefaults``) and the fallback constants used when
neither direct formatting, styles nor document defaults set a field.
"""

import logging

from ..models.formatting import ParagraphFormatting, RunFormatting
from ..utils.color_utils import ColorValue
from ..utils.enums import Alignment, LineRule, UnderlineStyle
from ..utils.units import Uom

logger = logging.getLogger(__name__)

# Values WordprocessingML assumes when a field is set nowhere
FALLBACK_FONT_NAME = "Times New Roman"
FALLBACK_FONT_SIZE = 10.0


def fallback_paragraph_formatting() -> ParagraphFormatting:
    return ParagraphFormatting(
        alignment=Alignment.LEFT,
        keep_with_next=False,
        keep_lines_together=False,
        page_break_before=False,
        spacing_before=Uom(0),
        spacing_after=Uom(0),
        line_spacing=Uom.from_dxa(240),
        line_rule=LineRule.AUTO,
        left_indent=Uom(0),
        right_indent=Uom(0),
    )


def fallback_run_formatting() -> RunFormatting:
    return RunFormatting(
        font_name=FALLBACK_FONT_NAME,
        font_size=FALLBACK_FONT_SIZE,
        bold=False,
        italic=False,
        caps=False,
        strikethrough=False,
        underline=UnderlineStyle.NONE,
        color=ColorValue.AUTO,
    )


class DocumentDefaults:
    """
    Paragraph and run formatting applied beneath every style.

    Both sets are owned here; assigning a set stores a copy.
    """

    def __init__(self):
        self._paragraph_formatting = ParagraphFormatting()
        self._run_formatting = RunFormatting()

    @property
    def paragraph_formatting(self) -> ParagraphFormatting:
        return self._paragraph_formatting

    @paragraph_formatting.setter
    def paragraph_formatting(self, value: ParagraphFormatting) -> None:
        if value is self._paragraph_formatting:
            return
        if not isinstance(value, ParagraphFormatting):
            raise TypeError("paragraph_formatting must be ParagraphFormatting")
        self._paragraph_formatting = value.copy()

    @property
    def run_formatting(self) -> RunFormatting:
        return self._run_formatting

    @run_formatting.setter
    def run_formatting(self, value: RunFormatting) -> None:
        if value is self._run_formatting:
            return
        if not isinstance(value, RunFormatting):
            raise TypeError("run_formatting must be RunFormatting")
        self._run_formatting = value.copy()

    def is_empty(self) -> bool:
        return self._paragraph_formatting.is_empty() and self._run_formatting.is_empty()

    def __repr__(self) -> str:
        return f"DocumentDefaults(paragraph={self._paragraph_formatting!r}, run={self._run_formatting!r})"
