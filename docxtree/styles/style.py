"""Named formatting template owned by the style catalog."""

from typing import Any, List, Optional

from ..models.formatting import ParagraphFormatting, RunFormatting
from ..models.fragment import OpaqueFragment
from ..utils.enums import StyleType


class Style:
    """
    A paragraph, character, table or numbering style.

    ``name`` and ``style_type`` form the style's key in the catalog and are
    fixed at creation. ``style_id`` is the identifier used inside the XML
    parts; paragraphs and runs refer to styles by name.

    Attributes:
        based_on: name of the parent style of the same type, or None
        next_style: name of the style for the paragraph following this one
        is_default: default style for its type
        is_custom: user-defined rather than built in
        extra: unmodelled ``w:style`` children (uiPriority, qFormat, tblPr, ...)
    """

    def __init__(self, name: str, style_type: Any, style_id: str,
                 based_on: Optional[str] = None, next_style: Optional[str] = None,
                 is_default: bool = False, is_custom: bool = True):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Style name must be a non-empty string")
        if not isinstance(style_id, str) or not style_id:
            raise ValueError("Style id must be a non-empty string")
        self._name = name
        self._style_type = StyleType.coerce(style_type)
        self.style_id = style_id
        self.based_on = based_on
        self.next_style = next_style
        self.is_default = is_default
        self.is_custom = is_custom
        self._paragraph_formatting = ParagraphFormatting()
        self._run_formatting = RunFormatting()
        self.extra: List[OpaqueFragment] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def style_type(self) -> StyleType:
        return self._style_type

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

    def __repr__(self) -> str:
        base = f", based_on={self.based_on!r}" if self.based_on else ""
        return f"Style({self._name!r}, {self._style_type.value}, id={self.style_id!r}{base})"
