"""Paragraph model for DOCX documents."""

import logging
from typing import List, Optional

from .base import Models
from .formatting import ParagraphFormatting, RunFormatting
from .fragment import OpaqueFragment
from .run import Run, _check_style_name

logger = logging.getLogger(__name__)


class Paragraph(Models):
    """
    Paragraph with an ordered list of runs.

    Children are runs and opaque inline fragments (bookmarks, hyperlinks,
    proofing marks, ...) in document order.

    Example:
        >>> p = Paragraph("A")
        >>> p.append("B").append("C")
        Run('C')
        >>> [r.text for r in p.runs]
        ['A', 'B', 'C']
    """

    allowed_children = (Run, OpaqueFragment)

    def __init__(self, text: str = "", style: Optional[str] = None,
                 properties: Optional[ParagraphFormatting] = None):
        super().__init__()
        self._style_name: Optional[str] = _check_style_name(style)
        self._properties = ParagraphFormatting()
        # w:pPr/w:rPr, the formatting of the paragraph mark
        self.mark_properties: Optional[OpaqueFragment] = None
        # w:p without children; carries attributes such as w14:paraId
        self.shell: Optional[OpaqueFragment] = None
        if properties is not None:
            self.properties = properties
        if text:
            self.append(text)

    @property
    def runs(self) -> List[Run]:
        return [child for child in self.children if isinstance(child, Run)]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def append(self, text: str, formatting: Optional[RunFormatting] = None) -> Run:
        """
        Append a new run; never merges into the previous run.

        Args:
            text: run text
            formatting: direct formatting for the run (copied)

        Returns:
            The new run
        """
        if not isinstance(text, str):
            raise TypeError("Run text must be a string")
        run = Run(text, properties=formatting)
        self.add_child(run)
        return run

    def add_run(self, run: Run) -> Run:
        self.add_child(run)
        return run

    @property
    def properties(self) -> ParagraphFormatting:
        return self._properties

    @properties.setter
    def properties(self, value: ParagraphFormatting) -> None:
        if value is self._properties:
            return
        if not isinstance(value, ParagraphFormatting):
            raise TypeError(f"properties must be ParagraphFormatting, got {type(value).__name__}")
        self._properties = value.copy()

    @property
    def style_name(self) -> Optional[str]:
        return self._style_name

    @style_name.setter
    def style_name(self, name: Optional[str]) -> None:
        self._style_name = _check_style_name(name)

    def style(self, name: Optional[str]) -> "Paragraph":
        """Reference the paragraph style ``name`` (None clears it)."""
        self.style_name = name
        return self

    def _sibling(self, text: str, style: Optional[str], offset: int) -> "Paragraph":
        if self.parent is None:
            raise ValueError("Paragraph is not attached to a document body")
        paragraph = Paragraph(text, style=style)
        self.parent.insert_child(self.parent.index_of(self) + offset, paragraph)
        return paragraph

    def insert_before(self, text: str = "", style: Optional[str] = None) -> "Paragraph":
        """Insert a new paragraph directly before this one."""
        return self._sibling(text, style, 0)

    def insert_after(self, text: str = "", style: Optional[str] = None) -> "Paragraph":
        """Insert a new paragraph directly after this one."""
        return self._sibling(text, style, 1)

    def __repr__(self) -> str:
        style = f", style={self._style_name!r}" if self._style_name else ""
        return f"Paragraph({self.text!r}, runs={len(self.runs)}{style})"
