"""Run model for DOCX documents."""

import logging
from typing import List, Optional, Union

from .base import Models
from .formatting import RunFormatting
from .fragment import OpaqueFragment

logger = logging.getLogger(__name__)

RunContent = Union[str, OpaqueFragment]


def _check_style_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Style name must be a non-empty string")
    return name


class Run(Models):
    """
    A span of text sharing one formatting context.

    The run's children are its content: text segments and opaque fragments
    (drawings, field characters, ...) in document order. Inside text, ``"\\t"``
    stands for a tab and ``"\\n"`` for a line break.
    """

    allowed_children = (str, OpaqueFragment)

    def __init__(self, text: str = "", style: Optional[str] = None,
                 properties: Optional[RunFormatting] = None):
        super().__init__()
        self._style_name: Optional[str] = _check_style_name(style)
        self._properties = RunFormatting()
        # w:r without children; carries attributes such as w:rsidR
        self.shell: Optional[OpaqueFragment] = None
        if properties is not None:
            self.properties = properties
        if text:
            self.add_text(text)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------
    @property
    def content(self) -> List[RunContent]:
        return self.children  # type: ignore[return-value]

    @property
    def text(self) -> str:
        return "".join(item for item in self.children if isinstance(item, str))

    @text.setter
    def text(self, value: str) -> None:
        """Replace all text; opaque content stays where it is."""
        if not isinstance(value, str):
            raise TypeError("Run text must be a string")
        positions = [i for i, item in enumerate(self.children) if isinstance(item, str)]
        anchor = positions[0] if positions else len(self.children)
        self.children = [item for item in self.children if not isinstance(item, str)]
        if value:
            self.children.insert(anchor, value)

    def add_text(self, text: str) -> "Run":
        if not isinstance(text, str):
            raise TypeError("Run text must be a string")
        if not text:
            return self
        if self.children and isinstance(self.children[-1], str):
            self.children[-1] += text
        else:
            self.add_child(text)
        return self

    def add_fragment(self, fragment: OpaqueFragment) -> "Run":
        self.add_child(fragment)
        return self

    @property
    def fragments(self) -> List[OpaqueFragment]:
        return [item for item in self.children if isinstance(item, OpaqueFragment)]

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    @property
    def properties(self) -> RunFormatting:
        """Direct formatting; edits through this object apply to this run only."""
        return self._properties

    @properties.setter
    def properties(self, value: RunFormatting) -> None:
        if value is self._properties:
            return
        if not isinstance(value, RunFormatting):
            raise TypeError(f"properties must be RunFormatting, got {type(value).__name__}")
        self._properties = value.copy()

    @property
    def style_name(self) -> Optional[str]:
        """Name of the referenced character style, or None."""
        return self._style_name

    @style_name.setter
    def style_name(self, name: Optional[str]) -> None:
        self._style_name = _check_style_name(name)

    def style(self, name: Optional[str]) -> "Run":
        """Reference the character style ``name`` (None clears it)."""
        self.style_name = name
        return self

    # ------------------------------------------------------------------
    # Siblings
    # ------------------------------------------------------------------
    @property
    def paragraph(self):
        return self.parent

    def append(self, text: str, formatting: Optional[RunFormatting] = None) -> "Run":
        """
        Add a new run right after this one in the same paragraph.

        Returns:
            The new run, so calls can be chained
        """
        if self.parent is None:
            raise ValueError("Run is not attached to a paragraph")
        run = Run(text, properties=formatting)
        self.parent.insert_child(self.parent.index_of(self) + 1, run)
        return run

    def __repr__(self) -> str:
        style = f", style={self._style_name!r}" if self._style_name else ""
        return f"Run({self.text!r}{style})"
