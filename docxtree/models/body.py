"""Body model: the ordered block sequence of the main document part."""

import logging
from typing import Iterator, List, Optional

from .base import Models
from .fragment import OpaqueFragment
from .paragraph import Paragraph

logger = logging.getLogger(__name__)


class UnknownBlock(Models):
    """Block-level element kept verbatim (tables, content controls, ...)."""

    def __init__(self, fragment: OpaqueFragment):
        super().__init__()
        if not isinstance(fragment, OpaqueFragment):
            raise TypeError("UnknownBlock wraps an OpaqueFragment")
        self.fragment = fragment

    def __repr__(self) -> str:
        return f"UnknownBlock({self.fragment!r})"


class Body(Models):
    """
    Document body.

    Children are paragraphs and unknown blocks in document order. The
    section properties (``w:sectPr``) are held apart and always written last.
    """

    allowed_children = (Paragraph, UnknownBlock)

    def __init__(self):
        super().__init__()
        self.section_properties: Optional[OpaqueFragment] = None

    @property
    def blocks(self) -> List[Models]:
        return list(self.children)  # type: ignore[arg-type]

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [child for child in self.children if isinstance(child, Paragraph)]

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        return self.iter_children(Paragraph)  # type: ignore[return-value]

    def add_paragraph(self, paragraph: Paragraph) -> Paragraph:
        self.add_child(paragraph)
        return paragraph

    def insert_paragraph(self, index: int, paragraph: Paragraph) -> Paragraph:
        """
        Insert ``paragraph`` so that it becomes ``paragraphs[index]``.

        Unknown blocks keep their position relative to the paragraphs around
        them. ``index == len(paragraphs)`` appends.
        """
        paragraphs = self.paragraphs
        if index < 0:
            index += len(paragraphs)
        if not 0 <= index <= len(paragraphs):
            raise IndexError(f"Paragraph index {index} out of range")
        if index == len(paragraphs):
            return self.add_paragraph(paragraph)
        self.insert_child(self.index_of(paragraphs[index]), paragraph)
        return paragraph

    def __repr__(self) -> str:
        return f"Body(blocks={len(self.children)}, paragraphs={len(self.paragraphs)})"
