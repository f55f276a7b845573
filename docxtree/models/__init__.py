"""Document tree and formatting models."""

from .base import Models
from .border import Border
from .font import Font
from .formatting import FormattingSet, ParagraphFormatting, RunFormatting
from .fragment import OpaqueFragment
from .run import Run
from .paragraph import Paragraph
from .body import Body, UnknownBlock

__all__ = [
    "Models",
    "Border",
    "Font",
    "FormattingSet",
    "ParagraphFormatting",
    "RunFormatting",
    "OpaqueFragment",
    "Run",
    "Paragraph",
    "Body",
    "UnknownBlock",
]
