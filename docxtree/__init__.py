"""
docxtree - build, edit and round-trip WordprocessingML (.docx) documents.

Main Components:
- Document: owner of the body, the style catalog and the package parts
- Models: paragraphs, runs and value-semantic formatting
- Styles: style catalog and the formatting cascade
- Parser / Export: the XML and package serialization adapter
- Utils: units of measure, colors, enumerations and logging helpers
"""

from .config import DocumentOptions
from .document import Document
from .exceptions import (
    DocumentStateError,
    DocxTreeError,
    DuplicateStyleNameError,
    InvalidColorError,
    InvalidMeasurementError,
    PackageCorruptError,
    PackageError,
    PackageIOError,
    SerializationMappingError,
    StyleError,
    StyleInUseError,
    UnknownStyleReferenceError,
)
from .models import (
    Body,
    Border,
    Font,
    OpaqueFragment,
    Paragraph,
    ParagraphFormatting,
    Run,
    RunFormatting,
    UnknownBlock,
)
from .styles import Style, StyleManager
from .utils import (
    Alignment,
    BorderSide,
    BorderStyle,
    ColorValue,
    DocumentState,
    LineRule,
    ShadePattern,
    StyleType,
    UnderlineStyle,
    Uom,
    configure_logging,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "DocumentOptions",
    "DocxTreeError",
    "InvalidMeasurementError",
    "InvalidColorError",
    "StyleError",
    "DuplicateStyleNameError",
    "StyleInUseError",
    "UnknownStyleReferenceError",
    "PackageError",
    "PackageCorruptError",
    "PackageIOError",
    "SerializationMappingError",
    "DocumentStateError",
    "Body",
    "Border",
    "Font",
    "OpaqueFragment",
    "Paragraph",
    "ParagraphFormatting",
    "Run",
    "RunFormatting",
    "UnknownBlock",
    "Style",
    "StyleManager",
    "Alignment",
    "BorderSide",
    "BorderStyle",
    "ColorValue",
    "DocumentState",
    "LineRule",
    "ShadePattern",
    "StyleType",
    "UnderlineStyle",
    "Uom",
    "configure_logging",
]
