"""Document options."""

import zipfile
from dataclasses import dataclass, field
from typing import Optional

from .models.font import Font


@dataclass(frozen=True)
class DocumentOptions:
    """
    Options for creating, loading and saving documents.

    Attributes:
        strict_mapping: raise ``SerializationMappingError`` when a recognized
            element holds an out-of-domain value; when False the element is
            kept opaque and a warning is logged.
        preserve_unknown: keep unmodelled XML as opaque fragments on load;
            when False it is dropped.
        compression: zip compression method used on save.
        default_font: font written into the document defaults of new documents.
        create_normal_style: give new documents a default "Normal" paragraph style.
    """

    strict_mapping: bool = True
    preserve_unknown: bool = True
    compression: int = zipfile.ZIP_DEFLATED
    default_font: Optional[Font] = field(default_factory=lambda: Font("Calibri", 11))
    create_normal_style: bool = True

    def __post_init__(self) -> None:
        if self.compression not in (zipfile.ZIP_STORED, zipfile.ZIP_DEFLATED):
            raise ValueError(f"Unsupported compression method: {self.compression}")
        if self.default_font is not None and not isinstance(self.default_font, Font):
            raise TypeError("default_font must be a Font or None")
