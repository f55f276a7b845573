"""Custom exceptions for docxtree."""

from typing import Optional


class DocxTreeError(Exception):
    """Base exception for docxtree errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidMeasurementError(DocxTreeError, ValueError):
    """Raised when a length is negative, not finite or not a number."""

    pass


class InvalidColorError(DocxTreeError, ValueError):
    """Raised when a color value cannot be interpreted."""

    pass


class StyleError(DocxTreeError):
    """Exception raised by style catalog operations."""

    pass


class DuplicateStyleNameError(StyleError):
    """Raised when a style name is already taken for the given style type."""

    def __init__(self, name: str, style_type: str):
        super().__init__(f"Style '{name}' already exists", f"type={style_type}")
        self.name = name
        self.style_type = style_type


class StyleInUseError(StyleError):
    """Raised when removing a style that is still referenced."""

    def __init__(self, name: str, style_type: str, references: int):
        super().__init__(
            f"Style '{name}' is still referenced",
            f"type={style_type}, references={references}",
        )
        self.name = name
        self.style_type = style_type
        self.references = references


class UnknownStyleReferenceError(StyleError):
    """
    A paragraph, run or style references a style missing from the catalog.

    Reported through ``diagnostics`` during resolution; only raised when
    resolution runs in strict mode.
    """

    def __init__(self, name: str, style_type: str, details: Optional[str] = None):
        super().__init__(f"Unknown {style_type} style '{name}'", details)
        self.name = name
        self.style_type = style_type


class PackageError(DocxTreeError):
    """Exception raised by the package (zip) layer."""

    def __init__(self, message: str, details: Optional[str] = None,
                 package_path: Optional[str] = None):
        super().__init__(message, details)
        self.package_path = package_path


class PackageCorruptError(PackageError):
    """Package is not a readable zip or lacks a required part."""

    pass


class PackageIOError(PackageError):
    """File system error while reading or writing a package."""

    pass


class SerializationMappingError(DocxTreeError):
    """A recognized element or attribute holds a value outside the model's domain."""

    def __init__(self, message: str, tag: Optional[str] = None, value: Optional[str] = None):
        details = None
        if tag is not None:
            details = f"{tag}={value!r}"
        super().__init__(message, details)
        self.tag = tag
        self.value = value


class DocumentStateError(DocxTreeError):
    """Operation is not valid in the document's current state."""

    pass
