"""Readers for DOCX packages and their XML parts."""

from .package_reader import PackageReader
from .properties_parser import PropertiesParser
from .style_parser import StyleParser
from .xml_parser import DocumentShell, XMLParser

__all__ = [
    "PackageReader",
    "PropertiesParser",
    "StyleParser",
    "DocumentShell",
    "XMLParser",
]
