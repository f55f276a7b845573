"""
Package reader for DOCX files.

Loads every part of the zip package into memory and locates the main
document part and the styles part through the package relationships.
"""

import io
import logging
import posixpath
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union

from lxml import etree

from ..exceptions import PackageCorruptError, PackageIOError
from ..utils.xml_utils import NAMESPACES, parse_xml

logger = logging.getLogger(__name__)

PackageSource = Union[str, Path, bytes, bytearray, BinaryIO]

CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_RELS_PART = "_rels/.rels"

REL_OFFICE_DOCUMENT = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument"
REL_STYLES = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles"

DEFAULT_MAIN_PART = "word/document.xml"
DEFAULT_STYLES_PART = "word/styles.xml"


def rels_part_for(part_name: str) -> str:
    """Relationships part of ``part_name`` (``word/_rels/document.xml.rels``)."""
    directory, filename = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", f"{filename}.rels")


def resolve_target(source_part: str, target: str) -> str:
    """Resolve a relationship target relative to the part that declares it."""
    if target.startswith("/"):
        return target.lstrip("/")
    base = posixpath.dirname(source_part)
    return posixpath.normpath(posixpath.join(base, target))


class PackageReader:
    """
    Reads a DOCX package into memory.

    Args:
        source: file path, raw bytes or a binary stream

    Raises:
        PackageIOError: if the file cannot be read
        PackageCorruptError: if the data is not a zip or has no main document
    """

    def __init__(self, source: PackageSource):
        self.source_path: Optional[str] = None
        self.parts: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.default_content_types: Dict[str, str] = {}

        self._load(source)
        self._parse_content_types()
        self.main_document_part = self._find_main_document_part()
        self.styles_part = self._find_styles_part()

        logger.info(f"Read package with {len(self.parts)} parts (main={self.main_document_part})")

    # ------------------------------------------------------------------
    def _load(self, source: PackageSource) -> None:
        if isinstance(source, (bytes, bytearray)):
            stream: BinaryIO = io.BytesIO(bytes(source))
        elif isinstance(source, (str, Path)):
            self.source_path = str(source)
            try:
                with open(source, "rb") as handle:
                    stream = io.BytesIO(handle.read())
            except OSError as exc:
                raise PackageIOError("Cannot read package", str(exc), package_path=self.source_path) from exc
        elif hasattr(source, "read"):
            stream = source
        else:
            raise TypeError(f"Unsupported package source: {type(source).__name__}")

        try:
            with zipfile.ZipFile(stream, "r") as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    self.parts[info.filename] = archive.read(info.filename)
        except zipfile.BadZipFile as exc:
            raise PackageCorruptError("Not a zip package", str(exc), package_path=self.source_path) from exc
        except OSError as exc:
            raise PackageIOError("Cannot read package", str(exc), package_path=self.source_path) from exc

    def _parse_content_types(self) -> None:
        data = self.parts.get(CONTENT_TYPES_PART)
        if data is None:
            raise PackageCorruptError("Missing part", CONTENT_TYPES_PART, package_path=self.source_path)
        root = parse_xml(data, CONTENT_TYPES_PART)
        ct = NAMESPACES['ct']
        for override in root.iter(f"{{{ct}}}Override"):
            part_name = override.get("PartName", "")
            content_type = override.get("ContentType", "")
            if part_name and content_type:
                self.content_types[part_name.lstrip("/")] = content_type
        for default in root.iter(f"{{{ct}}}Default"):
            extension = default.get("Extension", "")
            content_type = default.get("ContentType", "")
            if extension and content_type:
                self.default_content_types[extension.lower()] = content_type

    def relationships(self, part_name: Optional[str] = None) -> List[Dict[str, str]]:
        """
        Relationships declared by ``part_name`` (package-level when None).

        Returns:
            dicts with ``id``, ``type``, ``target`` (resolved part name, or the
            raw target for external relationships) and ``mode``
        """
        rels_name = PACKAGE_RELS_PART if part_name is None else rels_part_for(part_name)
        data = self.parts.get(rels_name)
        if data is None:
            return []
        root = parse_xml(data, rels_name)
        result = []
        for rel in root.iter(f"{{{NAMESPACES['rels']}}}Relationship"):
            target = rel.get("Target", "")
            mode = rel.get("TargetMode", "Internal")
            if mode != "External":
                target = resolve_target(part_name or "", target)
            result.append({
                'id': rel.get("Id", ""),
                'type': rel.get("Type", ""),
                'target': target,
                'mode': mode,
            })
        return result

    def _find_main_document_part(self) -> str:
        for rel in self.relationships():
            if rel['type'] == REL_OFFICE_DOCUMENT and rel['target'] in self.parts:
                return rel['target']
        if DEFAULT_MAIN_PART in self.parts:
            logger.warning("No officeDocument relationship; using word/document.xml")
            return DEFAULT_MAIN_PART
        raise PackageCorruptError("Missing main document part", package_path=self.source_path)

    def _find_styles_part(self) -> Optional[str]:
        for rel in self.relationships(self.main_document_part):
            if rel['type'] == REL_STYLES and rel['target'] in self.parts:
                return rel['target']
        if DEFAULT_STYLES_PART in self.parts:
            return DEFAULT_STYLES_PART
        return None

    # ------------------------------------------------------------------
    def read(self, part_name: str) -> bytes:
        """Raw bytes of a part; ``KeyError`` if the package has no such part."""
        return self.parts[part_name]

    def read_xml(self, part_name: str) -> etree._Element:
        return parse_xml(self.read(part_name), part_name)

    def __contains__(self, part_name: str) -> bool:
        return part_name in self.parts

    def __repr__(self) -> str:
        return f"PackageReader(parts={len(self.parts)}, main={self.main_document_part!r})"
