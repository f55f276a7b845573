"""
DOCX exporter: writes package parts into a zip container.

Also builds the minimal set of parts for a new document and adds the
styles part to packages that lack one.
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union

from lxml import etree

from ..exceptions import PackageIOError
from ..parser.package_reader import (
    CONTENT_TYPES_PART,
    DEFAULT_MAIN_PART,
    DEFAULT_STYLES_PART,
    PACKAGE_RELS_PART,
    REL_OFFICE_DOCUMENT,
    REL_STYLES,
    rels_part_for,
)
from ..utils.xml_utils import NAMESPACES, parse_xml, serialize_xml

logger = logging.getLogger(__name__)

CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_MAIN_DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
CT_STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"

# Fixed timestamp so that saving the same content yields the same bytes
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

Target = Union[str, Path, BinaryIO]


def _ct(tag: str) -> str:
    return f"{{{NAMESPACES['ct']}}}{tag}"


def _rel(tag: str) -> str:
    return f"{{{NAMESPACES['rels']}}}{tag}"


def content_types_xml(overrides: Dict[str, str], defaults: Optional[Dict[str, str]] = None) -> bytes:
    """Build ``[Content_Types].xml``."""
    root = etree.Element(_ct("Types"), nsmap={None: NAMESPACES['ct']})
    for extension, content_type in (defaults or {'rels': CT_RELATIONSHIPS, 'xml': CT_XML}).items():
        etree.SubElement(root, _ct("Default"), Extension=extension, ContentType=content_type)
    for part_name, content_type in overrides.items():
        etree.SubElement(root, _ct("Override"), PartName=f"/{part_name}", ContentType=content_type)
    return serialize_xml(root)


def relationships_xml(relationships) -> bytes:
    """Build a relationships part from ``(id, type, target)`` tuples."""
    root = etree.Element(_rel("Relationships"), nsmap={None: NAMESPACES['rels']})
    for rel_id, rel_type, target in relationships:
        etree.SubElement(root, _rel("Relationship"), Id=rel_id, Type=rel_type, Target=target)
    return serialize_xml(root)


def new_package_parts(document_xml: bytes, styles_xml: bytes) -> Dict[str, bytes]:
    """Parts of a new, minimal document package."""
    return {
        CONTENT_TYPES_PART: content_types_xml({
            DEFAULT_MAIN_PART: CT_MAIN_DOCUMENT,
            DEFAULT_STYLES_PART: CT_STYLES,
        }),
        PACKAGE_RELS_PART: relationships_xml([("rId1", REL_OFFICE_DOCUMENT, DEFAULT_MAIN_PART)]),
        DEFAULT_MAIN_PART: document_xml,
        rels_part_for(DEFAULT_MAIN_PART): relationships_xml([("rId1", REL_STYLES, "styles.xml")]),
        DEFAULT_STYLES_PART: styles_xml,
    }


def add_styles_part(parts: Dict[str, bytes], main_part: str) -> str:
    """
    Register a styles part next to ``main_part`` in a package without one.

    Updates the content types and the main part's relationships in
    ``parts``; the caller stores the styles XML itself.

    Returns:
        Name of the new styles part
    """
    styles_part = posixpath.join(posixpath.dirname(main_part), "styles.xml")

    types = parse_xml(parts[CONTENT_TYPES_PART], CONTENT_TYPES_PART)
    for override in types.findall(_ct("Override")):
        if override.get("PartName", "").lstrip("/") == styles_part:
            types.remove(override)
    etree.SubElement(types, _ct("Override"), PartName=f"/{styles_part}", ContentType=CT_STYLES)
    parts[CONTENT_TYPES_PART] = serialize_xml(types)

    rels_name = rels_part_for(main_part)
    if rels_name in parts:
        rels = parse_xml(parts[rels_name], rels_name)
    else:
        rels = etree.Element(_rel("Relationships"), nsmap={None: NAMESPACES['rels']})
    taken = {rel.get("Id") for rel in rels}
    counter = 1
    while f"rId{counter}" in taken:
        counter += 1
    etree.SubElement(rels, _rel("Relationship"), Id=f"rId{counter}", Type=REL_STYLES, Target="styles.xml")
    parts[rels_name] = serialize_xml(rels)

    logger.info(f"Added styles part {styles_part}")
    return styles_part


class DOCXExporter:
    """
    Write package parts to a DOCX (zip) container.

    ``[Content_Types].xml`` is always written first; other parts keep the
    order of ``parts``.

    Args:
        parts: part name -> bytes
        compression: zipfile compression method
    """

    def __init__(self, parts: Dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED):
        if CONTENT_TYPES_PART not in parts:
            raise ValueError(f"Package has no {CONTENT_TYPES_PART}")
        self.parts = parts
        self.compression = compression

    def _write(self, stream: BinaryIO) -> None:
        names = [CONTENT_TYPES_PART] + [name for name in self.parts if name != CONTENT_TYPES_PART]
        with zipfile.ZipFile(stream, "w", self.compression) as archive:
            for name in names:
                info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
                info.compress_type = self.compression
                archive.writestr(info, self.parts[name])

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self._write(buffer)
        return buffer.getvalue()

    def export(self, target: Target) -> None:
        """
        Write the package to a path or a binary stream.

        Raises:
            PackageIOError: if the file system write fails
        """
        if hasattr(target, "write"):
            self._write(target)  # type: ignore[arg-type]
            return
        data = self.to_bytes()
        path = Path(target)  # type: ignore[arg-type]
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise PackageIOError("Cannot write package", str(exc), package_path=str(path)) from exc
        logger.info(f"Wrote {len(self.parts)} parts to {path}")
