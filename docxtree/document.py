"""
Document: owner of the body, the style catalog and the package parts.

Typical use::

    doc = Document.create("report.docx")
    code = doc.styles.add_style("Code", StyleType.PARAGRAPH)
    code.paragraph_formatting.shade_fill = "EEEEEE"
    doc.add_paragraph("print('hi')").style("Code")
    doc.save()
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import DocumentOptions
from .exceptions import DocumentStateError
from .export.docx_exporter import DOCXExporter, add_styles_part, new_package_parts
from .export.xml_exporter import XMLExporter
from .models.body import Body
from .models.paragraph import Paragraph
from .models.run import Run
from .parser.package_reader import PackageReader, PackageSource
from .parser.properties_parser import PropertiesParser
from .parser.style_parser import StyleParser
from .parser.xml_parser import DocumentShell, XMLParser
from .styles.style import Style
from .styles.style_cascade_engine import (
    EffectiveParagraphFormatting,
    EffectiveRunFormatting,
    StyleCascadeEngine,
)
from .styles.style_manager import StyleManager
from .utils.enums import DocumentState, StyleType

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Document:
    """
    A WordprocessingML document.

    Use :meth:`create`, :meth:`open` or :meth:`from_bytes`; a bare
    ``Document()`` is unopened and rejects edits. Nothing is written until
    :meth:`save` is called, and leaving a ``with`` block does not save.

    The state (:attr:`state`) is derived from the serialized form: the
    document is MODIFIED whenever saving would produce something different
    from what was created, loaded or last saved.
    """

    def __init__(self, options: Optional[DocumentOptions] = None):
        self.options = options or DocumentOptions()
        self.path: Optional[Path] = None
        self.body = Body()
        self.styles = StyleManager(reference_counter=self._count_style_references)

        # every part of a loaded package; modelled parts are regenerated on save
        self._parts: Dict[str, bytes] = {}
        self._main_part: Optional[str] = None
        self._styles_part: Optional[str] = None
        self._shell: Optional[DocumentShell] = None

        self._origin = DocumentState.UNOPENED
        self._fingerprint: Optional[str] = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def create(cls, path: Optional[PathLike] = None, options: Optional[DocumentOptions] = None) -> "Document":
        """
        New empty document, bound to ``path`` for :meth:`save`.

        The file is not written until :meth:`save` is called.
        """
        document = cls(options)
        document.path = Path(path) if path is not None else None
        if document.options.default_font is not None:
            document.styles.defaults.run_formatting.font = document.options.default_font
        if document.options.create_normal_style:
            normal = document.styles.add_style("Normal", StyleType.PARAGRAPH)
            normal.is_custom = False
            document.styles.set_default_style("Normal", StyleType.PARAGRAPH)
        document._mark_clean(DocumentState.CREATED)
        logger.info(f"Created document{f' bound to {document.path}' if document.path else ''}")
        return document

    @classmethod
    def open(cls, path: PathLike, options: Optional[DocumentOptions] = None) -> "Document":
        """
        Load a document from a file.

        Raises:
            PackageIOError: if the file cannot be read
            PackageCorruptError: if the package is malformed
            SerializationMappingError: for out-of-domain values in strict mode
        """
        document = cls(options)
        document.path = Path(path)
        document._load(PackageReader(path))
        return document

    @classmethod
    def from_bytes(cls, data: PackageSource, options: Optional[DocumentOptions] = None) -> "Document":
        """Load a document from bytes or a binary stream."""
        document = cls(options)
        document._load(PackageReader(data))
        return document

    def _load(self, reader: PackageReader) -> None:
        properties_parser = PropertiesParser(
            strict_mapping=self.options.strict_mapping,
            preserve_unknown=self.options.preserve_unknown,
        )
        self._parts = dict(reader.parts)
        self._main_part = reader.main_document_part
        self._styles_part = reader.styles_part
        if self._styles_part is not None:
            StyleParser(properties_parser).parse(self._parts[self._styles_part], self.styles, self._styles_part)
        self.body, self._shell = XMLParser(properties_parser, self.styles).parse(
            self._parts[self._main_part], self._main_part
        )
        self._mark_clean(DocumentState.LOADED)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> DocumentState:
        if self._origin is DocumentState.UNOPENED:
            return DocumentState.UNOPENED
        if self._compute_fingerprint(self._build_parts()) != self._fingerprint:
            return DocumentState.MODIFIED
        return self._origin

    @property
    def is_modified(self) -> bool:
        return self.state is DocumentState.MODIFIED

    def _ensure_open(self) -> None:
        if self._origin is DocumentState.UNOPENED:
            raise DocumentStateError("Document is not open", "use Document.create/open/from_bytes")

    def _mark_clean(self, state: DocumentState) -> None:
        self._origin = state
        self._fingerprint = self._compute_fingerprint(self._build_parts())

    @staticmethod
    def _compute_fingerprint(parts: Dict[str, bytes]) -> str:
        digest = hashlib.sha256()
        for name, data in parts.items():
            digest.update(name.encode("utf-8"))
            digest.update(b"\0")
            digest.update(hashlib.sha256(data).digest())
        return digest.hexdigest()

    # ------------------------------------------------------------------
    # Tree operations
    # ------------------------------------------------------------------
    @property
    def paragraphs(self) -> List[Paragraph]:
        return self.body.paragraphs

    def add_paragraph(self, text: str = "", style: Optional[str] = None) -> Paragraph:
        """
        Append a paragraph holding one run with ``text`` (no run when empty).

        Returns:
            The new paragraph, for chaining (``.append(...)``, ``.style(...)``)
        """
        self._ensure_open()
        return self.body.add_paragraph(Paragraph(text, style=style))

    def insert_paragraph(self, index: int, text: str = "", style: Optional[str] = None) -> Paragraph:
        """Insert a paragraph so that it becomes ``paragraphs[index]``."""
        self._ensure_open()
        return self.body.insert_paragraph(index, Paragraph(text, style=style))

    def remove_paragraph(self, paragraph: Paragraph) -> None:
        self._ensure_open()
        if paragraph.parent is not self.body:
            raise ValueError("Paragraph does not belong to this document")
        self.body.remove_child(paragraph)

    def resolve(self, node: Union[Paragraph, Run], strict: bool = False) -> Union[EffectiveParagraphFormatting,
                                                                                   EffectiveRunFormatting]:
        """
        Effective formatting of a paragraph or run.

        Unknown style references are reported in ``diagnostics``; with
        ``strict=True`` they raise ``UnknownStyleReferenceError``.
        """
        engine = StyleCascadeEngine(self.styles, strict=strict)
        if isinstance(node, Paragraph):
            return engine.resolve_paragraph(node)
        if isinstance(node, Run):
            return engine.resolve_run(node)
        raise TypeError(f"Cannot resolve formatting of {type(node).__name__}")

    def _count_style_references(self, style: Style) -> int:
        count = 0
        for paragraph in self.body.iter_paragraphs():
            if style.style_type is StyleType.PARAGRAPH and paragraph.style_name == style.name:
                count += 1
            elif style.style_type is StyleType.CHARACTER:
                count += sum(1 for run in paragraph.runs if run.style_name == style.name)
        return count

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def _build_parts(self) -> Dict[str, bytes]:
        exporter = XMLExporter(self.styles)
        document_xml = exporter.export_document(self.body, self._shell)
        styles_xml = exporter.export_styles()
        if self._main_part is None:
            return new_package_parts(document_xml, styles_xml)

        parts = dict(self._parts)
        parts[self._main_part] = document_xml
        styles_part = self._styles_part
        if styles_part is None and (len(self.styles) or not self.styles.defaults.is_empty() or self.styles.extra):
            styles_part = add_styles_part(parts, self._main_part)
        if styles_part is not None:
            parts[styles_part] = styles_xml
        return parts

    def to_bytes(self) -> bytes:
        """Serialize the package in memory; does not change :attr:`state`."""
        self._ensure_open()
        return DOCXExporter(self._build_parts(), self.options.compression).to_bytes()

    def save(self, path: Optional[PathLike] = None) -> None:
        """
        Write the package to ``path`` (rebinding the document) or to the bound path.

        Raises:
            DocumentStateError: if the document is unopened or has no path
            PackageIOError: if writing fails
        """
        self._ensure_open()
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise DocumentStateError("Document has no path", "pass a path to save()")
        parts = self._build_parts()
        DOCXExporter(parts, self.options.compression).export(self.path)
        self._origin = DocumentState.SAVED
        self._fingerprint = self._compute_fingerprint(parts)
        logger.info(f"Saved document to {self.path}")

    # ------------------------------------------------------------------
    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        return False

    def __repr__(self) -> str:
        return (f"Document(path={str(self.path) if self.path else None!r}, "
                f"paragraphs={len(self.paragraphs)}, styles={len(self.styles)})")
