"""
Tests for DOCXExporter and the package part helpers.
"""

import io
import zipfile

import pytest
from lxml import etree

from docxtree.exceptions import PackageIOError
from docxtree.export.docx_exporter import (
    CT_STYLES,
    ZIP_DATE_TIME,
    DOCXExporter,
    add_styles_part,
    new_package_parts,
)
from docxtree.parser.package_reader import PackageReader

RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


@pytest.fixture
def parts():
    document = f'<w:document xmlns:w="{W}"><w:body/></w:document>'.encode()
    styles = f'<w:styles xmlns:w="{W}"/>'.encode()
    return new_package_parts(document, styles)


class TestNewPackageParts:
    """Test cases for new_package_parts."""

    def test_minimal_parts(self, parts):
        assert sorted(parts) == sorted([
            "[Content_Types].xml",
            "_rels/.rels",
            "word/document.xml",
            "word/_rels/document.xml.rels",
            "word/styles.xml",
        ])

    def test_readable_package(self, parts):
        reader = PackageReader(DOCXExporter(parts).to_bytes())

        assert reader.main_document_part == "word/document.xml"
        assert reader.styles_part == "word/styles.xml"
        assert reader.content_types["word/styles.xml"] == CT_STYLES


class TestAddStylesPart:
    """Test cases for add_styles_part."""

    def test_registers_part(self, parts):
        del parts["word/styles.xml"]
        del parts["word/_rels/document.xml.rels"]

        name = add_styles_part(parts, "word/document.xml")
        parts[name] = b'<w:styles xmlns:w="%s"/>' % W.encode()
        reader = PackageReader(DOCXExporter(parts).to_bytes())

        assert name == "word/styles.xml"
        assert reader.styles_part == "word/styles.xml"
        assert reader.content_types["word/styles.xml"] == CT_STYLES

    def test_relationship_id_is_unique(self, parts):
        name = add_styles_part(parts, "word/document.xml")

        rels = etree.fromstring(parts["word/_rels/document.xml.rels"])
        ids = [rel.get("Id") for rel in rels.iter(f"{{{RELS_NS}}}Relationship")]

        assert name == "word/styles.xml"
        assert ids == ["rId1", "rId2"]


class TestDOCXExporter:
    """Test cases for DOCXExporter."""

    def test_content_types_first(self, parts):
        data = DOCXExporter(parts).to_bytes()

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            infos = archive.infolist()
        assert infos[0].filename == "[Content_Types].xml"
        assert all(info.date_time == ZIP_DATE_TIME for info in infos)

    def test_deterministic_output(self, parts):
        assert DOCXExporter(parts).to_bytes() == DOCXExporter(dict(parts)).to_bytes()

    def test_stored_compression(self, parts):
        data = DOCXExporter(parts, zipfile.ZIP_STORED).to_bytes()

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert all(info.compress_type == zipfile.ZIP_STORED for info in archive.infolist())

    def test_requires_content_types(self, parts):
        del parts["[Content_Types].xml"]

        with pytest.raises(ValueError):
            DOCXExporter(parts)

    def test_export_to_path(self, parts, temp_dir, unzip):
        target = temp_dir / "out.docx"
        DOCXExporter(parts).export(target)

        assert unzip(target.read_bytes()) == parts

    def test_export_to_stream(self, parts, unzip):
        stream = io.BytesIO()
        DOCXExporter(parts).export(stream)

        assert unzip(stream.getvalue()) == parts

    def test_export_failure(self, parts, temp_dir):
        with pytest.raises(PackageIOError) as exc_info:
            DOCXExporter(parts).export(temp_dir / "missing" / "out.docx")
        assert exc_info.value.package_path.endswith("out.docx")
