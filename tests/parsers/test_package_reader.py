"""
Tests for PackageReader.
"""

import io

import pytest

from docxtree.exceptions import PackageCorruptError, PackageIOError
from docxtree.parser.package_reader import PackageReader, rels_part_for, resolve_target


class TestPackageReader:
    """Test cases for PackageReader."""

    def test_from_bytes(self, sample_package):
        reader = PackageReader(sample_package)

        assert reader.main_document_part == "word/document.xml"
        assert reader.styles_part == "word/styles.xml"
        assert "docProps/core.xml" in reader
        assert reader.source_path is None

    def test_from_path_and_stream(self, sample_docx_path, sample_package):
        from_path = PackageReader(sample_docx_path)
        from_stream = PackageReader(io.BytesIO(sample_package))

        assert from_path.source_path == str(sample_docx_path)
        assert from_path.parts == from_stream.parts

    def test_content_types(self, sample_package):
        reader = PackageReader(sample_package)

        assert reader.content_types["word/styles.xml"].endswith("styles+xml")
        assert reader.default_content_types["rels"].endswith("relationships+xml")

    def test_relationships(self, sample_package):
        reader = PackageReader(sample_package)
        package_rels = reader.relationships()
        document_rels = {rel['id']: rel for rel in reader.relationships("word/document.xml")}

        assert package_rels[0]['target'] == "word/document.xml"
        assert document_rels["rId1"]['target'] == "word/styles.xml"
        assert document_rels["rId9"]['target'] == "https://example.com"
        assert document_rels["rId9"]['mode'] == "External"
        assert reader.relationships("word/styles.xml") == []

    def test_read_and_read_xml(self, sample_package, sample_parts):
        reader = PackageReader(sample_package)

        assert reader.read("docProps/core.xml") == sample_parts["docProps/core.xml"]
        assert reader.read_xml("word/styles.xml").tag.endswith("}styles")
        with pytest.raises(KeyError):
            reader.read("word/missing.xml")

    def test_missing_file(self, temp_dir):
        with pytest.raises(PackageIOError) as exc_info:
            PackageReader(temp_dir / "missing.docx")
        assert exc_info.value.package_path.endswith("missing.docx")

    def test_not_a_zip(self):
        with pytest.raises(PackageCorruptError):
            PackageReader(b"this is not a zip archive")

    def test_missing_content_types(self, sample_parts, zip_parts):
        del sample_parts["[Content_Types].xml"]

        with pytest.raises(PackageCorruptError):
            PackageReader(zip_parts(sample_parts))

    def test_missing_main_part(self, sample_parts, zip_parts):
        del sample_parts["word/document.xml"]

        with pytest.raises(PackageCorruptError):
            PackageReader(zip_parts(sample_parts))

    def test_malformed_xml(self, sample_parts, zip_parts):
        sample_parts["[Content_Types].xml"] = b"<Types"

        with pytest.raises(PackageCorruptError):
            PackageReader(zip_parts(sample_parts))

    def test_main_part_without_relationship(self, sample_parts, zip_parts):
        del sample_parts["_rels/.rels"]

        reader = PackageReader(zip_parts(sample_parts))

        assert reader.main_document_part == "word/document.xml"

    def test_no_styles_part(self, sample_parts, zip_parts):
        del sample_parts["word/styles.xml"]

        assert PackageReader(zip_parts(sample_parts)).styles_part is None

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            PackageReader(42)


class TestPartNames:
    """Test cases for part name helpers."""

    def test_rels_part_for(self):
        assert rels_part_for("word/document.xml") == "word/_rels/document.xml.rels"
        assert rels_part_for("document.xml") == "_rels/document.xml.rels"

    def test_resolve_target(self):
        assert resolve_target("word/document.xml", "styles.xml") == "word/styles.xml"
        assert resolve_target("word/document.xml", "../customXml/item1.xml") == "customXml/item1.xml"
        assert resolve_target("word/document.xml", "/word/theme/theme1.xml") == "word/theme/theme1.xml"
        assert resolve_target("", "word/document.xml") == "word/document.xml"
