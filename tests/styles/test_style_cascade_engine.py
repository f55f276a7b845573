"""
Tests for StyleCascadeEngine.

Covers the order of formatting sources for paragraphs and runs, the
fallback constants and the reporting of unknown style references.
"""

import pytest

from docxtree.exceptions import UnknownStyleReferenceError
from docxtree.models.border import Border
from docxtree.models.font import Font
from docxtree.models.paragraph import Paragraph
from docxtree.models.run import Run
from docxtree.styles.defaults import FALLBACK_FONT_NAME, FALLBACK_FONT_SIZE
from docxtree.styles.style_cascade_engine import StyleCascadeEngine
from docxtree.styles.style_manager import StyleManager
from docxtree.utils.color_utils import ColorValue
from docxtree.utils.enums import Alignment, LineRule, StyleType, UnderlineStyle
from docxtree.utils.units import Uom

F0 = Font("Calibri", 11)
F1 = Font("Consolas", 9)
F2 = Font("Courier New", 10)


@pytest.fixture
def styles():
    styles = StyleManager()
    styles.defaults.run_formatting.font = F0
    code = styles.add_style("Code", StyleType.CHARACTER)
    code.run_formatting.font = F1
    return styles


@pytest.fixture
def engine(styles):
    return StyleCascadeEngine(styles)


class TestRunCascade:
    """Run resolution: direct, character style, paragraph style, defaults, fallback."""

    def test_style_font_beats_defaults(self, engine):
        run = Paragraph().append("x").style("Code")

        assert engine.resolve_run(run).font == F1

    def test_direct_font_beats_style(self, engine):
        run = Paragraph().append("x").style("Code")
        run.properties.font = F2

        assert engine.resolve_run(run).font == F2

    def test_no_style_falls_back_to_defaults(self, engine):
        run = Paragraph().append("x").style("Code")
        run.style(None)

        assert engine.resolve_run(run).font == F0

    def test_fields_resolve_independently(self, styles, engine):
        run = Paragraph().append("x").style("Code")
        run.properties.font_size = 14

        effective = engine.resolve_run(run)

        assert effective.font == Font("Consolas", 14)
        assert effective.sources['font_size'] == "direct"
        assert effective.sources['font_name'] == "style:Code"

    def test_paragraph_style_run_formatting(self, styles, engine):
        heading = styles.add_style("Heading", StyleType.PARAGRAPH)
        heading.run_formatting.bold = True
        heading.run_formatting.font_name = "Arial"
        paragraph = Paragraph(style="Heading")
        plain = paragraph.append("plain")
        coded = paragraph.append("code").style("Code")

        assert engine.resolve_run(plain).bold is True
        assert engine.resolve_run(plain).font_name == "Arial"
        assert engine.resolve_run(plain).sources['bold'] == "paragraph-style:Heading"
        # the character style wins over the paragraph style
        assert engine.resolve_run(coded).font_name == "Consolas"
        assert engine.resolve_run(coded).bold is True

    def test_default_character_style(self, styles, engine):
        styles.add_style("Default Paragraph Font", StyleType.CHARACTER).run_formatting.italic = True
        styles.set_default_style("Default Paragraph Font", StyleType.CHARACTER)

        assert engine.resolve_run(Paragraph().append("x")).italic is True

    def test_fallback_constants(self):
        effective = StyleCascadeEngine(StyleManager()).resolve_run(Run("x"))

        assert effective.font == Font(FALLBACK_FONT_NAME, FALLBACK_FONT_SIZE)
        assert effective.bold is False
        assert effective.underline is UnderlineStyle.NONE
        assert effective.color == ColorValue.AUTO
        assert effective.shade_fill is None
        assert effective.sources['font_name'] == "fallback"

    def test_resolution_is_pure(self, styles, engine):
        run = Paragraph().append("x").style("Code")

        first = engine.resolve_run(run)
        second = engine.resolve_run(run)

        assert first == second
        assert run.properties.is_empty()
        assert styles.get_style("Code", StyleType.CHARACTER).run_formatting.font == F1

    def test_result_is_independent_of_sources(self, styles, engine):
        styles.defaults.run_formatting.border = Border("single", 1)
        effective = engine.resolve_run(Run("x"))
        effective.border.style = "double"

        assert styles.defaults.run_formatting.border.style.value == "single"


class TestParagraphCascade:
    """Paragraph resolution: direct, style chain, defaults, fallback."""

    def test_based_on_chain(self, styles, engine):
        normal = styles.add_style("Normal", StyleType.PARAGRAPH)
        normal.paragraph_formatting.alignment = "center"
        normal.paragraph_formatting.spacing_after = 8
        heading = styles.add_style("Heading", StyleType.PARAGRAPH, based_on="Normal")
        heading.paragraph_formatting.spacing_after = 12

        effective = engine.resolve_paragraph(Paragraph(style="Heading"))

        assert effective.alignment is Alignment.CENTER
        assert effective.spacing_after == Uom.from_points(12)
        assert effective.sources['alignment'] == "style:Normal"
        assert effective.sources['spacing_after'] == "style:Heading"

    def test_default_paragraph_style_for_unstyled(self, styles, engine):
        styles.add_style("Normal", StyleType.PARAGRAPH).paragraph_formatting.alignment = "both"
        styles.set_default_style("Normal", StyleType.PARAGRAPH)

        assert engine.resolve_paragraph(Paragraph()).alignment is Alignment.BOTH

    def test_document_defaults_then_fallback(self, styles, engine):
        styles.defaults.paragraph_formatting.spacing_after = 8

        effective = engine.resolve_paragraph(Paragraph())

        assert effective.spacing_after == Uom.from_points(8)
        assert effective.sources['spacing_after'] == "defaults"
        assert effective.alignment is Alignment.LEFT
        assert effective.line_spacing == Uom.from_dxa(240)
        assert effective.line_rule is LineRule.AUTO
        assert effective.sources['alignment'] == "fallback"

    def test_direct_hanging_suppresses_style_first_line(self, styles, engine):
        styles.add_style("Indented", StyleType.PARAGRAPH).paragraph_formatting.first_line_indent = 18
        paragraph = Paragraph(style="Indented")
        paragraph.properties.hanging_indent = 9

        effective = engine.resolve_paragraph(paragraph)

        assert effective.hanging_indent == Uom.from_points(9)
        assert effective.first_line_indent is None
        assert "first_line_indent" not in effective.sources

    def test_direct_first_line_suppresses_style_hanging(self, styles, engine):
        styles.add_style("Hanging", StyleType.PARAGRAPH).paragraph_formatting.hanging_indent = 18
        paragraph = Paragraph(style="Hanging")
        paragraph.properties.first_line_indent = 9

        effective = engine.resolve_paragraph(paragraph)

        assert effective.first_line_indent == Uom.from_points(9)
        assert effective.hanging_indent is None


class TestUnknownReferences:
    """Unknown style references fall back and are reported."""

    def test_unknown_paragraph_style(self, styles, engine):
        styles.defaults.paragraph_formatting.alignment = "right"

        effective = engine.resolve_paragraph(Paragraph(style="Missing"))

        assert effective.alignment is Alignment.RIGHT
        assert len(effective.diagnostics) == 1
        assert isinstance(effective.diagnostics[0], UnknownStyleReferenceError)
        assert effective.diagnostics[0].name == "Missing"

    def test_unknown_character_style(self, engine):
        effective = engine.resolve_run(Paragraph().append("x").style("Missing"))

        assert effective.font == F0
        assert [error.name for error in effective.diagnostics] == ["Missing"]

    def test_strict_mode_raises(self, styles):
        with pytest.raises(UnknownStyleReferenceError):
            StyleCascadeEngine(styles, strict=True).resolve_paragraph(Paragraph(style="Missing"))

    def test_missing_based_on_parent(self, styles, engine):
        orphan = styles.add_style("Orphan", StyleType.PARAGRAPH, based_on="Ghost")
        orphan.paragraph_formatting.alignment = "center"

        effective = engine.resolve_paragraph(Paragraph(style="Orphan"))

        assert effective.alignment is Alignment.CENTER
        assert effective.diagnostics[0].name == "Ghost"

    def test_based_on_cycle(self, styles, engine):
        styles.add_style("A", StyleType.PARAGRAPH, based_on="B")
        styles.add_style("B", StyleType.PARAGRAPH, based_on="A").paragraph_formatting.alignment = "center"

        effective = engine.resolve_paragraph(Paragraph(style="A"))

        assert effective.alignment is Alignment.CENTER
        assert len(effective.diagnostics) == 1
        assert "cycle" in str(effective.diagnostics[0])

    def test_style_type_must_match(self, engine):
        # "Code" is a character style only
        effective = engine.resolve_paragraph(Paragraph(style="Code"))

        assert effective.diagnostics[0].style_type == "paragraph"
