"""
Tests for the Border, Font and OpaqueFragment value objects.
"""

import pytest
from lxml import etree

from docxtree.exceptions import InvalidMeasurementError
from docxtree.models.border import Border
from docxtree.models.font import Font
from docxtree.models.fragment import OpaqueFragment
from docxtree.utils.color_utils import ColorValue
from docxtree.utils.enums import BorderStyle
from docxtree.utils.units import Uom

W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


class TestBorder:
    """Test cases for Border."""

    def test_style_and_uom_constructor(self):
        border = Border(BorderStyle.SINGLE, Uom.from_points(1.5))

        assert border.style is BorderStyle.SINGLE
        assert border.size.eighths == 12

    def test_accepts_plain_values(self):
        border = Border("double", 0.5, "#FF0000", spacing=4, shadow=True)

        assert border.style is BorderStyle.DOUBLE
        assert border.size == Uom.from_points(0.5)
        assert border.color == ColorValue(rgb="FF0000")
        assert border.spacing.points == 4.0
        assert border.shadow

    def test_spacing_is_whole_points(self):
        assert Border("single", spacing=2.4).spacing.points == 2.0

    def test_default_border_is_empty(self):
        assert Border().is_empty()
        assert Border(style="none").is_empty()
        assert not Border(style="nil", size=1).is_empty()
        assert not Border(frame=True).is_empty()

    def test_empty_color_is_cleared(self):
        assert Border("single", color=ColorValue()).color is None

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            Border("wobbly")
        with pytest.raises(InvalidMeasurementError):
            Border("single", -1)
        with pytest.raises(TypeError):
            Border("single", shadow="yes")

    def test_content_equality(self):
        first = Border("single", 1, "000000")
        second = Border(BorderStyle.SINGLE, Uom.from_eighths(8), ColorValue(rgb="000000"))

        assert first == second
        assert first != Border("single", 2, "000000")

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Border())

    def test_copy_is_independent(self):
        original = Border("single", 1)
        clone = original.copy()
        clone.style = "dotted"

        assert original.style is BorderStyle.SINGLE
        assert clone is not original

    def test_to_dict(self):
        data = Border("single", 1.5, "00FF00", spacing=1).to_dict()

        assert data == {
            'style': 'single',
            'size': 12,
            'color': '00FF00',
            'spacing': 1,
            'shadow': False,
            'frame': False,
        }


class TestFont:
    """Test cases for Font."""

    def test_size_rounded_to_half_points(self):
        assert Font("Arial", 10.3).size == 10.5
        assert Font("Arial", 11).size == 11.0

    def test_partial_fonts(self):
        assert Font(name="Arial").size is None
        assert Font(size=9).name is None
        assert Font().is_empty

    def test_invalid_fonts(self):
        with pytest.raises(ValueError):
            Font("  ")
        with pytest.raises(InvalidMeasurementError):
            Font("Arial", 0)
        with pytest.raises(InvalidMeasurementError):
            Font("Arial", "12")

    def test_immutable(self):
        font = Font("Arial", 12)
        with pytest.raises(AttributeError):
            font.size = 14

    def test_str(self):
        assert str(Font("Consolas", 9)) == "Consolas 9pt"


class TestOpaqueFragment:
    """Test cases for OpaqueFragment."""

    def test_from_and_to_element(self):
        element = etree.fromstring(f'<w:widowControl xmlns:w="{W}" w:val="0"/>'.encode())
        fragment = OpaqueFragment.from_element(element)
        rebuilt = fragment.to_element()

        assert fragment.local_name == "widowControl"
        assert rebuilt.tag == f"{{{W}}}widowControl"
        assert rebuilt.get(f"{{{W}}}val") == "0"

    def test_fresh_element_each_time(self):
        fragment = OpaqueFragment.from_element(etree.fromstring(f'<w:x xmlns:w="{W}"/>'.encode()))

        assert fragment.to_element() is not fragment.to_element()

    def test_shell_of_drops_children(self):
        root = etree.fromstring(
            f'<w:document xmlns:w="{W}" xmlns:w14="urn:w14" w14:attr="1"><w:body><w:p/></w:body></w:document>'.encode()
        )
        shell = OpaqueFragment.shell_of(root).to_element()

        assert len(shell) == 0
        assert shell.get("{urn:w14}attr") == "1"
        assert shell.nsmap["w14"] == "urn:w14"

    def test_equality_by_xml(self):
        element = etree.fromstring(f'<w:x xmlns:w="{W}"/>'.encode())

        assert OpaqueFragment.from_element(element) == OpaqueFragment.from_element(element)
