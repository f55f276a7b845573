"""Common enumerations used across the docxtree models.

Member values are the WordprocessingML attribute strings, so an enum can be
written to XML as-is.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class XmlEnum(str, Enum):
    """String enum that can be coerced from members, values or names."""

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def coerce(cls, value: Any) -> "XmlEnum":
        """
        Coerce ``value`` into a member of this enumeration.

        Accepts a member, its XML value (case-insensitive) or its Python name.

        Raises:
            ValueError: if nothing matches
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            key = cls._aliases().get(key, key)
            lowered = key.lower()
            for member in cls:
                if member.value.lower() == lowered or member.name.lower() == lowered:
                    return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")

    def __str__(self) -> str:
        return self.value


class StyleType(XmlEnum):
    """High-level style families defined by Word processing documents."""

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


class Alignment(XmlEnum):
    """Paragraph justification (``w:jc``)."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    BOTH = "both"
    DISTRIBUTE = "distribute"
    START = "start"
    END = "end"
    NUM_TAB = "numTab"
    MEDIUM_KASHIDA = "mediumKashida"
    HIGH_KASHIDA = "highKashida"
    LOW_KASHIDA = "lowKashida"
    THAI_DISTRIBUTE = "thaiDistribute"


class LineRule(XmlEnum):
    """Interpretation of ``w:spacing/@w:line``."""

    AUTO = "auto"
    EXACT = "exact"
    AT_LEAST = "atLeast"


class BorderStyle(XmlEnum):
    """Line styles for paragraph, run and table borders."""

    NONE = "nil"
    SINGLE = "single"
    THICK = "thick"
    DOUBLE = "double"
    DOTTED = "dotted"
    DASHED = "dashed"
    DOT_DASH = "dotDash"
    DOT_DOT_DASH = "dotDotDash"
    TRIPLE = "triple"
    THIN_THICK_SMALL_GAP = "thinThickSmallGap"
    THICK_THIN_SMALL_GAP = "thickThinSmallGap"
    THIN_THICK_THIN_SMALL_GAP = "thinThickThinSmallGap"
    THIN_THICK_MEDIUM_GAP = "thinThickMediumGap"
    THICK_THIN_MEDIUM_GAP = "thickThinMediumGap"
    THIN_THICK_THIN_MEDIUM_GAP = "thinThickThinMediumGap"
    THIN_THICK_LARGE_GAP = "thinThickLargeGap"
    THICK_THIN_LARGE_GAP = "thickThinLargeGap"
    THIN_THICK_THIN_LARGE_GAP = "thinThickThinLargeGap"
    WAVE = "wave"
    DOUBLE_WAVE = "doubleWave"
    DASH_SMALL_GAP = "dashSmallGap"
    DASH_DOT_STROKED = "dashDotStroked"
    THREE_D_EMBOSS = "threeDEmboss"
    THREE_D_ENGRAVE = "threeDEngrave"
    OUTSET = "outset"
    INSET = "inset"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        # ``none`` and ``nil`` are synonyms in the schema
        return {"none": "nil"}


class ShadePattern(XmlEnum):
    """Cross-hatch patterns laid over a shading fill (``w:shd/@w:val``)."""

    CLEAR = "clear"
    NONE = "nil"
    SOLID = "solid"
    DIAGONAL_CROSS = "diagCross"
    DIAGONAL_STRIPE = "diagStripe"
    HORIZONTAL_CROSS = "horzCross"
    HORIZONTAL_STRIPE = "horzStripe"
    REVERSE_DIAGONAL_STRIPE = "reverseDiagStripe"
    VERTICAL_STRIPE = "vertStripe"
    THIN_DIAGONAL_CROSS = "thinDiagCross"
    THIN_DIAGONAL_STRIPE = "thinDiagStripe"
    THIN_HORIZONTAL_CROSS = "thinHorzCross"
    THIN_HORIZONTAL_STRIPE = "thinHorzStripe"
    THIN_REVERSE_DIAGONAL_STRIPE = "thinReverseDiagStripe"
    THIN_VERTICAL_STRIPE = "thinVertStripe"
    PERCENT_5 = "pct5"
    PERCENT_10 = "pct10"
    PERCENT_12 = "pct12"
    PERCENT_15 = "pct15"
    PERCENT_20 = "pct20"
    PERCENT_25 = "pct25"
    PERCENT_30 = "pct30"
    PERCENT_35 = "pct35"
    PERCENT_37 = "pct37"
    PERCENT_40 = "pct40"
    PERCENT_45 = "pct45"
    PERCENT_50 = "pct50"
    PERCENT_55 = "pct55"
    PERCENT_60 = "pct60"
    PERCENT_62 = "pct62"
    PERCENT_65 = "pct65"
    PERCENT_70 = "pct70"
    PERCENT_75 = "pct75"
    PERCENT_80 = "pct80"
    PERCENT_85 = "pct85"
    PERCENT_87 = "pct87"
    PERCENT_90 = "pct90"
    PERCENT_95 = "pct95"


class UnderlineStyle(XmlEnum):
    """Underline styles (``w:u/@w:val``)."""

    NONE = "none"
    SINGLE = "single"
    WORDS = "words"
    DOUBLE = "double"
    THICK = "thick"
    DOTTED = "dotted"
    DOTTED_HEAVY = "dottedHeavy"
    DASH = "dash"
    DASHED_HEAVY = "dashedHeavy"
    DASH_LONG = "dashLong"
    DASH_LONG_HEAVY = "dashLongHeavy"
    DOT_DASH = "dotDash"
    DASH_DOT_HEAVY = "dashDotHeavy"
    DOT_DOT_DASH = "dotDotDash"
    DASH_DOT_DOT_HEAVY = "dashDotDotHeavy"
    WAVE = "wave"
    WAVY_HEAVY = "wavyHeavy"
    WAVY_DOUBLE = "wavyDouble"


class BorderSide(XmlEnum):
    """Border slots of a paragraph (children of ``w:pBdr``), in schema order."""

    TOP = "top"
    LEFT = "left"
    BOTTOM = "bottom"
    RIGHT = "right"
    BETWEEN = "between"
    BAR = "bar"


class DocumentState(XmlEnum):
    """Lifecycle of a :class:`docxtree.document.Document`."""

    UNOPENED = "unopened"
    CREATED = "created"
    LOADED = "loaded"
    MODIFIED = "modified"
    SAVED = "saved"
