"""
Units of measure for DOCX documents.

WordprocessingML avoids floating point by storing lengths in integer
subunits, and the subunit depends on the field: border widths are eighths of
a point, spacing and indentation are twentieths of a point (dxa, "twips"),
font sizes are half-points. :class:`Uom` keeps every length as an integer
count of 1/40 point, the least common multiple of those subunits, so each of
them converts exactly.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from typing import Any, Union

from ..exceptions import InvalidMeasurementError

Number = Union[int, float, Decimal]

# Canonical resolution: 1/40 point
UNITS_PER_POINT = 40

EIGHTHS_PER_POINT = 8
DXA_PER_POINT = 20
HALF_POINTS_PER_POINT = 2
POINTS_PER_INCH = 72
EMU_PER_POINT = 12700
CM_PER_INCH = Decimal("2.54")


def round_half_away(value: Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _to_decimal(value: Any, unit: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidMeasurementError("Measurement must be a number", f"{unit}={value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidMeasurementError("Measurement must be finite", f"{unit}={value!r}")
    try:
        # str() keeps 1.1 as 1.1 instead of its binary expansion
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError) as exc:
        raise InvalidMeasurementError("Measurement is not a number", f"{unit}={value!r}") from exc
    if not result.is_finite():
        raise InvalidMeasurementError("Measurement must be finite", f"{unit}={value!r}")
    if result < 0:
        raise InvalidMeasurementError("Measurement must not be negative", f"{unit}={value!r}")
    return result


class Uom:
    """
    Immutable, non-negative length.

    Equality and hashing are structural, on the canonical 1/40 pt count.

    Examples:
        >>> Uom.from_points(1.5).size
        12
        >>> Uom.from_dxa(240).points
        12.0
    """

    __slots__ = ("_units",)

    def __init__(self, units: int):
        """
        Args:
            units: length in 1/40 point; prefer the ``from_*`` constructors
        """
        if isinstance(units, bool) or not isinstance(units, int):
            raise InvalidMeasurementError("Canonical units must be an integer", repr(units))
        if units < 0:
            raise InvalidMeasurementError("Measurement must not be negative", repr(units))
        object.__setattr__(self, "_units", units)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Uom is immutable")

    # ------------------------------------------------------------------
    @classmethod
    def _scaled(cls, value: Any, per_point: Number, unit: str) -> "Uom":
        amount = _to_decimal(value, unit)
        return cls(round_half_away(amount * UNITS_PER_POINT / Decimal(per_point)))

    @classmethod
    def from_points(cls, points: Number) -> "Uom":
        """Length from points."""
        return cls._scaled(points, 1, "points")

    @classmethod
    def from_eighths(cls, eighths: Number) -> "Uom":
        """Length from eighths of a point (border width subunit)."""
        return cls._scaled(eighths, EIGHTHS_PER_POINT, "eighths")

    @classmethod
    def from_dxa(cls, dxa: Number) -> "Uom":
        """Length from twentieths of a point (spacing and indentation subunit)."""
        return cls._scaled(dxa, DXA_PER_POINT, "dxa")

    @classmethod
    def from_half_points(cls, half_points: Number) -> "Uom":
        """Length from half-points (font size subunit)."""
        return cls._scaled(half_points, HALF_POINTS_PER_POINT, "half_points")

    @classmethod
    def from_inches(cls, inches: Number) -> "Uom":
        return cls._scaled(_to_decimal(inches, "inches") * POINTS_PER_INCH, 1, "inches")

    @classmethod
    def from_cm(cls, cm: Number) -> "Uom":
        inches = _to_decimal(cm, "cm") / CM_PER_INCH
        return cls._scaled(inches * POINTS_PER_INCH, 1, "cm")

    @classmethod
    def from_emu(cls, emu: Number) -> "Uom":
        return cls._scaled(emu, EMU_PER_POINT, "emu")

    # ------------------------------------------------------------------
    def _in(self, per_point: int) -> Decimal:
        return Decimal(self._units) * per_point / UNITS_PER_POINT

    @property
    def units(self) -> int:
        """Canonical value in 1/40 point."""
        return self._units

    @property
    def points(self) -> float:
        return float(self._in(1))

    @property
    def eighths(self) -> int:
        return round_half_away(self._in(EIGHTHS_PER_POINT))

    @property
    def size(self) -> int:
        """Width in eighths of a point, the subunit of ``w:sz`` on borders."""
        return self.eighths

    @property
    def dxa(self) -> int:
        return round_half_away(self._in(DXA_PER_POINT))

    @property
    def half_points(self) -> int:
        return round_half_away(self._in(HALF_POINTS_PER_POINT))

    @property
    def whole_points(self) -> int:
        return round_half_away(self._in(1))

    @property
    def inches(self) -> float:
        return float(self._in(1) / POINTS_PER_INCH)

    @property
    def emu(self) -> int:
        return round_half_away(self._in(EMU_PER_POINT))

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Uom):
            return self._units == other._units
        return NotImplemented

    def __lt__(self, other: "Uom") -> bool:
        if not isinstance(other, Uom):
            return NotImplemented
        return self._units < other._units

    def __le__(self, other: "Uom") -> bool:
        if not isinstance(other, Uom):
            return NotImplemented
        return self._units <= other._units

    def __hash__(self) -> int:
        return hash(("Uom", self._units))

    def __add__(self, other: "Uom") -> "Uom":
        if not isinstance(other, Uom):
            return NotImplemented
        return Uom(self._units + other._units)

    def __repr__(self) -> str:
        return f"Uom(points={self.points:g})"

    def __copy__(self) -> "Uom":
        return self

    def __deepcopy__(self, memo: dict) -> "Uom":
        return self

    def __reduce__(self):
        return (Uom, (self._units,))


def coerce_uom(value: Any, field_name: str) -> Uom:
    """
    Accept a :class:`Uom` or a plain number of points.

    Raises:
        InvalidMeasurementError: for negative or non-finite numbers
        TypeError: for anything else
    """
    if isinstance(value, Uom):
        return value
    if isinstance(value, (Real, Decimal)) and not isinstance(value, bool):
        return Uom.from_points(value)
    raise TypeError(f"{field_name} expects a Uom or a number of points, got {type(value).__name__}")
