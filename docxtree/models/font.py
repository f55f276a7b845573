"""Font value object."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidMeasurementError


@dataclass(frozen=True)
class Font:
    """
    Font family and size.

    Either part may be absent so that a style can override only the family
    or only the size; resolution fills the gaps from the next source.

    Attributes:
        name: font family name (``w:rFonts``)
        size: size in points (``w:sz``, stored in half-points)
    """

    name: Optional[str] = None
    size: Optional[float] = None

    def __post_init__(self) -> None:
        if self.name is not None:
            if not isinstance(self.name, str) or not self.name.strip():
                raise ValueError("Font name must be a non-empty string")
        if self.size is not None:
            if isinstance(self.size, bool) or not isinstance(self.size, (int, float)):
                raise InvalidMeasurementError("Font size must be a number", repr(self.size))
            if not math.isfinite(self.size) or self.size <= 0:
                raise InvalidMeasurementError("Font size must be positive", repr(self.size))
            # sizes are stored in half-points
            half_points = math.floor(self.size * 2 + 0.5)
            object.__setattr__(self, "size", half_points / 2)

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.size is None

    def __str__(self) -> str:
        if self.size is None:
            return self.name or ""
        return f"{self.name or ''} {self.size:g}pt".strip()
