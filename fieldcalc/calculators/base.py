"""
Abstract base class for all shape calculators.

Input: raw field dict for one shape (whatever the form sent)
Output: ShapeVolume dict — cubic feet, waste applied, cubic yards, display text

Incomplete input is NOT an error. A missing or non-positive dimension just
resets the current item to 0.00 yd³ until the user finishes typing.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from ..models import Material, ShapeKind, WASTE_MATERIALS
from ..rounding import format_fixed

logger = logging.getLogger(__name__)

CUBIC_FEET_PER_YARD = 27.0


class BaseShapeCalculator(ABC):
    """All shape calculators inherit from this."""

    shape: ShapeKind = None

    # Dimensions that must be present and > 0 for a result
    REQUIRED_FIELDS: tuple = ()

    @abstractmethod
    def cubic_feet(self, fields: dict, continuous: bool = False) -> Optional[float]:
        """
        Raw cubic feet for this shape, before waste.
        Returns None when the input is incomplete.
        """
        pass

    def calculate(self, fields: dict, material: Material = Material.CONCRETE,
                  waste_pct: float = 0.0, continuous: bool = False) -> dict:
        """
        Cubic yards for one shape.

        Waste applies to concrete and asphalt only; for rock / sand / topsoil the
        waste input is ignored (they use the over-order buffer instead).
        """
        fields = fields or {}
        applied_waste = self.effective_waste_pct(material, waste_pct)

        if any(self.parse_positive(fields.get(f)) is None for f in self.REQUIRED_FIELDS):
            return self.reset_result(applied_waste)

        cubic_feet = self.cubic_feet(fields, continuous=continuous)
        if not cubic_feet or cubic_feet <= 0:
            return self.reset_result(applied_waste)

        adjusted = cubic_feet * (1 + applied_waste / 100)
        cubic_yards = adjusted / CUBIC_FEET_PER_YARD
        # Dimensions so large the product overflows
        if not math.isfinite(cubic_yards):
            return self.reset_result(applied_waste)

        return {
            "shape": self.shape,
            "cubic_feet": cubic_feet,
            "adjusted_cubic_feet": adjusted,
            "waste_pct": applied_waste,
            "cubic_yards": cubic_yards,
            "display": self.yards_text(cubic_yards),
        }

    def reset_result(self, waste_pct: float = 0.0) -> dict:
        """The "incomplete input" state — shows 0.00 yd³, never an error."""
        logger.debug("%s: incomplete dimensions, current item reset", self.shape)
        return {
            "shape": self.shape,
            "cubic_feet": 0.0,
            "adjusted_cubic_feet": 0.0,
            "waste_pct": waste_pct,
            "cubic_yards": 0.0,
            "display": self.yards_text(0.0),
        }

    # --- Helper methods for all calculators ---

    def effective_waste_pct(self, material: Material, waste_pct) -> float:
        if material not in WASTE_MATERIALS:
            return 0.0
        waste = self.parse_number(waste_pct)
        return waste if waste > 0 else 0.0

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input. Blank or junk -> default."""
        if value is None:
            return default
        try:
            return float(str(value).strip())
        except (ValueError, TypeError):
            return default

    def parse_positive(self, value) -> Optional[float]:
        """A usable dimension: numeric and > 0. Anything else is None."""
        number = self.parse_number(value, default=0.0)
        if not math.isfinite(number) or number <= 0:
            return None
        return number

    def parse_count(self, value, default: int = 1) -> int:
        """Counts (runs, quantity) fall back to 1 when blank, zero or junk."""
        number = self.parse_number(value, default=0.0)
        if not math.isfinite(number) or number <= 0:
            return default
        return int(number)

    def inches_to_feet(self, inches: float) -> float:
        return inches / 12.0

    def yards_text(self, cubic_yards: float) -> str:
        return "%s yd³" % format_fixed(cubic_yards, 2)
