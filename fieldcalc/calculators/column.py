"""
Round column (Round Hole for truck materials).

π × (D/2)² × H × qty. Diameter in inches, height in feet.
"""

import math

from ..models import ShapeKind
from .base import BaseShapeCalculator


class ColumnCalculator(BaseShapeCalculator):

    shape = ShapeKind.COLUMN
    REQUIRED_FIELDS = ("diameter", "height")

    def cubic_feet(self, fields: dict, continuous: bool = False) -> float:
        diameter_ft = self.inches_to_feet(self.parse_positive(fields.get("diameter")))
        height_ft = self.parse_positive(fields.get("height"))
        quantity = self.parse_count(fields.get("quantity"))
        radius_ft = diameter_ft / 2
        return math.pi * radius_ft * radius_ft * height_ft * quantity
