"""
Wall (concrete only). L (ft) × H (ft) × thickness (in → ft).
"""

from ..models import ShapeKind
from .base import BaseShapeCalculator


class WallCalculator(BaseShapeCalculator):

    shape = ShapeKind.WALL
    REQUIRED_FIELDS = ("length", "height", "thickness")

    def cubic_feet(self, fields: dict, continuous: bool = False) -> float:
        length_ft = self.parse_positive(fields.get("length"))
        height_ft = self.parse_positive(fields.get("height"))
        thickness_ft = self.inches_to_feet(self.parse_positive(fields.get("thickness")))
        return length_ft * height_ft * thickness_ft
