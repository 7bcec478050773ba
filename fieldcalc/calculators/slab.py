"""
Slab (Pad / Area for truck materials).

L (ft) × W (ft) × thickness (in → ft).
"""

from ..models import ShapeKind
from .base import BaseShapeCalculator


class SlabCalculator(BaseShapeCalculator):

    shape = ShapeKind.SLAB
    REQUIRED_FIELDS = ("length", "width", "thickness")

    def cubic_feet(self, fields: dict, continuous: bool = False) -> float:
        length_ft = self.parse_positive(fields.get("length"))
        width_ft = self.parse_positive(fields.get("width"))
        thickness_ft = self.inches_to_feet(self.parse_positive(fields.get("thickness")))
        return length_ft * width_ft * thickness_ft
