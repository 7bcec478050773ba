"""
Approach (Ditch / Taper for truck materials).

W × L × average thickness — the slab tapers from top edge to bottom edge,
so we use (top + bottom) / 2. Thicknesses come in inches.
"""

from ..models import ShapeKind
from .base import BaseShapeCalculator


class ApproachCalculator(BaseShapeCalculator):

    shape = ShapeKind.APPROACH
    REQUIRED_FIELDS = ("width", "length", "top_thickness", "bottom_thickness")

    def cubic_feet(self, fields: dict, continuous: bool = False) -> float:
        width_ft = self.parse_positive(fields.get("width"))
        length_ft = self.parse_positive(fields.get("length"))
        top_ft = self.inches_to_feet(self.parse_positive(fields.get("top_thickness")))
        bottom_ft = self.inches_to_feet(self.parse_positive(fields.get("bottom_thickness")))
        average_thickness_ft = (top_ft + bottom_ft) / 2
        return width_ft * length_ft * average_thickness_ft
