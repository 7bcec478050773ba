"""
Footing (Trench / Strip for truck materials).

(L × runs) × W × D. Width and depth come in inches.
Runs only count when continuous mode is on — otherwise a single run.
"""

from ..models import ShapeKind
from .base import BaseShapeCalculator


class FootingCalculator(BaseShapeCalculator):

    shape = ShapeKind.FOOTING
    REQUIRED_FIELDS = ("length", "width", "depth")

    def cubic_feet(self, fields: dict, continuous: bool = False) -> float:
        length_ft = self.parse_positive(fields.get("length"))
        width_ft = self.inches_to_feet(self.parse_positive(fields.get("width")))
        depth_ft = self.inches_to_feet(self.parse_positive(fields.get("depth")))
        runs = self.parse_count(fields.get("runs")) if continuous else 1
        return (length_ft * runs) * width_ft * depth_ft
