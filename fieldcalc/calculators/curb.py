"""
Curb (concrete only).

Cross-section area (ft², from the curb type table) × length (ft).
The form may send either a preset key or the area itself.
"""

from typing import Optional

from ..models import ShapeKind
from .base import BaseShapeCalculator

# Curb type -> (label, cross-section ft²). Nominal profiles, chamfers ignored.
CURB_PRESETS = {
    "curb_6x12": ("6\" x 12\" straight curb", 0.50),
    "curb_6x18": ("6\" x 18\" straight curb", 0.75),
    "curb_6x24": ("6\" x 24\" straight curb", 1.00),
    "curb_gutter_24": ("6\" curb + 24\" gutter", 1.50),
    "curb_gutter_30": ("6\" curb + 30\" gutter", 1.75),
}


def curb_area(curb_type) -> Optional[float]:
    """Resolve a curb type to ft²: preset key first, then a raw number."""
    if curb_type is None:
        return None
    key = str(curb_type).strip()
    if key in CURB_PRESETS:
        return CURB_PRESETS[key][1]
    try:
        area = float(key)
    except ValueError:
        return None
    return area if area > 0 else None


class CurbCalculator(BaseShapeCalculator):

    shape = ShapeKind.CURB
    REQUIRED_FIELDS = ("length",)

    def cubic_feet(self, fields: dict, continuous: bool = False) -> Optional[float]:
        area_ft2 = curb_area(fields.get("curb_type"))
        if area_ft2 is None:
            return None
        length_ft = self.parse_positive(fields.get("length"))
        return area_ft2 * length_ft
