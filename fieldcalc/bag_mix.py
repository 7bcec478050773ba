"""
Bag mix helper (concrete only) — for crews mixing bags instead of ordering ready-mix.

Yields are commonly-used jobsite estimates per bag, not lab-certified.
"""

import logging
import math
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BAG_SIZE_LBS = 80

# Bag size (lb) -> cubic feet of placed concrete per bag
BAG_YIELD_FT3 = {
    40: 0.30,
    50: 0.375,
    60: 0.45,
    80: 0.60,
    90: 0.675,
}


def resolve_bag_size(bag_size_lbs) -> int:
    """Return a bag size from the yield table, falling back to 80 lb."""
    try:
        size = int(float(bag_size_lbs))
    except (ValueError, TypeError):
        size = None
    if size not in BAG_YIELD_FT3:
        logger.warning("Unknown bag size %r — using %d lb", bag_size_lbs, DEFAULT_BAG_SIZE_LBS)
        return DEFAULT_BAG_SIZE_LBS
    return size


def estimate_bags(total_yards: float, bag_size_lbs=DEFAULT_BAG_SIZE_LBS) -> Optional[int]:
    """
    Bags needed for the un-buffered pour total. Always rounds UP — a short bag
    means a cold joint. Returns None (not 0) when there is nothing poured.
    """
    yards = float(total_yards or 0)
    if not math.isfinite(yards) or yards <= 0:
        return None
    cubic_feet = yards * 27
    yield_ft3 = BAG_YIELD_FT3[resolve_bag_size(bag_size_lbs)]
    bags = cubic_feet / yield_ft3
    if not math.isfinite(bags):
        return None
    return math.ceil(bags)


def bags_text(bags: Optional[int], bag_size_lbs=DEFAULT_BAG_SIZE_LBS) -> str:
    if bags is None:
        return ""
    return "Bag mix estimate: ~%d bags (%d lb)" % (bags, resolve_bag_size(bag_size_lbs))
