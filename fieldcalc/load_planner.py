"""
Truck loads + remainder for the current pour.

Input: pour total (yd³), truck capacity, material, over-order %, rounding flag
Output: LoadPlan dict — display volume, truck count, remainder and its label

Concrete ALWAYS rounds loads up: a short truck means a cold joint.
Rock / sand / topsoil / asphalt follow Settings (Always Up / Always Down) or the
per-calc toggle when Settings say "Ask Each Time".
"""

import logging
import math
from typing import Optional

from .models import LoadRounding, Material
from .rounding import PLACEHOLDER, format_fixed

logger = logging.getLogger(__name__)

LABEL_UNASSIGNED = "unassigned"
LABEL_LAST_LOAD = "last_load"


def resolve_round_up(policy: LoadRounding, session_round_up: bool = True) -> bool:
    """Settings lock Up / Down; "ask" leaves it to the per-calc toggle."""
    if policy == LoadRounding.UP:
        return True
    if policy == LoadRounding.DOWN:
        return False
    return bool(session_round_up)


def toggle_available(policy: LoadRounding, material: Material) -> bool:
    """The per-calc rounding toggle only exists for truck materials under "ask"."""
    return material != Material.CONCRETE and policy == LoadRounding.ASK


def buffer_multiplier(material: Material, over_order_pct: float) -> float:
    """Over-order buffer — materials only, never concrete."""
    if material != Material.CONCRETE and over_order_pct and over_order_pct > 0:
        return 1 + over_order_pct / 100
    return 1.0


def yards_text(yards: float) -> str:
    """'10.50 yd³', or a dash for a volume too large to show."""
    if not math.isfinite(yards):
        return PLACEHOLDER
    return "%s yd³" % format_fixed(yards, 2)


class LoadPlanner:
    """Turns the pour total into trucks. Pure math — holds no state."""

    def plan(self, total_yards: float, capacity: float, material: Material,
             over_order_pct: float = 0.0, round_up: bool = True) -> dict:
        """
        Example: 10 yd³ rock, 5% over-order, 9 yd trucks, round up
            display 10.50 yd³ -> 2 trucks, last load 1.50 yd³
        """
        display_yards = (total_yards or 0.0) * buffer_multiplier(material, over_order_pct)

        plan = {
            "display_yards": display_yards,
            "trucks": 0,
            "remainder_yards": 0.0,
            "remainder_label": None,
            "round_up": True if material == Material.CONCRETE else bool(round_up),
            "total_text": yards_text(display_yards),
            "trucks_text": "0 trucks",
            "remainder_text": "",
        }

        if display_yards == 0:
            return plan

        if not capacity or capacity <= 0:
            logger.warning("Truck capacity %r is not usable — load count skipped", capacity)
            plan["trucks"] = None
            plan["trucks_text"] = ""
            return plan

        raw_loads = display_yards / capacity
        if not math.isfinite(raw_loads):
            logger.warning("%r yd³ on %r yd trucks is too many loads to count", display_yards, capacity)
            plan["trucks"] = None
            plan["trucks_text"] = ""
            return plan

        if plan["round_up"]:
            trucks = math.ceil(raw_loads)
        else:
            trucks = math.floor(raw_loads)

        remainder = math.fmod(display_yards, capacity)

        plan["trucks"] = trucks
        plan["trucks_text"] = "%d trucks" % trucks
        plan["remainder_yards"] = remainder

        if remainder:
            if not plan["round_up"]:
                plan["remainder_label"] = LABEL_UNASSIGNED
                plan["remainder_text"] = "Unassigned: " + yards_text(remainder)
            else:
                plan["remainder_label"] = LABEL_LAST_LOAD
                plan["remainder_text"] = "Last load: " + yards_text(remainder)

        return plan
