"""
Calculator host — the ordering pipeline for one active session.

    shape dimensions -> current item yd³ -> pour total -> trucks / tons / bags

The pour total is the only thing that accumulates. Everything else is
recomputed from current inputs + the current settings snapshot on every event.
Re-sync order: settings, then Shape, then Totals.
"""

import logging
import math
from typing import Optional

from .bag_mix import DEFAULT_BAG_SIZE_LBS, bags_text, estimate_bags, resolve_bag_size
from .calculators.registry import get_calculator, shape_label, shapes_for_material
from .densities import estimate_tons, tons_text
from .load_planner import LoadPlanner, resolve_round_up, toggle_available
from .models import CONCRETE_ONLY_SHAPES, Material, ShapeKind
from .pour import PourAccumulator
from .schemas import SettingsSnapshot

logger = logging.getLogger(__name__)

# Used only if settings never provide a capacity
FALLBACK_TRUCK_CAPACITY = 9.0

planner = LoadPlanner()


def order_summary(total_yards: float, material: Material, capacity: float,
                  over_order_pct: float, round_up: bool, densities: dict = None,
                  bags_enabled: bool = False, bag_size_lbs=DEFAULT_BAG_SIZE_LBS) -> dict:
    """
    Totals block: LoadPlan + tons (materials only) + bags (concrete, if enabled).
    Tons use the buffered display volume; bags use the un-buffered pour.
    """
    summary = planner.plan(total_yards, capacity, material, over_order_pct, round_up)
    summary.update({"tons": None, "tons_text": "", "bags": None, "bags_text": ""})

    if summary["display_yards"] == 0 or not math.isfinite(summary["display_yards"]):
        return summary

    if material != Material.CONCRETE:
        tons = estimate_tons(summary["display_yards"], material, densities)
        summary["tons"] = tons
        summary["tons_text"] = tons_text(tons)
    elif bags_enabled:
        bags = estimate_bags(total_yards, bag_size_lbs)
        summary["bags"] = bags
        summary["bags_text"] = bags_text(bags, bag_size_lbs)

    return summary


class CalculatorSession:

    def __init__(self, settings: Optional[SettingsSnapshot] = None):
        self.shape = ShapeKind.SLAB
        self.material = Material.CONCRETE
        self.fields = {shape: {} for shape in ShapeKind}
        self.waste_pct = 0.0
        self.continuous = False
        self.round_up_loads = True
        self.truck_capacity = FALLBACK_TRUCK_CAPACITY
        self.bag_size_lbs = DEFAULT_BAG_SIZE_LBS
        self.current = None
        self.current_yards = 0.0
        self.pour = PourAccumulator()
        self.apply_settings(settings or SettingsSnapshot())
        self.calculate()

    # --- Settings ---

    def apply_settings(self, settings: SettingsSnapshot) -> None:
        self.settings = settings
        self.truck_capacity = settings.trucks.default_capacity or self.truck_capacity
        self.over_order_pct = settings.trucks.over_order_pct
        self.bags_enabled = settings.features.enable_bags
        self.bag_size_lbs = resolve_bag_size(settings.features.bag_size_lbs)
        self.densities = settings.materials.as_dict()
        self.round_up_loads = resolve_round_up(settings.rounding.loads_default, self.round_up_loads)

    def resync(self, settings: SettingsSnapshot) -> dict:
        logger.info("Calculator re-sync: %s yd trucks, loads %s",
                    settings.trucks.default_capacity, settings.rounding.loads_default.value)
        self.apply_settings(settings)
        self.calculate()
        return self.totals()

    @property
    def rounding_toggle_available(self) -> bool:
        return toggle_available(self.settings.rounding.loads_default, self.material)

    # --- Input events ---

    def set_material(self, material) -> dict:
        self.material = Material(material)
        # Wall / curb are concrete-only: fall back to slab
        if self.material != Material.CONCRETE and self.shape in CONCRETE_ONLY_SHAPES:
            self.shape = ShapeKind.SLAB
            self.continuous = False
        return self.calculate()

    def set_shape(self, shape) -> dict:
        shape = ShapeKind(shape)
        if shape not in shapes_for_material(self.material):
            logger.warning("Shape %s is not available for %s — staying on %s",
                           shape.value, self.material.value, self.shape.value)
            return self.current
        self.shape = shape
        return self.calculate()

    def set_field(self, name: str, value, shape=None) -> dict:
        shape = ShapeKind(shape) if shape else self.shape
        self.fields[shape][name] = value
        return self.calculate()

    def set_fields(self, values: dict, shape=None) -> dict:
        shape = ShapeKind(shape) if shape else self.shape
        self.fields[shape].update(values or {})
        return self.calculate()

    def set_waste_pct(self, waste_pct) -> dict:
        self.waste_pct = waste_pct
        return self.calculate()

    def toggle_continuous(self) -> bool:
        self.continuous = not self.continuous
        if not self.continuous:
            self.fields[ShapeKind.FOOTING]["runs"] = 1
        self.calculate()
        return self.continuous

    def set_truck_capacity(self, capacity) -> dict:
        try:
            capacity = float(capacity)
        except (ValueError, TypeError):
            capacity = 0.0
        if capacity > 0:
            self.truck_capacity = capacity
        else:
            logger.warning("Truck capacity %r ignored — keeping %s", capacity, self.truck_capacity)
        return self.totals()

    def toggle_rounding(self) -> bool:
        """Per-calc Round Up / Round Down. Settings-locked policies ignore it."""
        if self.rounding_toggle_available:
            self.round_up_loads = not self.round_up_loads
        return self.round_up_loads

    def set_bag_size(self, bag_size_lbs) -> dict:
        self.bag_size_lbs = resolve_bag_size(bag_size_lbs)
        return self.totals()

    def add_current(self) -> dict:
        """Add Item — nothing happens until the current shape has a volume."""
        if self.current_yards:
            self.pour.add_current(self.current_yards)
            logger.debug("Added %.3f yd³, pour total %.3f", self.current_yards, self.pour.total())
        return self.totals()

    def add_volume(self, cubic_yards: float) -> dict:
        self.pour.add_current(cubic_yards)
        return self.totals()

    def clear_pour(self) -> dict:
        self.pour.clear()
        return self.totals()

    # --- Outputs ---

    def calculate(self) -> dict:
        calculator = get_calculator(self.shape)
        self.current = calculator.calculate(
            self.fields[self.shape],
            material=self.material,
            waste_pct=self.waste_pct,
            continuous=self.continuous,
        )
        self.current_yards = self.current["cubic_yards"]
        return self.current

    def totals(self) -> dict:
        return order_summary(
            self.pour.total(),
            self.material,
            self.truck_capacity,
            self.over_order_pct,
            self.round_up_loads,
            densities=self.densities,
            bags_enabled=self.bags_enabled,
            bag_size_lbs=self.bag_size_lbs,
        )

    def shape_options(self) -> list[dict]:
        return [{"shape": s, "label": shape_label(s, self.material)}
                for s in shapes_for_material(self.material)]
