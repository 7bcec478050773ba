"""
Calculator registry — maps ShapeKind to calculator classes,
plus the material-dependent shape set and labels.
"""

from ..models import CONCRETE_ONLY_SHAPES, Material, ShapeKind
from .approach import ApproachCalculator
from .base import BaseShapeCalculator
from .column import ColumnCalculator
from .curb import CurbCalculator
from .footing import FootingCalculator
from .slab import SlabCalculator
from .wall import WallCalculator

CALCULATOR_REGISTRY: dict[ShapeKind, type] = {
    ShapeKind.SLAB: SlabCalculator,
    ShapeKind.FOOTING: FootingCalculator,
    ShapeKind.WALL: WallCalculator,
    ShapeKind.CURB: CurbCalculator,
    ShapeKind.APPROACH: ApproachCalculator,
    ShapeKind.COLUMN: ColumnCalculator,
}

LABELS_CONCRETE = {
    ShapeKind.SLAB: "Slab",
    ShapeKind.FOOTING: "Footing",
    ShapeKind.WALL: "Wall / Column",
    ShapeKind.CURB: "Curb",
    ShapeKind.APPROACH: "Approach",
    ShapeKind.COLUMN: "Column (round)",
}

# Same math, named the way a truck-material crew talks about it
LABELS_TRUCK = {
    ShapeKind.SLAB: "Pad / Area",
    ShapeKind.FOOTING: "Trench / Strip",
    ShapeKind.APPROACH: "Ditch / Taper",
    ShapeKind.COLUMN: "Round Hole",
}


def get_calculator(shape) -> BaseShapeCalculator:
    """Returns an instance of the calculator for a shape, or raises ValueError."""
    try:
        shape = ShapeKind(shape)
    except ValueError:
        raise ValueError(
            f"No calculator registered for shape: {shape}. "
            f"Available: {[s.value for s in CALCULATOR_REGISTRY]}"
        )
    return CALCULATOR_REGISTRY[shape]()


def shapes_for_material(material: Material) -> list[ShapeKind]:
    """Wall and curb are concrete-only."""
    if material == Material.CONCRETE:
        return list(CALCULATOR_REGISTRY)
    return [s for s in CALCULATOR_REGISTRY if s not in CONCRETE_ONLY_SHAPES]


def shape_label(shape: ShapeKind, material: Material) -> str:
    if material != Material.CONCRETE and shape in LABELS_TRUCK:
        return LABELS_TRUCK[shape]
    return LABELS_CONCRETE[shape]
