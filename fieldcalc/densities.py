# Bulk material densities — tons per cubic yard, loose/dry estimates.
# Moisture + gradation change real tonnage; the scale ticket wins.

import logging
import math
from typing import Optional

from .models import Material
from .rounding import format_fixed, round_to_step

logger = logging.getLogger(__name__)

# Concrete is ordered by the yard, never by weight — no density on purpose.
DEFAULT_DENSITIES = {
    Material.ROCK: 1.35,
    Material.SAND: 1.30,
    Material.TOPSOIL: 0.90,
    Material.ASPHALT: 1.25,
}

# Material preset slider range
DENSITY_MIN = 0.50
DENSITY_MAX = 2.00
DENSITY_STEP = 0.05


def clamp_density(value: float) -> float:
    """Clamp a density to the preset range and snap it to the 0.05 grid."""
    clamped = min(DENSITY_MAX, max(DENSITY_MIN, value))
    return round_to_step(clamped, DENSITY_STEP)


def density_for(material: Material, densities: Optional[dict] = None) -> Optional[float]:
    """
    Density for a material, preferring the settings overrides.
    Returns None for concrete or any material without a usable density.
    """
    if material == Material.CONCRETE:
        return None
    if densities:
        value = densities.get(material)
        if value:
            return float(value)
    return DEFAULT_DENSITIES.get(material)


def estimate_tons(yards: float, material: Material, densities: Optional[dict] = None) -> Optional[float]:
    """
    Estimated tons for a (display) volume in cubic yards.
    None when the material has no density or there is no volume.
    """
    density = density_for(material, densities)
    if not density:
        logger.debug("No density for %s — tonnage suppressed", material)
        return None
    if not yards or yards <= 0:
        return None
    tons = yards * density
    return tons if math.isfinite(tons) else None


def tons_text(tons: Optional[float]) -> str:
    """'Estimated: 12.3 tons' or empty when there is nothing to estimate."""
    if tons is None:
        return ""
    return "Estimated: %s tons" % format_fixed(tons, 1)
