"""
Converter host — one active session across the three modes.

Re-sync (app visible again, restored from cache, settings changed elsewhere):
reload settings, then recalc every mode in a fixed order: Tape -> Slope -> Tons.
"""

import logging
from typing import Optional

from ..densities import estimate_tons
from ..models import ConverterMode, Material
from ..rounding import PLACEHOLDER, format_fixed
from ..schemas import SettingsSnapshot
from .slope import SlopeSolver
from .tape import TapeConverter

logger = logging.getLogger(__name__)


def yards_to_tons(yards, material: Material, densities: dict) -> tuple:
    """
    Yards -> tons mode. Returns (tons, display). Empty, zero or density-less
    input shows a dash — estimation math, not a scale ticket.
    """
    try:
        value = float(str(yards).strip()) if yards is not None else 0.0
    except ValueError:
        value = 0.0
    if not value:
        return None, PLACEHOLDER

    tons = estimate_tons(value, Material(material), densities)
    if tons is None:
        return None, PLACEHOLDER
    return tons, "%s tons" % format_fixed(tons, 1)


class ConverterSession:

    def __init__(self, settings: Optional[SettingsSnapshot] = None):
        self.settings = settings or SettingsSnapshot()
        self.tape = TapeConverter.from_settings(self.settings)
        self.slope = SlopeSolver()
        self.mode = ConverterMode.TAPE
        self.yards = ""
        self.tons_material = Material.ROCK
        self.tons = None
        self.tons_display = PLACEHOLDER

    def switch_mode(self, mode) -> dict:
        self.mode = ConverterMode(mode)
        return self.recalc_all()

    def set_yards(self, yards) -> dict:
        self.yards = "" if yards is None else str(yards)
        self.calc_tons()
        return self.state()

    def set_tons_material(self, material) -> dict:
        self.tons_material = Material(material)
        self.calc_tons()
        return self.state()

    def calc_tons(self) -> Optional[float]:
        self.tons, self.tons_display = yards_to_tons(
            self.yards, self.tons_material, self.settings.materials.as_dict())
        return self.tons

    def recalc_all(self) -> dict:
        """Tape (last edited direction), then slope, then tons."""
        self.tape.recalc()
        # Stale tape output must not linger behind another mode
        if self.mode != ConverterMode.TAPE:
            self.tape.clear_pretty()
        self.slope.solve()
        self.calc_tons()
        return self.state()

    def resync(self, settings: SettingsSnapshot) -> dict:
        """Reload settings and make every mode match them."""
        logger.info("Converter re-sync: precision 1/%d, tape mode %s",
                    settings.rounding.frac_precision, settings.rounding.tape_mode.value)
        self.settings = settings
        self.tape.apply_settings(settings)
        return self.recalc_all()

    def state(self) -> dict:
        return {
            "mode": self.mode,
            "tape": self.tape.state(),
            "slope": self.slope.state(),
            "tons": {"yards": self.yards, "material": self.tons_material,
                     "tons": self.tons, "display": self.tons_display},
        }
