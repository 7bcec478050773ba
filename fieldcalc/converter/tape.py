"""
Tape mode — two-way converter between the engineer's rule and a tape measure.

ENGINEER side: decimal feet, shown to tenths (0.1 ft).
TAPE side:     feet + whole inches + fraction, snapped to the precision step.

Whichever side the user typed into is left exactly as typed. Only the other
side is rewritten, and only the rewritten fields are marked "auto" (result).

Snap step is 1/denominator inch: Settings precision (1/16, 1/8, 1/4) unless a
snap override is picked for this session. Round Up uses the ceiling step,
otherwise the nearest step.
"""

import logging
import math
from typing import Optional

from ..models import TapeMode, TapeSide
from ..rounding import PLACEHOLDER, format_fixed, snap_steps

logger = logging.getLogger(__name__)

# Snap override buttons (denominators)
SNAP_OVERRIDES = (2, 4, 8, 16, 32)

# A typed fraction can never be a whole inch on its own; overflow only
# happens through the snap/carry step.
MAX_FRACTION_INCHES = 0.999999

TAPE_FIELDS = ("feet", "inches", "fraction")


def parse_fraction(raw) -> float:
    """
    Parse a fraction field into decimal inches.

    Accepts "1/32", "3/16", "0.125" or "" (0). Anything unusable is 0.
    Values are clamped to [0, 0.999999].
    """
    if raw is None:
        return 0.0
    text = str(raw).strip()
    if text in ("", "-", PLACEHOLDER):
        return 0.0

    if "/" not in text:
        value = _parse_float(text)
    else:
        parts = text.split("/")
        if len(parts) != 2:
            return 0.0
        numerator = _parse_float(parts[0])
        denominator = _parse_float(parts[1])
        if numerator is None or not denominator:
            return 0.0
        value = numerator / denominator

    if value is None:
        return 0.0
    return min(MAX_FRACTION_INCHES, max(0.0, value))


def parts_from_steps(steps: int, denominator: int) -> dict:
    """
    Split a whole number of 1/denominator-inch steps into feet, inches and a
    reduced fraction. Carries fall out of the integer division:
    16/16" becomes the next inch, 12" becomes the next foot.
    """
    feet, remainder = divmod(steps, 12 * denominator)
    inches, numerator = divmod(remainder, denominator)
    if numerator:
        common = math.gcd(numerator, denominator)
        numerator, denominator = numerator // common, denominator // common
    return {
        "feet": feet,
        "inches": inches,
        "fraction_numerator": numerator,
        "fraction_denominator": denominator,
    }


def fraction_text(parts: dict) -> str:
    if not parts["fraction_numerator"]:
        return ""
    return "%d/%d" % (parts["fraction_numerator"], parts["fraction_denominator"])


def format_tape(parts: dict) -> str:
    """1' 0 1/4" or 1' 0" when there is no fraction."""
    frac = fraction_text(parts)
    if frac:
        return "%d' %d %s\"" % (parts["feet"], parts["inches"], frac)
    return "%d' %d\"" % (parts["feet"], parts["inches"])


def _parse_float(raw) -> Optional[float]:
    try:
        value = float(str(raw).strip())
    except (ValueError, TypeError):
        return None
    if not math.isfinite(value):
        return None
    return value


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


class TapeConverter:
    """Tape mode state. Feed it input events; read state() back."""

    def __init__(self, frac_precision: int = 16, round_up: bool = False):
        self.frac_precision = frac_precision
        self.round_up = round_up
        self.snap_override = None
        self.reset()

    @classmethod
    def from_settings(cls, settings) -> "TapeConverter":
        converter = cls()
        converter.apply_settings(settings)
        return converter

    # --- Preferences ---

    def apply_settings(self, settings) -> None:
        """Precision + default tape mode (exact unless Settings say up)."""
        self.frac_precision = settings.rounding.frac_precision
        self.round_up = settings.rounding.tape_mode == TapeMode.UP

    @property
    def snap_denominator(self) -> int:
        return self.snap_override or self.frac_precision

    def set_round_up(self, round_up: bool) -> dict:
        self.round_up = bool(round_up)
        return self.recalc()

    def toggle_round_up(self) -> dict:
        return self.set_round_up(not self.round_up)

    def set_snap_override(self, denominator: Optional[int]) -> dict:
        """None goes back to the Settings precision."""
        if denominator is not None and denominator not in SNAP_OVERRIDES:
            logger.warning("Snap 1/%s is not offered — keeping 1/%d", denominator, self.snap_denominator)
            return self.state()
        self.snap_override = denominator
        return self.recalc()

    # --- Input events ---

    def edit_engineer(self, value) -> dict:
        self.last_edited = TapeSide.ENGINEER
        self.engineer = _text(value)
        return self.recalc()

    def edit_feet(self, value) -> dict:
        self.last_edited = TapeSide.TAPE
        self.feet = _text(value)
        return self.recalc()

    def edit_inches(self, value) -> dict:
        self.last_edited = TapeSide.TAPE
        self.inches = _text(value)
        return self.recalc()

    def edit_fraction(self, value) -> dict:
        self.last_edited = TapeSide.TAPE
        self.fraction = _text(value)
        self.fraction_inches = parse_fraction(self.fraction)
        return self.recalc()

    def reset(self) -> dict:
        self.engineer = ""
        self.feet = ""
        self.inches = ""
        self.fraction = ""
        self.fraction_inches = 0.0
        self.pretty = PLACEHOLDER
        self.auto = set()
        self.parts = None
        self.decimal_feet = None
        self.snap_override = None
        self.last_edited = TapeSide.ENGINEER
        return self.state()

    def clear_pretty(self) -> None:
        self.pretty = PLACEHOLDER
        self.auto.discard("pretty")

    # --- Core calculations ---

    def recalc(self) -> dict:
        """Run whichever direction was last edited."""
        if self.last_edited == TapeSide.ENGINEER:
            self.auto.discard("engineer")
            self._engineer_to_tape()
        else:
            self.auto.difference_update(TAPE_FIELDS)
            self._tape_to_engineer()
        return self.state()

    def _engineer_to_tape(self) -> None:
        raw = self.engineer.strip()

        # Cleared engineer -> clear the tape outputs too (blank, not zero)
        if raw == "":
            self.feet = ""
            self.inches = ""
            self.fraction = ""
            self.fraction_inches = 0.0
            self._clear_result()
            self.auto.difference_update(TAPE_FIELDS)
            return

        decimal_feet = _parse_float(raw)
        if decimal_feet is None or decimal_feet < 0:
            logger.debug("Engineer input %r ignored", raw)
            return

        denominator = self.snap_denominator
        steps = self._snap(decimal_feet * 12)
        if steps is None:
            logger.debug("Engineer input %r too large to snap", raw)
            return
        parts = parts_from_steps(steps, denominator)

        self.feet = str(parts["feet"])
        self.inches = str(parts["inches"])
        self.fraction = fraction_text(parts)
        self.fraction_inches = parse_fraction(self.fraction)
        self.auto.update(TAPE_FIELDS)
        self._set_result(steps, denominator, parts)

    def _tape_to_engineer(self) -> None:
        if self.feet.strip() == "" and self.inches.strip() == "" and self.fraction.strip() == "":
            self.engineer = ""
            self.auto.discard("engineer")
            self._clear_result()
            return

        feet = _parse_float(self.feet) or 0.0
        inches = _parse_float(self.inches) or 0.0
        total_inches = feet * 12 + inches + self.fraction_inches
        if total_inches < 0:
            logger.debug("Negative tape length ignored (%s)", total_inches)
            return

        denominator = self.snap_denominator
        steps = self._snap(total_inches)
        if steps is None:
            logger.debug("Tape length too large to snap (%s)", total_inches)
            return
        parts = parts_from_steps(steps, denominator)

        self._set_result(steps, denominator, parts)

        # Engineer rule = tenths
        self.engineer = format_fixed(self.decimal_feet, 1)
        self.auto.add("engineer")

    def _snap(self, total_inches: float) -> Optional[int]:
        """Whole snap steps, or None when the length cannot be counted in steps."""
        denominator = self.snap_denominator
        if not math.isfinite(total_inches * denominator):
            return None
        return snap_steps(total_inches, 1 / denominator, self.round_up)

    def _set_result(self, steps: int, denominator: int, parts: dict) -> None:
        self.parts = parts
        self.decimal_feet = steps / denominator / 12
        self.pretty = format_tape(parts)
        self.auto.add("pretty")

    def _clear_result(self) -> None:
        self.parts = None
        self.decimal_feet = None
        self.clear_pretty()

    def state(self) -> dict:
        return {
            "engineer": self.engineer,
            "feet": self.feet,
            "inches": self.inches,
            "fraction": self.fraction,
            "pretty": self.pretty,
            "last_edited": self.last_edited,
            "auto_fields": sorted(self.auto),
            "decimal_feet": self.decimal_feet,
            "parts": self.parts,
            "round_up": self.round_up,
            "snap_denominator": self.snap_denominator,
        }
